"""Atomic installation of rendered resolver configuration."""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from .errors import PublishError, PublishStep

LOG = logging.getLogger(__name__)

DEFAULT_RESOLV_CONF = Path("/etc/resolv.conf")
DEFAULT_TEMP_SUFFIX = ".tmp"

ModifyPolicy = Callable[[], bool]
RefreshHook = Callable[[], None]


@dataclass
class PublishResult:
    """Outcome of a publish attempt."""

    config_text: str
    output_path: Path
    written: bool = False
    error: Optional[PublishError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ResolvConfPolicy:
    """Decide whether resolv.conf may be rewritten.

    Management can be switched off statically through ``manage`` or at runtime
    by creating ``disable_flag``.  The flag is checked on every publish.
    """

    def __init__(self, manage: bool = True, disable_flag: Optional[Path] = None) -> None:
        self._manage = manage
        self._disable_flag = Path(disable_flag) if disable_flag else None

    def __call__(self) -> bool:
        if not self._manage:
            return False
        if self._disable_flag is not None and self._disable_flag.exists():
            return False
        return True


class CommandRefreshHook:
    """Run an external command after resolv.conf has been replaced."""

    def __init__(self, argv: Sequence[str], timeout: float = 10.0) -> None:
        if not argv:
            raise ValueError("refresh command must not be empty")
        self._argv = list(argv)
        self._timeout = timeout

    def __call__(self) -> None:
        LOG.debug("Running resolver refresh command: %s", self._argv)
        subprocess.run(
            self._argv,
            check=True,
            timeout=self._timeout,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )


class ResolvConfPublisher:
    """Write resolver configuration through a temporary sibling file.

    The text is written to ``<path><temp_suffix>`` and moved over ``path`` with
    a single rename, so readers only ever see the previous file or the
    complete new one.
    """

    def __init__(
        self,
        path: Path = DEFAULT_RESOLV_CONF,
        *,
        temp_suffix: str = DEFAULT_TEMP_SUFFIX,
        policy: Optional[ModifyPolicy] = None,
        refresh_hook: Optional[RefreshHook] = None,
    ) -> None:
        self._path = Path(path)
        self._temp_path = self._path.with_name(self._path.name + temp_suffix)
        self._policy = policy or ResolvConfPolicy()
        self._refresh_hook = refresh_hook

    @property
    def path(self) -> Path:
        return self._path

    @property
    def temp_path(self) -> Path:
        return self._temp_path

    def publish(self, config_text: str) -> PublishResult:
        result = PublishResult(config_text=config_text, output_path=self._path)

        if not self._policy():
            LOG.info(
                "Name servers changed but modification of %s is disabled",
                self._path,
            )
            return result

        try:
            fh = open(self._temp_path, "w", encoding="utf-8")
        except OSError as exc:
            result.error = PublishError.from_os_error(PublishStep.OPEN, self._temp_path, exc)
            return result

        error: Optional[PublishError] = None
        try:
            fh.write(config_text)
        except (OSError, UnicodeError) as exc:
            # Entries are not validated and may not encode.
            error = PublishError.from_os_error(PublishStep.WRITE, self._temp_path, exc)
        finally:
            try:
                fh.close()
            except OSError as exc:
                if error is None:
                    error = PublishError.from_os_error(PublishStep.CLOSE, self._temp_path, exc)

        if error is None:
            try:
                os.replace(self._temp_path, self._path)
            except OSError as exc:
                error = PublishError.from_os_error(PublishStep.RENAME, self._path, exc)

        if error is not None:
            result.error = error
            return result

        result.written = True
        self._notify()
        return result

    def _notify(self) -> None:
        if self._refresh_hook is None:
            return
        try:
            self._refresh_hook()
        except (OSError, subprocess.SubprocessError) as exc:
            LOG.warning("Resolver refresh after updating %s failed: %s", self._path, exc)
