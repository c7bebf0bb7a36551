"""File-based DNS source watcher."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from ipaddress import IPv4Address
from pathlib import Path
from threading import Event, Thread
from typing import Dict, Tuple

from named_manager.config import ConfigRecord, ConfigRole
from named_manager.manager import NamedManager

from .utils import parse_names, parse_nameservers, parse_role

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceSpec:
    """Desired DNS settings for one named source in the sources file."""

    name: str
    role: ConfigRole
    nameservers: Tuple[IPv4Address, ...]
    domains: Tuple[str, ...]
    searches: Tuple[str, ...]

    def to_record(self) -> ConfigRecord:
        return ConfigRecord(
            nameservers=self.nameservers,
            domains=self.domains,
            searches=self.searches,
            name=self.name,
        )


def _extract_state(payload: dict) -> Dict[str, SourceSpec]:
    if not isinstance(payload, dict):
        raise ValueError("sources file must contain a JSON object")
    sources = payload.get("sources")
    if sources is None:
        raise ValueError("sources file missing 'sources' key")

    state: Dict[str, SourceSpec] = {}
    for entry in sources:
        name = entry.get("name")
        if name is None:
            continue
        state[str(name)] = SourceSpec(
            name=str(name),
            role=parse_role(entry.get("role")),
            nameservers=tuple(parse_nameservers(entry.get("nameservers", []))),
            domains=tuple(parse_names(entry.get("domains", []), "domains")),
            searches=tuple(parse_names(entry.get("searches", []), "searches")),
        )
    return state


class FileSourceWatcher(Thread):
    """Poll a JSON sources file and keep the manager's records in step.

    A source keeps its :class:`ConfigRecord` for as long as its settings stay
    the same.  When a source changes, the old record is unregistered and a new
    one registered in its place.
    """

    def __init__(
        self,
        manager: NamedManager,
        path: Path,
        interval: float,
        stop_event: Event,
    ) -> None:
        super().__init__(daemon=True)
        self._manager = manager
        self._path = Path(path)
        self._interval = interval
        self._stop_event = stop_event
        self._specs: Dict[str, SourceSpec] = {}
        self._records: Dict[str, ConfigRecord] = {}

    def run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.poll()
            except Exception:  # pragma: no cover - logged below
                LOG.exception("file watcher encountered an error")
            self._stop_event.wait(self._interval)

    def poll(self) -> None:
        if not self._path.exists():
            LOG.debug("sources file %s does not exist yet", self._path)
            return

        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            LOG.warning("failed to parse sources file %s: %s", self._path, exc)
            return

        try:
            desired = _extract_state(payload)
        except (ValueError, AttributeError, TypeError) as exc:
            LOG.warning("invalid sources file %s: %s", self._path, exc)
            return

        for name in set(self._specs) - set(desired):
            LOG.debug("source %s removed", name)
            self._drop(name)

        for name, spec in desired.items():
            if self._specs.get(name) == spec:
                continue
            previous = self._records.get(name)
            record = spec.to_record()
            self._manager.register(record, spec.role)
            self._specs[name] = spec
            self._records[name] = record
            if previous is not None:
                # Drop the old record only once its replacement is active.
                LOG.debug("source %s changed", name)
                self._manager.unregister(previous)

    def _drop(self, name: str) -> None:
        del self._specs[name]
        self._manager.unregister(self._records.pop(name))

    def records(self) -> Dict[str, ConfigRecord]:
        return dict(self._records)
