"""Source registry that keeps resolv.conf in sync with active DNS records.

Callers hand in one :class:`ConfigRecord` per source and tag it with a role.
Every mutation triggers a full rebuild: all active records are merged into a
fresh composite, rendered and published.  Publish failures are logged and
never undo the bookkeeping; the next mutation (or :meth:`NamedManager.sync`)
will try again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import Lock
from typing import Dict, List, Optional

from .config import ConfigRecord, ConfigRole
from .errors import InvalidArgumentError, SourceNotFoundError
from .merge import build_composite
from .publisher import PublishResult, ResolvConfPublisher
from .resolv import ResolvConfRenderer

LOG = logging.getLogger(__name__)


@dataclass
class ManagerState:
    """Mutable bookkeeping tracked by the manager.

    ``records`` is keyed by ``id()`` of the record it holds.  The stored
    reference keeps the object alive, so the key stays unique for as long as
    the entry exists.
    """

    records: Dict[int, ConfigRecord] = field(default_factory=dict)
    vpn: Optional[ConfigRecord] = None
    device: Optional[ConfigRecord] = None
    last_publish: Optional[PublishResult] = None


class NamedManager:
    """Merge DNS records from all sources and publish resolv.conf."""

    def __init__(
        self,
        publisher: ResolvConfPublisher,
        renderer: Optional[ResolvConfRenderer] = None,
    ) -> None:
        self._publisher = publisher
        self._renderer = renderer or ResolvConfRenderer()
        self._state = ManagerState()
        self._lock = Lock()

    # ------------------------------------------------------------------
    # Record lifecycle
    # ------------------------------------------------------------------
    def register(self, record: ConfigRecord, role: ConfigRole = ConfigRole.PLAIN) -> bool:
        """Add ``record`` as an active source and rewrite resolv.conf.

        A record that is already active is not added again, but its role slot
        is still updated.  Replacing the VPN or best-device record leaves the
        previous one active as a plain source until it is unregistered.

        Returns ``False`` without publishing when ``record`` or ``role`` is
        not usable.
        """

        try:
            self._validate(record, role)
        except InvalidArgumentError as exc:
            LOG.warning("Ignoring DNS record registration: %s", exc)
            return False

        with self._lock:
            state = self._state
            if role is ConfigRole.VPN:
                state.vpn = record
            elif role is ConfigRole.BEST_DEVICE:
                state.device = record

            if id(record) not in state.records:
                state.records[id(record)] = record
                LOG.debug("Registered DNS record %s (%s)", record.describe(), role.name)
            else:
                LOG.debug("DNS record %s already registered", record.describe())

            self._rewrite()
        return True

    @staticmethod
    def _validate(record: ConfigRecord, role: ConfigRole) -> None:
        if not isinstance(record, ConfigRecord):
            raise InvalidArgumentError(f"expected a ConfigRecord, got {record!r}")
        if not isinstance(role, ConfigRole):
            raise InvalidArgumentError(f"unknown config role {role!r}")

    def unregister(self, record: ConfigRecord) -> bool:
        """Drop ``record`` and rewrite resolv.conf.

        Returns ``False`` without publishing when ``record`` is not active.
        """

        with self._lock:
            try:
                self._remove(record)
            except SourceNotFoundError as exc:
                LOG.debug("%s", exc)
                return False
            self._rewrite()
        return True

    def _remove(self, record: ConfigRecord) -> None:
        state = self._state
        if id(record) not in state.records or state.records[id(record)] is not record:
            raise SourceNotFoundError(f"DNS record {record!r} is not registered")

        del state.records[id(record)]
        if state.vpn is record:
            state.vpn = None
        if state.device is record:
            state.device = None
        LOG.debug("Unregistered DNS record %s", record.describe())

    def close(self) -> None:
        """Release every held record without touching resolv.conf."""

        with self._lock:
            LOG.debug("Releasing %d DNS records", len(self._state.records))
            self._state = ManagerState()

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def _rewrite(self) -> PublishResult:
        state = self._state
        composite = build_composite(state.vpn, state.device, state.records.values())
        text = self._renderer.render(composite)
        result = self._publisher.publish(text)
        state.last_publish = result

        if result.error is not None:
            LOG.warning("Could not commit DNS changes. Error: '%s'", result.error)
        elif result.written:
            LOG.info(
                "Updated %s (%d nameservers, %d search domains)",
                result.output_path,
                len(composite.nameservers),
                len(composite.searches),
            )
        return result

    def sync(self) -> PublishResult:
        """Force a rewrite of resolv.conf from the current records."""

        with self._lock:
            return self._rewrite()

    # ------------------------------------------------------------------
    # Introspection helpers (useful for tests / CLI)
    # ------------------------------------------------------------------
    @property
    def vpn(self) -> Optional[ConfigRecord]:
        return self._state.vpn

    @property
    def device(self) -> Optional[ConfigRecord]:
        return self._state.device

    @property
    def last_publish(self) -> Optional[PublishResult]:
        return self._state.last_publish

    def list_records(self) -> List[ConfigRecord]:
        return list(self._state.records.values())

    def get_rendered_config(self) -> Optional[str]:
        if self._state.last_publish:
            return self._state.last_publish.config_text
        return None
