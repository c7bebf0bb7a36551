"""DNS configuration data structures.

A :class:`ConfigRecord` is the snapshot of name-resolution settings handed in
by one source (a VPN connection, the best network device or any other zone).
Records are compared by identity only: registering the very same object twice
is a no-op while two records carrying identical values are distinct sources.

:class:`CompositeConfig` is the throw-away union of every active record that
gets rebuilt from scratch each time the resolver configuration is rewritten.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from ipaddress import IPv4Address
from typing import Iterable, List, Optional, Sequence, Union

Nameserver = Union[IPv4Address, str]


class ConfigRole(Enum):
    """How a record takes part in the merge ordering.

    The VPN record is always merged first and the best device second; every
    other record follows in registration order.
    """

    VPN = auto()
    BEST_DEVICE = auto()
    PLAIN = auto()


@dataclass(frozen=True, eq=False)
class ConfigRecord:
    """DNS settings contributed by a single source.

    Attributes
    ----------
    nameservers:
        IPv4 nameserver addresses in preference order.  Duplicates are kept.
    domains:
        Domain suffixes (the DHCP ``domain-name`` style contribution).
    searches:
        Explicit search domains.  When empty the ``domains`` act as searches.
    name:
        Optional label used in log messages.
    """

    nameservers: Sequence[Nameserver] = ()
    domains: Sequence[str] = ()
    searches: Sequence[str] = ()
    name: Optional[str] = None

    def __post_init__(self) -> None:
        # Freeze caller supplied lists so later edits cannot leak into a
        # registered record.
        object.__setattr__(self, "nameservers", tuple(self.nameservers))
        object.__setattr__(self, "domains", tuple(self.domains))
        object.__setattr__(self, "searches", tuple(self.searches))

    def describe(self) -> str:
        return self.name or f"record@{id(self):#x}"


@dataclass
class CompositeConfig:
    """Union of all active records in merge order."""

    nameservers: List[Nameserver] = field(default_factory=list)
    domains: List[str] = field(default_factory=list)
    searches: List[str] = field(default_factory=list)

    def merge(self, record: ConfigRecord) -> None:
        """Append ``record``'s settings.

        The search fallback is decided per record: a record without explicit
        searches contributes its domains instead, regardless of what other
        records supplied.
        """

        self.nameservers.extend(record.nameservers)
        self.domains.extend(record.domains)
        if record.searches:
            self.searches.extend(record.searches)
        else:
            self.searches.extend(record.domains)

    def merge_all(self, records: Iterable[ConfigRecord]) -> None:
        for record in records:
            self.merge(record)
