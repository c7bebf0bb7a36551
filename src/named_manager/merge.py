"""Composite construction from the registry's active records."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from .config import CompositeConfig, ConfigRecord


def merge_order(
    vpn: Optional[ConfigRecord],
    device: Optional[ConfigRecord],
    records: Iterable[ConfigRecord],
) -> Iterator[ConfigRecord]:
    """Yield records in merge order: VPN, best device, then the rest.

    ``vpn`` and ``device`` are members of ``records`` as well; they are
    skipped during the final pass so each record is merged exactly once.
    """

    if vpn is not None:
        yield vpn
    if device is not None:
        yield device
    for record in records:
        if record is vpn or record is device:
            continue
        yield record


def build_composite(
    vpn: Optional[ConfigRecord],
    device: Optional[ConfigRecord],
    records: Iterable[ConfigRecord],
) -> CompositeConfig:
    composite = CompositeConfig()
    composite.merge_all(merge_order(vpn, device, records))
    return composite
