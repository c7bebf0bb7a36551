from __future__ import annotations

import ipaddress
from typing import Iterable, List, Optional

from named_manager.config import ConfigRole


ROLE_ALIASES = {
    "vpn": ConfigRole.VPN,
    "best-device": ConfigRole.BEST_DEVICE,
    "best_device": ConfigRole.BEST_DEVICE,
    "device": ConfigRole.BEST_DEVICE,
    "plain": ConfigRole.PLAIN,
    "zone": ConfigRole.PLAIN,
}


def parse_role(value: Optional[str]) -> ConfigRole:
    if value is None:
        return ConfigRole.PLAIN
    try:
        return ROLE_ALIASES[str(value).lower()]
    except KeyError:
        raise ValueError(f"Unsupported source role '{value}'") from None


def parse_nameservers(values: Iterable[str]) -> List[ipaddress.IPv4Address]:
    if isinstance(values, str):
        raise ValueError("'nameservers' must be a list")
    return [ipaddress.IPv4Address(str(value)) for value in values]


def parse_names(values: Iterable[str], key: str) -> List[str]:
    if isinstance(values, str):
        raise ValueError(f"'{key}' must be a list")
    return [str(value) for value in values]
