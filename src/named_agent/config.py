"""YAML configuration loader for the named agent."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import yaml

from named_manager.publisher import (
    DEFAULT_RESOLV_CONF,
    DEFAULT_TEMP_SUFFIX,
    CommandRefreshHook,
    ResolvConfPolicy,
    ResolvConfPublisher,
)


@dataclass
class ResolvConfConfig:
    path: Path = DEFAULT_RESOLV_CONF
    temp_suffix: str = DEFAULT_TEMP_SUFFIX
    manage: bool = True
    disable_flag: Optional[Path] = None
    refresh_command: Sequence[str] = ()

    def build_publisher(self) -> ResolvConfPublisher:
        refresh_hook = (
            CommandRefreshHook(self.refresh_command) if self.refresh_command else None
        )
        return ResolvConfPublisher(
            self.path,
            temp_suffix=self.temp_suffix,
            policy=ResolvConfPolicy(manage=self.manage, disable_flag=self.disable_flag),
            refresh_hook=refresh_hook,
        )


@dataclass
class WatcherConfig:
    type: str
    path: Path
    interval: float = 5.0
    options: dict = field(default_factory=dict)


@dataclass
class AgentConfig:
    resolv_conf: ResolvConfConfig
    watchers: Sequence[WatcherConfig] = field(default_factory=list)


def _parse_refresh_command(value) -> Sequence[str]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(value.split())
    if isinstance(value, list):
        return tuple(str(arg) for arg in value)
    raise ValueError("'refresh_command' must be a string or a list")


def _parse_resolv_conf(section: dict) -> ResolvConfConfig:
    if not isinstance(section, dict):
        raise ValueError("'resolv_conf' section must be a mapping")

    temp_suffix = str(section.get("temp_suffix", DEFAULT_TEMP_SUFFIX))
    if not temp_suffix:
        raise ValueError("'temp_suffix' must not be empty")

    disable_flag = section.get("disable_flag")
    return ResolvConfConfig(
        path=Path(section.get("path", DEFAULT_RESOLV_CONF)),
        temp_suffix=temp_suffix,
        manage=bool(section.get("manage", True)),
        disable_flag=Path(disable_flag) if disable_flag else None,
        refresh_command=_parse_refresh_command(section.get("refresh_command")),
    )


def _parse_watchers(entries: Iterable[dict]) -> List[WatcherConfig]:
    watchers: List[WatcherConfig] = []
    for entry in entries:
        options = entry.get("options", {})
        if not isinstance(options, dict):
            raise ValueError("watcher 'options' must be a mapping if provided")
        watchers.append(
            WatcherConfig(
                type=str(entry["type"]),
                path=Path(entry.get("path", ".")),
                interval=float(entry.get("interval", entry.get("poll_interval", 5.0))),
                options=options,
            )
        )
    return watchers


def load_config(path: Path) -> AgentConfig:
    data = yaml.safe_load(path.read_text())
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("Agent configuration must be a mapping")

    resolv_conf = _parse_resolv_conf(data.get("resolv_conf") or {})

    watchers_section = data.get("watchers", [])
    if not isinstance(watchers_section, list):
        raise ValueError("'watchers' section must be a list")
    watchers = _parse_watchers(watchers_section)

    return AgentConfig(resolv_conf=resolv_conf, watchers=watchers)
