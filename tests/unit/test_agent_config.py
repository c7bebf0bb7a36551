from pathlib import Path

import pytest

from named_agent.config import load_config
from named_manager.publisher import CommandRefreshHook, ResolvConfPublisher


def test_load_config(tmp_path: Path):
    config_path = tmp_path / "agent.yaml"
    config_path.write_text(
        """
resolv_conf:
  path: /run/named-manager/resolv.conf
  temp_suffix: .new
  manage: false
  disable_flag: /etc/named-manager/unmanaged
  refresh_command: [nscd, -i, hosts]
watchers:
  - type: file
    path: /etc/named-manager/sources.json
    interval: 2
  - type: file
    path: /run/named-manager/vpn.json
"""
    )

    cfg = load_config(config_path)

    resolv = cfg.resolv_conf
    assert resolv.path == Path("/run/named-manager/resolv.conf")
    assert resolv.temp_suffix == ".new"
    assert resolv.manage is False
    assert resolv.disable_flag == Path("/etc/named-manager/unmanaged")
    assert tuple(resolv.refresh_command) == ("nscd", "-i", "hosts")
    assert len(cfg.watchers) == 2
    watcher = cfg.watchers[0]
    assert watcher.type == "file"
    assert watcher.path == Path("/etc/named-manager/sources.json")
    assert watcher.interval == pytest.approx(2.0)
    assert watcher.options == {}
    assert cfg.watchers[1].interval == pytest.approx(5.0)


def test_load_config_defaults(tmp_path: Path):
    config_path = tmp_path / "agent.yaml"
    config_path.write_text("watchers: []\n")

    cfg = load_config(config_path)

    assert cfg.resolv_conf.path == Path("/etc/resolv.conf")
    assert cfg.resolv_conf.temp_suffix == ".tmp"
    assert cfg.resolv_conf.manage is True
    assert cfg.resolv_conf.disable_flag is None
    assert cfg.watchers == []


def test_build_publisher(tmp_path: Path):
    config_path = tmp_path / "agent.yaml"
    config_path.write_text(
        f"""
resolv_conf:
  path: {tmp_path / "resolv.conf"}
  refresh_command: nscd -i hosts
"""
    )

    publisher = load_config(config_path).resolv_conf.build_publisher()

    assert isinstance(publisher, ResolvConfPublisher)
    assert publisher.temp_path == tmp_path / "resolv.conf.tmp"
    assert isinstance(publisher._refresh_hook, CommandRefreshHook)  # type: ignore[attr-defined]


def test_load_config_rejects_bad_watchers(tmp_path: Path):
    config_path = tmp_path / "agent.yaml"
    config_path.write_text("watchers:\n  type: file\n")

    with pytest.raises(ValueError):
        load_config(config_path)
