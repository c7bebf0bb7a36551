"""Entry point for the standalone named agent.

The agent owns a single :class:`NamedManager` for the process and feeds it
from the configured source watchers.  With ``--once`` every watcher is polled
a single time, resolv.conf is rewritten and the agent exits; otherwise the
watchers keep polling until SIGINT/SIGTERM.
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from pathlib import Path
from threading import Event
from typing import List

from named_manager.manager import NamedManager

from .config import AgentConfig, load_config
from .watchers import FileSourceWatcher

LOG = logging.getLogger(__name__)

DEFAULT_CONFIG = Path("/etc/named-manager/agent.yaml")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Merge DNS sources and maintain resolv.conf"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG,
        help="Path to the agent configuration file",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Poll every source once, rewrite resolv.conf and exit",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def build_watchers(
    config: AgentConfig, manager: NamedManager, stop_event: Event
) -> List[FileSourceWatcher]:
    watchers: List[FileSourceWatcher] = []
    for watcher_cfg in config.watchers:
        if watcher_cfg.type != "file":
            raise ValueError(f"unsupported watcher type '{watcher_cfg.type}'")
        watchers.append(
            FileSourceWatcher(
                manager=manager,
                path=watcher_cfg.path,
                interval=watcher_cfg.interval,
                stop_event=stop_event,
            )
        )
    return watchers


def run_once(manager: NamedManager, watchers: List[FileSourceWatcher]) -> int:
    for watcher in watchers:
        watcher.poll()

    # Sources that did not change still need resolv.conf written once.
    result = manager.sync()
    if not result.ok:
        LOG.error("resolv.conf was not updated: %s", result.error)
        return 1
    return 0


def run_forever(watchers: List[FileSourceWatcher], stop_event: Event) -> int:
    for watcher in watchers:
        watcher.poll()
        watcher.start()

    if not watchers:
        LOG.warning("no watchers configured; agent will idle")

    def _shutdown(signum, frame):  # pragma: no cover - signal handler
        LOG.info("received signal %s, shutting down", signum)
        stop_event.set()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)

    try:
        while not stop_event.is_set():
            stop_event.wait(1.0)
    except KeyboardInterrupt:  # pragma: no cover - fallback if signal not set
        stop_event.set()

    for watcher in watchers:
        watcher.join()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    _setup_logging(args.verbose)

    config = load_config(args.config)
    manager = NamedManager(config.resolv_conf.build_publisher())
    stop_event = Event()
    watchers = build_watchers(config, manager, stop_event)

    try:
        if args.once:
            return run_once(manager, watchers)
        return run_forever(watchers, stop_event)
    finally:
        manager.close()
        LOG.info("named agent stopped")


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
