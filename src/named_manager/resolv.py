"""resolv.conf rendering helpers."""

from __future__ import annotations

from typing import List, Sequence

from .config import CompositeConfig, Nameserver


RESOLV_HEADER = "# Generated by named-manager, do not edit!"

# glibc only consults the first MAXNS (3) nameserver entries.
GLIBC_MAX_NAMESERVERS = 3

NAMESERVER_LIMIT_WARNING = (
    "# NOTE: the glibc resolver does not support more than 3 nameservers.",
    "# The nameservers listed below may not be recognized.",
)


class ResolvConfRenderer:
    """Render a :class:`CompositeConfig` into resolv.conf text."""

    def render(self, composite: CompositeConfig) -> str:
        sections: List[str] = [RESOLV_HEADER, ""]

        if composite.domains:
            # resolv.conf honours a single domain directive.
            sections.extend([f"domain {composite.domains[0]}", ""])

        if composite.searches:
            sections.extend([self._render_search(composite.searches), ""])

        sections.extend(self._render_nameservers(composite.nameservers))

        return "\n".join(sections) + "\n"

    def _render_search(self, searches: Sequence[str]) -> str:
        return " ".join(["search", *searches])

    def _render_nameservers(self, nameservers: Sequence[Nameserver]) -> List[str]:
        lines: List[str] = []
        for index, address in enumerate(nameservers):
            if index == GLIBC_MAX_NAMESERVERS:
                lines.append("")
                lines.extend(NAMESERVER_LIMIT_WARNING)
            lines.append(f"nameserver {address}")
        return lines
