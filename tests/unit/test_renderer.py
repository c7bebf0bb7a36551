from ipaddress import IPv4Address

from named_manager.config import CompositeConfig
from named_manager.resolv import NAMESERVER_LIMIT_WARNING, RESOLV_HEADER, ResolvConfRenderer


def test_renderer_full_layout():
    composite = CompositeConfig(
        nameservers=[IPv4Address("10.0.0.1"), IPv4Address("10.0.0.2")],
        domains=["corp.example"],
        searches=["corp.example", "lab.example"],
    )

    text = ResolvConfRenderer().render(composite)

    assert text == (
        f"{RESOLV_HEADER}\n"
        "\n"
        "domain corp.example\n"
        "\n"
        "search corp.example lab.example\n"
        "\n"
        "nameserver 10.0.0.1\n"
        "nameserver 10.0.0.2\n"
    )


def test_renderer_uses_first_domain_only():
    composite = CompositeConfig(domains=["x.com", "y.com"])

    lines = ResolvConfRenderer().render(composite).splitlines()

    assert [line for line in lines if line.startswith("domain")] == ["domain x.com"]
    assert "y.com" not in "\n".join(line for line in lines if line.startswith("domain"))


def test_renderer_omits_empty_sections():
    text = ResolvConfRenderer().render(CompositeConfig())

    assert text == f"{RESOLV_HEADER}\n\n"
    assert "domain" not in text
    assert "search" not in text


def test_renderer_warns_before_fourth_nameserver():
    composite = CompositeConfig(
        nameservers=[IPv4Address(f"10.0.0.{i}") for i in range(1, 6)]
    )

    lines = ResolvConfRenderer().render(composite).splitlines()

    assert len([line for line in lines if line.startswith("nameserver")]) == 5
    fourth = lines.index("nameserver 10.0.0.4")
    assert tuple(lines[fourth - 2:fourth]) == NAMESERVER_LIMIT_WARNING
    assert lines[fourth - 3] == ""
    assert lines[fourth - 4] == "nameserver 10.0.0.3"
    assert sum(line == NAMESERVER_LIMIT_WARNING[0] for line in lines) == 1


def test_renderer_no_warning_for_three_nameservers():
    composite = CompositeConfig(nameservers=["10.0.0.1", "10.0.0.2", "10.0.0.3"])

    text = ResolvConfRenderer().render(composite)

    assert NAMESERVER_LIMIT_WARNING[0] not in text
