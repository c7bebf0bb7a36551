from ipaddress import IPv4Address

from named_manager.config import CompositeConfig, ConfigRecord
from named_manager.merge import build_composite, merge_order


def test_records_compare_by_identity():
    a = ConfigRecord(nameservers=["10.0.0.1"], domains=["corp.example"])
    b = ConfigRecord(nameservers=["10.0.0.1"], domains=["corp.example"])

    assert a != b
    assert a == a


def test_record_copies_caller_lists():
    servers = ["10.0.0.1"]
    record = ConfigRecord(nameservers=servers)

    servers.append("10.0.0.2")

    assert record.nameservers == ("10.0.0.1",)


def test_merge_order_is_vpn_device_then_others():
    vpn = ConfigRecord(nameservers=["10.8.0.1"])
    device = ConfigRecord(nameservers=["192.168.1.1"])
    zone = ConfigRecord(nameservers=["172.16.0.1"])

    # registration order deliberately differs from merge order
    composite = build_composite(vpn, device, [zone, device, vpn])

    assert composite.nameservers == ["10.8.0.1", "192.168.1.1", "172.16.0.1"]


def test_merge_order_skips_roles_in_record_list():
    vpn = ConfigRecord()
    zone = ConfigRecord()

    assert list(merge_order(vpn, None, [vpn, zone])) == [vpn, zone]


def test_nameservers_are_not_deduplicated():
    first = ConfigRecord(nameservers=[IPv4Address("10.0.0.1")])
    second = ConfigRecord(nameservers=[IPv4Address("10.0.0.1")])

    composite = build_composite(None, None, [first, second])

    assert composite.nameservers == [IPv4Address("10.0.0.1")] * 2


def test_domains_fall_back_to_searches_per_record():
    with_domain = ConfigRecord(domains=["corp.example"])
    with_searches = ConfigRecord(domains=["lab.example"], searches=["a.com", "b.com"])

    composite = build_composite(None, None, [with_domain, with_searches])

    assert composite.domains == ["corp.example", "lab.example"]
    assert composite.searches == ["corp.example", "a.com", "b.com"]


def test_composite_starts_empty():
    composite = CompositeConfig()
    composite.merge(ConfigRecord())

    assert composite.nameservers == []
    assert composite.domains == []
    assert composite.searches == []
