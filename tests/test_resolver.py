import logging
import threading

import dns.exception
import dns.resolver

import resolver
from resolver import resolve_domain


def test_ipv4_only_domain_has_no_warning(fake_dns, caplog):
    fake_dns.records[("v4.example", "A")] = ["93.184.216.34"]
    fake_dns.records[("v4.example", "AAAA")] = dns.resolver.NoAnswer()

    with caplog.at_level(logging.INFO):
        targets = resolve_domain("v4.example")

    assert [t.address for t in targets] == ["93.184.216.34"]
    assert all(t.origin_domain == "v4.example" for t in targets)
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_dual_stack_ipv4_first(fake_dns):
    fake_dns.records[("both.example", "A")] = ["1.1.1.1", "1.0.0.1"]
    fake_dns.records[("both.example", "AAAA")] = ["2606:4700::1111"]

    targets = resolve_domain("both.example")

    assert [t.address for t in targets] == ["1.1.1.1", "1.0.0.1", "2606:4700::1111"]
    assert fake_dns.queries == [("both.example", "A"), ("both.example", "AAAA")]


def test_unknown_domain_is_empty_and_silent(fake_dns, caplog):
    with caplog.at_level(logging.WARNING):
        assert resolve_domain("nothing.invalid") == []
    assert not caplog.records


def test_resolver_error_warns_but_keeps_other_family(fake_dns, caplog):
    fake_dns.records[("flaky.example", "A")] = dns.resolver.NoNameservers()
    fake_dns.records[("flaky.example", "AAAA")] = ["2001:db8::5"]

    with caplog.at_level(logging.WARNING):
        targets = resolve_domain("flaky.example")

    assert [t.address for t in targets] == ["2001:db8::5"]
    assert any("IPv4 resolution failed for flaky.example" in r.getMessage() for r in caplog.records)


def test_resolver_lifetime_timeout_warns(fake_dns, caplog):
    fake_dns.records[("slow.example", "A")] = dns.exception.Timeout()
    fake_dns.records[("slow.example", "AAAA")] = dns.resolver.NoAnswer()

    with caplog.at_level(logging.WARNING):
        assert resolve_domain("slow.example") == []
    assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 1


def test_hung_lookup_is_cut_off(monkeypatch, caplog):
    release = threading.Event()

    def hang(domain, rdtype, lifetime=None):
        release.wait(5)
        return []

    monkeypatch.setattr(dns.resolver, "resolve", hang)
    monkeypatch.setattr(resolver, "DNS_TIMEOUT", 0.05)
    try:
        with caplog.at_level(logging.WARNING):
            assert resolve_domain("hung.example") == []
    finally:
        release.set()

    messages = [r.getMessage() for r in caplog.records]
    assert any("IPv4 resolution for hung.example timed out" in m for m in messages)
    assert any("IPv6 resolution for hung.example timed out" in m for m in messages)


def test_duplicate_answers_collapse(fake_dns):
    fake_dns.records[("dup.example", "A")] = ["10.1.1.1", "10.1.1.1"]
    assert [t.address for t in resolve_domain("dup.example")] == ["10.1.1.1"]


def test_slow_lookups_elsewhere_do_not_time_out_healthy_domain(fake_dns, monkeypatch, caplog):
    release = threading.Event()
    workers = [threading.Thread(target=resolver.bounded_wait, args=(release.wait, 5, 5)) for _ in range(6)]
    for worker in workers:
        worker.start()

    fake_dns.records[("ok.example", "A")] = ["192.0.2.44"]
    monkeypatch.setattr(resolver, "DNS_TIMEOUT", 1.0)
    try:
        with caplog.at_level(logging.WARNING):
            targets = resolve_domain("ok.example")
    finally:
        release.set()
        for worker in workers:
            worker.join()

    assert [t.address for t in targets] == ["192.0.2.44"]
    assert ("ok.example", "A") in fake_dns.queries
    assert not caplog.records
