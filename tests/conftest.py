import sys
from types import SimpleNamespace

import dns.resolver
import pytest

import prober
import routing
import tunnel_manager


class FakeRunner:
    """Records commands and answers them from a handler"""

    def __init__(self):
        self.calls = []
        self.handler = lambda cmd: (True, "")

    def __call__(self, cmd, use_sudo=False, timeout=None):
        self.calls.append((list(cmd), use_sudo))
        return self.handler(list(cmd))

    def commands(self, prefix):
        return [cmd for cmd, _ in self.calls if cmd[:len(prefix)] == prefix]


@pytest.fixture
def runner(monkeypatch):
    fake = FakeRunner()
    for module in (routing, prober, tunnel_manager):
        monkeypatch.setattr(module, "run_command", fake)
    return fake


class FakeDNS:
    """Answers resolve() from a table of (domain, rdtype) -> addresses or exception"""

    def __init__(self):
        self.records = {}
        self.queries = []

    def __call__(self, domain, rdtype, lifetime=None):
        self.queries.append((domain, rdtype))
        answer = self.records.get((domain, rdtype), dns.resolver.NXDOMAIN())
        if isinstance(answer, Exception):
            raise answer
        return [SimpleNamespace(address=address) for address in answer]


@pytest.fixture
def fake_dns(monkeypatch):
    fake = FakeDNS()
    monkeypatch.setattr(dns.resolver, "resolve", fake)
    return fake


@pytest.fixture
def linux_host(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")


@pytest.fixture(autouse=True)
def no_settle_delay(monkeypatch):
    monkeypatch.setattr(tunnel_manager, "SETTLE_DELAY", 0)
