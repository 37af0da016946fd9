"""Tests for collect_debug_info() and EmitContext.from_request()."""

import time

from core.context import EmitContext
from core.debug import collect_debug_info
from fakes import FakeBytecodeProbe, FakeCacheStats, FakeQueryCounter
from utils.request_metrics import RequestCacheStats, RequestQueryCounter, start_request


class TestCollectDebugInfo:

    def test_no_sources(self):
        assert collect_debug_info(EmitContext()) == {"opcache": "unavailable"}

    def test_all_sources(self, make_context):
        ctx = make_context(
            start_marker=time.perf_counter(),
            query_counter=FakeQueryCounter(4),
            cache_stats=FakeCacheStats(10, 1),
            path="/api/items",
            redirect_url="/old/items",
            redirect_query="a=1",
        )
        info = collect_debug_info(ctx)
        assert list(info) == [
            "execute_time", "db_queries", "cache_reads", "cache_writes",
            "url", "redirect_url", "redirect_query",
        ]
        assert info["execute_time"].endswith(" ms")
        assert info["db_queries"] == 4
        assert info["cache_reads"] == 10
        assert info["cache_writes"] == 1
        assert info["url"] == "/api/items"

    def test_zero_counts_are_reported(self, make_context):
        info = collect_debug_info(make_context(query_counter=FakeQueryCounter(0), cache_stats=FakeCacheStats(0, 0)))
        assert info == {"db_queries": 0, "cache_reads": 0, "cache_writes": 0}

    def test_unavailable_collaborators_are_skipped(self, make_context):
        ctx = make_context(
            query_counter=FakeQueryCounter(4, available=False),
            cache_stats=FakeCacheStats(1, 1, available=False),
        )
        assert collect_debug_info(ctx) == {}

    def test_bytecode_states(self):
        cached = FakeBytecodeProbe(cached=True)
        assert "opcache" not in collect_debug_info(EmitContext(bytecode_probe=cached))

        uncached = FakeBytecodeProbe(cached=False)
        assert collect_debug_info(EmitContext(bytecode_probe=uncached))["opcache"] == "disabled"

        missing = FakeBytecodeProbe(available=False)
        assert collect_debug_info(EmitContext(bytecode_probe=missing))["opcache"] == "unavailable"
        assert missing.checked == []

    def test_probe_checks_given_source(self):
        probe = FakeBytecodeProbe(cached=False)
        collect_debug_info(EmitContext(bytecode_probe=probe), source_path="/srv/core/response.py")
        assert probe.checked == ["/srv/core/response.py"]

    def test_empty_redirects_omitted(self, make_context):
        info = collect_debug_info(make_context(path="", redirect_url="", redirect_query=""))
        assert info == {}


class TestEmitContextFromRequest:

    def test_reads_query_and_environ(self, app):
        environ = {"REDIRECT_URL": "/legacy", "REDIRECT_QUERY_STRING": "x=1"}
        with app.test_request_context("/things?pretty&debug&callback=cb", environ_base=environ):
            ctx = EmitContext.from_request()
        assert ctx.pretty is True
        assert ctx.debug_requested is True
        assert ctx.debug_enabled is True
        assert ctx.debug_active is True
        assert ctx.callback == "cb"
        assert ctx.path == "/things"
        assert ctx.redirect_url == "/legacy"
        assert ctx.redirect_query == "x=1"

    def test_defaults(self, no_debug_app, monkeypatch):
        monkeypatch.delenv("REDIRECT_URL", raising=False)
        monkeypatch.delenv("REDIRECT_QUERY_STRING", raising=False)
        with no_debug_app.test_request_context("/"):
            ctx = EmitContext.from_request()
        assert ctx.pretty is False
        assert ctx.callback is None
        assert ctx.debug_active is False
        assert ctx.redirect_url is None
        assert ctx.start_marker is None

    def test_process_environment_fallback(self, app, monkeypatch):
        monkeypatch.setenv("REDIRECT_URL", "/from-env")
        with app.test_request_context("/"):
            assert EmitContext.from_request().redirect_url == "/from-env"

    def test_request_metrics_collaborators(self, app):
        with app.test_request_context("/"):
            start_request()
            ctx = EmitContext.from_request()
            assert ctx.start_marker is not None
            assert isinstance(ctx.query_counter, RequestQueryCounter)
            assert isinstance(ctx.cache_stats, RequestCacheStats)
            assert ctx.query_counter.available() is True
