"""Tests for the small collaborators: status text, elapsed time, bytecode probe."""

import py_compile

from utils.bytecode import BytecodeCacheProbe
from utils.http_status import get_http_status_text
from utils.timing import elapsed_ms, format_elapsed


class TestHTTPStatusText:

    def test_known_codes(self):
        assert get_http_status_text(200) == "OK"
        assert get_http_status_text(404) == "Not Found"
        assert get_http_status_text("500") == "Internal Server Error"

    def test_unknown_codes(self):
        assert get_http_status_text(999) == "Unknown Status"
        assert get_http_status_text("abc") == "Unknown Status"
        assert get_http_status_text(None) == "Unknown Status"


class TestTiming:

    def test_milliseconds(self):
        assert format_elapsed(10.0, now=10.5) == "500.00 ms"

    def test_seconds(self):
        assert format_elapsed(10.0, now=11.25) == "1.250 s"

    def test_clock_skew_clamped(self):
        assert elapsed_ms(10.0, now=9.0) == 0.0
        assert format_elapsed(10.0, now=9.0) == "0.00 ms"


class TestBytecodeCacheProbe:

    def test_available_on_cpython(self):
        assert BytecodeCacheProbe().available() is True

    def test_uncached_then_cached(self, tmp_path):
        source = tmp_path / "module_under_probe.py"
        source.write_text("VALUE = 1\n")
        probe = BytecodeCacheProbe()
        assert probe.is_cached(str(source)) is False
        py_compile.compile(str(source), doraise=True)
        assert probe.is_cached(str(source)) is True
