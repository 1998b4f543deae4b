"""Tests for the HTTP probe."""

import time

import pytest

from runner import DEFAULT_PROBE_TARGET, ProbeConnectionError, ProbeTarget, run_probe


class TestProbeTarget:

    def test_default_target(self):
        assert DEFAULT_PROBE_TARGET == ProbeTarget('localhost', 4221, '/')
        assert DEFAULT_PROBE_TARGET.url == "http://localhost:4221/"

    @pytest.mark.parametrize('port', [0, -1, 65536])
    def test_port_out_of_range(self, port):
        with pytest.raises(ValueError):
            ProbeTarget('localhost', port)

    @pytest.mark.parametrize('port', [1, 65535])
    def test_port_bounds_accepted(self, port):
        assert ProbeTarget('localhost', port).port == port

    def test_path_must_be_absolute(self):
        with pytest.raises(ValueError):
            ProbeTarget('localhost', 4221, 'echo/abc')


class TestRunProbe:

    def test_dumps_status_headers_and_body(self, out, http_server):
        port = http_server(status=200, body=b'hello')

        assert run_probe(ProbeTarget('127.0.0.1', port), out) == 0

        lines = out.file.getvalue().split("\n")
        assert lines[0] == "HTTP/1.0 200 OK"
        assert lines[1].startswith("Server: ")
        assert lines[2].startswith("Date: ")
        assert lines[3:6] == ["X-First: 1", "X-Second: 2", "Content-Length: 5"]
        assert lines[6] == ""
        assert lines[7] == "hello"

    @pytest.mark.parametrize('status, reason', [(404, "Not Found"), (500, "Internal Server Error")])
    def test_error_status_is_still_success(self, out, http_server, status, reason):
        port = http_server(status=status, body=b'')

        assert run_probe(ProbeTarget('127.0.0.1', port), out) == 0

        text = out.file.getvalue()
        assert text.startswith(f"HTTP/1.0 {status} {reason}\n")
        assert text.index("X-First: 1") < text.index("X-Second: 2")

    def test_path_is_requested(self, out, http_server):
        port = http_server(status=200, body=b'ok')

        assert run_probe(ProbeTarget('127.0.0.1', port, '/echo/abc'), out) == 0

    def test_connection_refused(self, out, closed_port):
        target = ProbeTarget('127.0.0.1', closed_port)

        with pytest.raises(ProbeConnectionError) as exc_info:
            run_probe(target, out, timeout=2.0)

        assert isinstance(exc_info.value, ConnectionError)
        assert exc_info.value.url == target.url
        assert out.file.getvalue() == ""

    def test_silent_server_times_out(self, out, silent_port):
        started = time.monotonic()

        with pytest.raises(ProbeConnectionError) as exc_info:
            run_probe(ProbeTarget('127.0.0.1', silent_port), out, timeout=0.5)

        assert time.monotonic() - started < 3.0
        assert "timed out" in exc_info.value.reason

    def test_body_control_characters_kept(self, out, http_server):
        body = b'a\tb\r\nline2\r\n\x1b[31mred'
        port = http_server(status=200, body=body)

        assert run_probe(ProbeTarget('127.0.0.1', port), out) == 0

        head, dumped = out.file.getvalue().split("\n\n", 1)
        assert head.startswith("HTTP/1.0 200 OK\n")
        assert head.endswith(f"Content-Length: {len(body)}")
        assert dumped == 'a\tb\r\nline2\r\n\x1b[31mred'

    def test_non_utf8_body_replaced(self, out, http_server):
        port = http_server(status=200, body=b'caf\xe9\x00end')

        assert run_probe(ProbeTarget('127.0.0.1', port), out) == 0

        _, dumped = out.file.getvalue().split("\n\n", 1)
        assert dumped == 'caf\ufffd\x00end'
