"""
HTTP probe against the local development server.
Issues a single GET and dumps the response the way `curl -i` does:
status line, headers in the order they arrived, blank line, body.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple
import asyncio

import aiohttp
from rich.console import Console
from rich.markup import escape

from .base_runner import console
from .errors import ProbeConnectionError

DEFAULT_PROBE_TIMEOUT = 5.0  # seconds, connect + full response


@dataclass(frozen=True)
class ProbeTarget:
    """Host, port and path of the server being probed."""
    host: str
    port: int
    path: str = '/'

    def __post_init__(self):
        if not 1 <= self.port <= 65535:
            raise ValueError(f"Port out of range: {self.port}")
        if not self.path.startswith('/'):
            raise ValueError(f"Path must start with '/': {self.path!r}")

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}{self.path}"


DEFAULT_PROBE_TARGET = ProbeTarget('localhost', 4221, '/')


@dataclass
class ProbeResponse:
    """Response as received on the wire."""
    version: str
    status: int
    reason: str
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: bytes = b''

    @property
    def status_line(self) -> str:
        line = f"{self.version} {self.status}"
        return f"{line} {self.reason}" if self.reason else line

    def header_lines(self) -> Iterator[str]:
        for name, value in self.headers:
            yield f"{name}: {value}"


async def fetch(target: ProbeTarget, timeout: float = DEFAULT_PROBE_TIMEOUT) -> ProbeResponse:
    """
    Perform one GET request against the target.

    Redirects are not followed and the body is not decompressed, so the
    result matches what the server actually sent.

    Raises:
        ProbeConnectionError: connection refused, reset or timed out
    """
    client_timeout = aiohttp.ClientTimeout(total=timeout)

    try:
        async with aiohttp.ClientSession(timeout=client_timeout, auto_decompress=False) as session:
            async with session.get(target.url, allow_redirects=False) as resp:
                body = await resp.read()
                return ProbeResponse(
                    version=f"HTTP/{resp.version.major}.{resp.version.minor}",
                    status=resp.status,
                    reason=resp.reason or '',
                    headers=[
                        (name.decode('latin-1'), value.decode('latin-1'))
                        for name, value in resp.raw_headers
                    ],
                    body=body
                )
    except asyncio.TimeoutError:
        raise ProbeConnectionError(target.url, f"timed out after {timeout:g}s")
    except aiohttp.ClientError as e:
        raise ProbeConnectionError(target.url, str(e) or type(e).__name__)


def write_response(response: ProbeResponse, out: Console):
    """
    Write status line, headers, blank line and body.

    The body bypasses Rich rendering so tabs, carriage returns and escape
    sequences reach the output unchanged.
    """
    out.out(response.status_line, highlight=False)
    for line in response.header_lines():
        out.out(line, highlight=False)
    out.out("", highlight=False)

    if response.body:
        out.file.write(response.body.decode('utf-8', errors='replace'))
        out.file.flush()


def run_probe(target: ProbeTarget = DEFAULT_PROBE_TARGET,
              out: Optional[Console] = None,
              timeout: float = DEFAULT_PROBE_TIMEOUT) -> int:
    """
    Probe the target once and dump the full response.

    Any HTTP status counts as success; only transport failures raise.

    Args:
        target: Server to probe
        out: Console receiving the dump (stdout by default)
        timeout: Upper bound in seconds for the whole exchange

    Returns:
        0 once a response has been received

    Raises:
        ProbeConnectionError: if no response arrives
    """
    response = asyncio.run(fetch(target, timeout))
    write_response(response, out or console)
    return 0


class ProbeMixin:
    """Adds the `check` action to a runner."""

    probe_target: ProbeTarget = DEFAULT_PROBE_TARGET
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT

    def check(self) -> int:
        """Run a request including headers against the server."""
        try:
            status = run_probe(self.probe_target, self.out, self.probe_timeout)
        except ProbeConnectionError as e:
            self.err.print(f"[bold red]Connection failed:[/bold red] {escape(str(e))}")
            self.err.print(f"[dim]Is the server running on port {self.probe_target.port}?[/dim]")
            self.log_action("check", e.reason, success=False)
            return 1

        self.log_action("check", self.probe_target.url, success=True)
        return status
