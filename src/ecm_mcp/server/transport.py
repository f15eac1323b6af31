"""
STDIO Transport — newline-delimited JSON-RPC on stdin/stdout

Reads from stdin, writes to stdout.
NEVER pollutes stdout with logs.
"""

import asyncio
import json
import sys
from typing import Any, Dict, Optional

from ecm_mcp.server.logger import get_logger

log = get_logger("transport")


class MalformedMessage:
    """A line that could not be decoded as JSON."""

    __slots__ = ("raw", "error")

    def __init__(self, raw: bytes, error: str):
        self.raw = raw
        self.error = error


class StdioTransport:
    """Async line transport over the process's stdin/stdout."""

    def __init__(self, reader: Optional[asyncio.StreamReader] = None, writer=None):
        self._reader = reader
        self._stdout = writer
        self.running = False

    async def start(self):
        """Initialize async stdin reader and direct stdout writer."""
        if self._reader is None:
            loop = asyncio.get_running_loop()
            self._reader = asyncio.StreamReader(limit=2**20)
            protocol = asyncio.StreamReaderProtocol(self._reader)
            await loop.connect_read_pipe(lambda: protocol, sys.stdin.buffer)
        if self._stdout is None:
            self._stdout = sys.stdout.buffer
        self.running = True
        log.info("Transport initialized")

    async def read_message(self):
        """
        Read one JSON-RPC message from stdin.
        Returns the decoded object, a MalformedMessage, or None on EOF.
        Blank lines are skipped.
        """
        if not self._reader:
            raise RuntimeError("Transport not started")

        while True:
            try:
                raw_bytes = await self._reader.readuntil(b"\n")
            except asyncio.IncompleteReadError as exc:
                # EOF; a final line without a newline still counts
                raw_bytes = exc.partial
            except asyncio.LimitOverrunError as exc:
                log.error(f"Oversized line dropped ({exc.consumed}+ bytes)")
                await self._discard_line()
                return MalformedMessage(b"", "Line exceeds the stream buffer limit")

            if not raw_bytes:
                return None
            if not raw_bytes.strip():
                continue
            try:
                return json.loads(raw_bytes)
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                log.error(f"JSON parse error: {exc}")
                return MalformedMessage(raw_bytes, str(exc))

    async def _discard_line(self):
        """Drop buffered input up to and including the next newline (or EOF)."""
        while True:
            try:
                await self._reader.readuntil(b"\n")
                return
            except asyncio.IncompleteReadError:
                return
            except asyncio.LimitOverrunError as exc:
                await self._reader.readexactly(exc.consumed)

    async def write_message(self, message: Dict[str, Any]):
        """Write a JSON-RPC message to stdout."""
        if self._stdout is None:
            raise RuntimeError("Transport not started")

        raw_text = json.dumps(message, separators=(",", ":"), default=str) + "\n"
        self._stdout.write(raw_text.encode("utf-8"))
        self._stdout.flush()

    async def close(self):
        self.running = False
        log.info("Transport closed")
