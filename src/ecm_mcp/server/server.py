"""
STDIO MCP Server — Main loop

Ties together:
  Transport -> ProtocolHandler -> ToolRegistry -> EcmApiClient

Flow:
  1. Transport reads one line from stdin
  2. Handler validates the JSON-RPC envelope and dispatches by method
  3. Tools validate arguments, then call the ECM backend
  4. Transport writes the response envelope to stdout

Each request runs as its own task, so a slow backend call does not hold
up the requests behind it. Responses may be written out of order.
"""

import asyncio
import signal
from typing import Optional, Set

from ecm_mcp.client import EcmApiClient
from ecm_mcp.config import Config
from ecm_mcp.server.handler import ProtocolHandler
from ecm_mcp.server.logger import get_logger
from ecm_mcp.server.protocol import INTERNAL_ERROR, PARSE_ERROR, make_error
from ecm_mcp.server.transport import MalformedMessage, StdioTransport
from ecm_mcp.tools import build_registry

log = get_logger("server")


class StdioMCPServer:
    """
    Main server orchestrator.

    Usage:
        server = StdioMCPServer()
        await server.run()
    """

    def __init__(
        self,
        client: Optional[EcmApiClient] = None,
        transport: Optional[StdioTransport] = None,
    ):
        self._client = client or EcmApiClient.from_config()
        self._handler = ProtocolHandler(build_registry(self._client), self._client)
        self._transport = transport or StdioTransport()
        self._tasks: Set[asyncio.Task] = set()
        self._read_task: Optional[asyncio.Future] = None
        self._running = False
        self._closed = False

    @property
    def handler(self) -> ProtocolHandler:
        return self._handler

    async def run(self):
        """Start the server and process messages until EOF or signal."""
        log.info(f"Starting {Config.SERVER_NAME} v{Config.SERVER_VERSION}")
        await self._transport.start()

        loop = asyncio.get_running_loop()
        installed = []
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self._stop, sig)
                installed.append(sig)
            except (NotImplementedError, RuntimeError):
                pass

        self._running = True
        log.info(
            f"Server ready — tools={self._handler.registry.count()} "
            f"backend={self._client.base_url}"
        )

        try:
            while self._running:
                self._read_task = asyncio.ensure_future(self._transport.read_message())
                try:
                    msg = await self._read_task
                finally:
                    self._read_task = None
                if msg is None:
                    log.info("EOF on stdin — shutting down")
                    break

                if isinstance(msg, MalformedMessage):
                    await self._transport.write_message(
                        make_error(None, PARSE_ERROR, f"Parse error: {msg.error}")
                    )
                    continue

                task = asyncio.create_task(self._handle_message(msg))
                self._tasks.add(task)
                task.add_done_callback(self._tasks.discard)

        except asyncio.CancelledError:
            log.info("Server cancelled")
        except Exception as exc:
            log.error(f"Server error: {exc}", exc_info=True)
        finally:
            for sig in installed:
                loop.remove_signal_handler(sig)
            if self._tasks:
                await asyncio.gather(*self._tasks, return_exceptions=True)
            await self.shutdown()

    def _stop(self, sig: signal.Signals):
        """Signal handler: stop reading; in-flight requests still finish."""
        log.info(f"Received {sig.name} — stopping")
        self._running = False
        if self._read_task is not None and not self._read_task.done():
            self._read_task.cancel()

    async def _handle_message(self, msg):
        """Process a single JSON-RPC message and write its response."""
        try:
            response = await self._handler.handle(msg)
        except Exception as exc:
            log.error(f"Unhandled error: {exc}", exc_info=True)
            request_id = msg.get("id") if isinstance(msg, dict) else None
            response = make_error(request_id, INTERNAL_ERROR, f"Internal error: {exc}")
        if response is None:
            return
        try:
            await self._transport.write_message(response)
        except Exception as exc:
            log.error(f"Failed to write response: {exc}", exc_info=True)

    async def shutdown(self):
        """Graceful shutdown — close transport and backend client."""
        if self._closed:
            return
        self._closed = True
        self._running = False

        await self._transport.close()
        await self._client.aclose()
        log.info("Server stopped")
