"""TCP connection to a spamd daemon.

spamd serves exactly one command per connection and signals the end of
its reply by closing the socket, so every exchange opens a fresh
connection, writes the request, reads until EOF and closes. Reading
starts alongside the write, since spamd can reject a request and close
before it has taken the whole message.
"""

from __future__ import annotations

import asyncio
import logging

from ..errors import SpamdTimeoutError, TransportError
from ..models.config import ClientConfig
from ..protocol.framing import REQUEST_TERMINATOR, LineAccumulator

logger = logging.getLogger(__name__)

READ_CHUNK_SIZE = 4096


class SpamdConnection:
    """A single request/response exchange with spamd.

    Usage::

        conn = SpamdConnection(ClientConfig(host="mail.example.org"))
        lines = await conn.send_and_receive(build_check(message))

    An instance is good for one exchange; the socket is closed when
    ``send_and_receive`` returns or raises.
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._connected = False
        self._received = LineAccumulator()

    @property
    def connected(self) -> bool:
        return self._connected

    async def open(self) -> None:
        """Open the TCP connection.

        Raises:
            TransportError: If the connection cannot be established.
        """
        host, port = self._config.host, self._config.port
        try:
            self._reader, self._writer = await asyncio.open_connection(host, port)
        except OSError as e:
            raise TransportError(
                f"Could not connect to spamd at {host}:{port}: {e}"
            ) from e
        self._connected = True
        logger.debug("Connected to spamd at %s:%s", host, port)

    def close(self) -> None:
        """Close the TCP connection."""
        if self._writer is None:
            return

        try:
            self._writer.close()
        except Exception as e:
            logger.warning("Error closing spamd connection: %s", e)
        finally:
            self._reader = None
            self._writer = None
            self._connected = False
            logger.debug("Disconnected from spamd")

    async def write(self, request: bytes) -> None:
        """Send a request, followed by the protocol terminator.

        Raises:
            TransportError: If not connected or the write fails.
        """
        if not self._connected:
            raise TransportError("Not connected to spamd")

        try:
            self._writer.write(request + REQUEST_TERMINATOR)
            await self._writer.drain()
        except OSError as e:
            raise TransportError(f"spamd returned an error: {e}") from e
        logger.debug("Sent %d bytes", len(request) + len(REQUEST_TERMINATOR))

    async def read_lines(self) -> list[str]:
        """Read until spamd closes the connection.

        Returns:
            The non-empty reply lines, in order.

        Raises:
            TransportError: If not connected or the read fails.
        """
        if not self._connected:
            raise TransportError("Not connected to spamd")

        try:
            while True:
                chunk = await self._reader.read(READ_CHUNK_SIZE)
                if not chunk:
                    break
                self._received.feed(chunk)
        except OSError as e:
            raise TransportError(f"spamd returned an error: {e}") from e

        result = self._received.finish()
        logger.debug("Received %d lines", len(result))
        return result

    async def _exchange(self, request: bytes) -> list[str]:
        await self.open()
        # spamd may answer and hang up before it has read the whole body
        reading = asyncio.ensure_future(self.read_lines())
        try:
            try:
                await self.write(request)
            except TransportError as write_error:
                try:
                    lines = await reading
                except TransportError:
                    lines = self._received.finish()
                if not lines:
                    raise write_error
                logger.warning(
                    "spamd replied before reading the whole request: %s", write_error
                )
                return lines
            return await reading
        finally:
            if not reading.done():
                reading.cancel()

    async def send_and_receive(self, request: bytes) -> list[str]:
        """Run one full exchange under the configured timeout.

        Args:
            request: Encoded request from :func:`build_request`.

        Returns:
            The reply lines received before spamd closed the connection.

        Raises:
            SpamdTimeoutError: If spamd did not close the connection in time.
            TransportError: If connecting, writing or reading failed.
        """
        try:
            return await asyncio.wait_for(
                self._exchange(request), timeout=self._config.timeout
            )
        except asyncio.TimeoutError as e:
            raise SpamdTimeoutError(
                f"Connection to spamd timed out after {self._config.timeout}s"
            ) from e
        finally:
            self.close()
