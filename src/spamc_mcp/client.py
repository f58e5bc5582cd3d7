"""High-level spamc client.

Each method performs one complete exchange with spamd (connect, send,
read until close, parse) and returns a typed result::

    client = SpamcClient("127.0.0.1", 783)
    result = await client.check(raw_email)
    if result.is_spam:
        ...

Methods may run concurrently; each call uses its own connection.
"""

from __future__ import annotations

import logging

from .errors import FeatureDisabledError
from .models.config import ClientConfig, DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT
from .models.response import SpamdResponse
from .protocol.commands import (
    Command,
    build_check,
    build_headers,
    build_learn,
    build_ping,
    build_process,
    build_report,
    build_report_if_spam,
    build_revoke,
    build_symbols,
    build_tell,
)
from .protocol.parser import EX_NOTENABLED, parse_pong, parse_response
from .transport.tcp_connection import SpamdConnection

logger = logging.getLogger(__name__)


class SpamcClient:
    """Client for a SpamAssassin daemon speaking the SPAMC protocol."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
        config: ClientConfig | None = None,
    ) -> None:
        self._config = config or ClientConfig(host=host, port=port, timeout=timeout)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def _send(self, request: bytes) -> list[str]:
        return await SpamdConnection(self._config).send_and_receive(request)

    async def _execute(self, command: Command, request: bytes) -> SpamdResponse:
        lines = await self._send(request)
        return parse_response(command, lines)

    async def _tell(self, request: bytes) -> SpamdResponse:
        result = await self._execute(Command.TELL, request)
        if result.response_code == EX_NOTENABLED:
            raise FeatureDisabledError(
                "TELL commands are not enabled, set the --allow-tell switch."
            )
        return result

    async def ping(self) -> bool:
        """Check that spamd is alive.

        Returns:
            True if spamd answered with PONG.
        """
        lines = await self._send(build_ping(self._config.protocol_version))
        if not lines:
            logger.warning("spamd closed the connection without answering PING")
        return parse_pong(lines)

    async def check(self, message: str) -> SpamdResponse:
        """Return the spam verdict and score for a message."""
        return await self._execute(
            Command.CHECK, build_check(message, self._config.protocol_version)
        )

    async def symbols(self, message: str) -> SpamdResponse:
        """Return the verdict plus the names of the matched rules in ``matches``."""
        return await self._execute(
            Command.SYMBOLS, build_symbols(message, self._config.protocol_version)
        )

    async def report(self, message: str) -> SpamdResponse:
        """Return the verdict plus the per-rule report in ``report``."""
        return await self._execute(
            Command.REPORT, build_report(message, self._config.protocol_version)
        )

    async def report_if_spam(self, message: str) -> SpamdResponse:
        """Like :meth:`report`, but spamd only includes the report for spam."""
        return await self._execute(
            Command.REPORT_IFSPAM,
            build_report_if_spam(message, self._config.protocol_version),
        )

    async def process(self, message: str) -> SpamdResponse:
        """Return the verdict plus the rewritten message in ``message``."""
        return await self._execute(
            Command.PROCESS, build_process(message, self._config.protocol_version)
        )

    async def headers(self, message: str) -> SpamdResponse:
        """Return the verdict plus the rewritten headers in ``headers``."""
        return await self._execute(
            Command.HEADERS, build_headers(message, self._config.protocol_version)
        )

    async def learn(self, message: str, learn_type: str) -> SpamdResponse:
        """Train the local Bayes database with a message.

        Args:
            message: Raw email text.
            learn_type: SPAM, HAM (NOTSPAM, NOT_SPAM) or FORGET, any case.

        Raises:
            InvalidArgumentError: For an unknown learn type. Nothing is sent.
            FeatureDisabledError: If spamd runs without ``--allow-tell``.
        """
        request = build_learn(message, learn_type, self._config.protocol_version)
        return await self._tell(request)

    async def tell(self, message: str) -> SpamdResponse:
        """Report a message as spam, locally and to remote databases."""
        return await self._tell(build_tell(message, self._config.protocol_version))

    async def revoke(self, message: str) -> SpamdResponse:
        """Retract an earlier spam report, locally and remotely."""
        return await self._tell(build_revoke(message, self._config.protocol_version))
