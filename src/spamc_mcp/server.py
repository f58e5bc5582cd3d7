"""MCP server entry point for spamd.

Exposes the spamc commands as tools, plus a configuration resource and a
triage prompt, via the Model Context Protocol using the official Python
MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .client import SpamcClient
from .errors import SpamcError
from .models.config import ClientConfig

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "spamc",
    instructions="MCP server for checking and training SpamAssassin (spamd)",
)

# Global client, replaced by the 'configure' tool
_client = SpamcClient()


def _get_client() -> SpamcClient:
    return _client


def _error(exc: SpamcError) -> dict[str, Any]:
    logger.warning("spamd command failed: %s", exc)
    return {"error": str(exc), "error_type": type(exc).__name__}


# ─── CONFIGURATION TOOLS ──────────────────────────────────────────────

@mcp.tool()
def configure(host: str = "127.0.0.1", port: int = 783, timeout: float = 10) -> dict[str, Any]:
    """Point the server at a spamd instance.

    Args:
        host: spamd host name or address (default 127.0.0.1).
        port: spamd TCP port (default 783).
        timeout: Seconds to wait for each command (default 10).
    """
    global _client
    try:
        config = ClientConfig(host=host, port=port, timeout=timeout)
    except SpamcError as e:
        return _error(e)
    _client = SpamcClient(config=config)
    logger.info("Using spamd at %s:%s", host, port)
    return {"configured": True, **config.to_dict()}


@mcp.tool()
async def ping() -> dict[str, Any]:
    """Check that spamd is reachable and answering PONG."""
    try:
        return {"pong": await _get_client().ping()}
    except SpamcError as e:
        return _error(e)


# ─── CLASSIFICATION TOOLS ─────────────────────────────────────────────

@mcp.tool()
async def check(message: str) -> dict[str, Any]:
    """Return the spam verdict and score for a raw email message.

    Args:
        message: Full RFC 822 message text, headers included.
    """
    try:
        result = await _get_client().check(message)
    except SpamcError as e:
        return _error(e)
    return result.to_dict()


@mcp.tool()
async def symbols(message: str) -> dict[str, Any]:
    """Return the spam verdict and the names of the rules that matched.

    Args:
        message: Full RFC 822 message text, headers included.
    """
    try:
        result = await _get_client().symbols(message)
    except SpamcError as e:
        return _error(e)
    return result.to_dict()


@mcp.tool()
async def report(message: str) -> dict[str, Any]:
    """Return the spam verdict with a per-rule score report.

    Args:
        message: Full RFC 822 message text, headers included.
    """
    try:
        result = await _get_client().report(message)
    except SpamcError as e:
        return _error(e)
    return result.to_dict()


@mcp.tool()
async def report_if_spam(message: str) -> dict[str, Any]:
    """Return the verdict, with the rule report only if the message is spam.

    Args:
        message: Full RFC 822 message text, headers included.
    """
    try:
        result = await _get_client().report_if_spam(message)
    except SpamcError as e:
        return _error(e)
    return result.to_dict()


@mcp.tool()
async def process(message: str) -> dict[str, Any]:
    """Return the message as rewritten by SpamAssassin (with X-Spam headers).

    Args:
        message: Full RFC 822 message text, headers included.
    """
    try:
        result = await _get_client().process(message)
    except SpamcError as e:
        return _error(e)
    return result.to_dict()


@mcp.tool()
async def headers(message: str) -> dict[str, Any]:
    """Return only the headers SpamAssassin would write for the message.

    Args:
        message: Full RFC 822 message text, headers included.
    """
    try:
        result = await _get_client().headers(message)
    except SpamcError as e:
        return _error(e)
    return result.to_dict()


# ─── TRAINING TOOLS ───────────────────────────────────────────────────

@mcp.tool()
async def learn(message: str, learn_type: str) -> dict[str, Any]:
    """Train the local Bayes database. Requires spamd --allow-tell.

    Args:
        message: Full RFC 822 message text, headers included.
        learn_type: "spam", "ham" (or "notspam") or "forget".
    """
    try:
        result = await _get_client().learn(message, learn_type)
    except SpamcError as e:
        return _error(e)
    return result.to_dict()


@mcp.tool()
async def tell(message: str) -> dict[str, Any]:
    """Report a message as spam locally and to remote databases.

    Args:
        message: Full RFC 822 message text, headers included.
    """
    try:
        result = await _get_client().tell(message)
    except SpamcError as e:
        return _error(e)
    return result.to_dict()


@mcp.tool()
async def revoke(message: str) -> dict[str, Any]:
    """Retract an earlier spam report for a message.

    Args:
        message: Full RFC 822 message text, headers included.
    """
    try:
        result = await _get_client().revoke(message)
    except SpamcError as e:
        return _error(e)
    return result.to_dict()


# ─── MCP RESOURCES ────────────────────────────────────────────────────

@mcp.resource("spamc://config")
def resource_config() -> str:
    """Current spamd connection settings."""
    return json.dumps(_get_client().config.to_dict(), indent=2)


# ─── MCP PROMPTS ─────────────────────────────────────────────────────

@mcp.prompt()
def triage_message(message: str) -> str:
    """Guide the AI through classifying a message and training on the outcome.

    Args:
        message: Full RFC 822 message text.
    """
    return f"""Decide whether the following message is spam.

Steps:
- Run the report tool and read the score, threshold and matched rules
- Point out the rules that contributed most to the score
- If the verdict looks wrong, ask before training
- To train, use learn with "spam" or "ham"; use revoke to undo a tell

Message:
{message}"""


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
