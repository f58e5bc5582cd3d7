"""Command verbs and high-level request builders.

Every spamc operation maps to one protocol verb. The TELL family shares a
single verb and differs only in the extra headers it sends.
"""

from __future__ import annotations

from enum import Enum

from ..errors import InvalidArgumentError
from .framing import build_request

Header = tuple[str, str]


class Command(str, Enum):
    """SPAMC protocol verbs."""

    PING = "PING"
    CHECK = "CHECK"
    SYMBOLS = "SYMBOLS"
    REPORT = "REPORT"
    REPORT_IFSPAM = "REPORT_IFSPAM"
    PROCESS = "PROCESS"
    HEADERS = "HEADERS"
    TELL = "TELL"


# Extra headers per learn type (matched case-insensitively)
LEARN_TYPE_HEADERS: dict[str, list[Header]] = {
    "SPAM": [("Message-class", "spam"), ("Set", "local")],
    "HAM": [("Message-class", "ham"), ("Set", "local")],
    "NOTSPAM": [("Message-class", "ham"), ("Set", "local")],
    "NOT_SPAM": [("Message-class", "ham"), ("Set", "local")],
    "FORGET": [("Remove", "local")],
}

# Spam verdict shared with remote databases (Razor, Pyzor, ...)
TELL_HEADERS: list[Header] = [("Message-class", "spam"), ("Set", "local,remote")]
REVOKE_HEADERS: list[Header] = [("Message-class", "ham"), ("Set", "local,remote")]


def build_command(
    command: Command,
    message: str | None = None,
    extra_headers: list[Header] | None = None,
    protocol_version: str = "1.5",
) -> bytes:
    """Build the request bytes for a command."""
    return build_request(
        command.value, message, extra_headers or (), protocol_version
    )


def learn_headers(learn_type: str) -> list[Header]:
    """Return the TELL headers for a learn type.

    Raises:
        InvalidArgumentError: If the learn type is not SPAM, HAM, NOTSPAM,
            NOT_SPAM or FORGET.
    """
    headers = LEARN_TYPE_HEADERS.get(str(learn_type).upper())
    if headers is None:
        raise InvalidArgumentError(
            f"Learn type not found: {learn_type!r}. Valid: {list(LEARN_TYPE_HEADERS)}"
        )
    return headers


def build_ping(protocol_version: str = "1.5") -> bytes:
    """Build a PING request. spamd answers ``SPAMD/1.5 0 PONG``."""
    return build_command(Command.PING, protocol_version=protocol_version)


def build_check(message: str, protocol_version: str = "1.5") -> bytes:
    return build_command(Command.CHECK, message, protocol_version=protocol_version)


def build_symbols(message: str, protocol_version: str = "1.5") -> bytes:
    return build_command(Command.SYMBOLS, message, protocol_version=protocol_version)


def build_report(message: str, protocol_version: str = "1.5") -> bytes:
    return build_command(Command.REPORT, message, protocol_version=protocol_version)


def build_report_if_spam(message: str, protocol_version: str = "1.5") -> bytes:
    return build_command(
        Command.REPORT_IFSPAM, message, protocol_version=protocol_version
    )


def build_process(message: str, protocol_version: str = "1.5") -> bytes:
    return build_command(Command.PROCESS, message, protocol_version=protocol_version)


def build_headers(message: str, protocol_version: str = "1.5") -> bytes:
    return build_command(Command.HEADERS, message, protocol_version=protocol_version)


def build_learn(
    message: str, learn_type: str, protocol_version: str = "1.5"
) -> bytes:
    """Build a TELL request that trains the local Bayes database.

    Args:
        message: Raw email text.
        learn_type: SPAM, HAM (or NOTSPAM / NOT_SPAM) or FORGET.
    """
    return build_command(
        Command.TELL, message, learn_headers(learn_type), protocol_version
    )


def build_tell(message: str, protocol_version: str = "1.5") -> bytes:
    """Build a TELL request reporting the message as spam, locally and remotely."""
    return build_command(Command.TELL, message, TELL_HEADERS, protocol_version)


def build_revoke(message: str, protocol_version: str = "1.5") -> bytes:
    """Build a TELL request retracting an earlier spam report."""
    return build_command(Command.TELL, message, REVOKE_HEADERS, protocol_version)
