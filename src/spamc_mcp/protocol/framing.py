"""Request encoder and response line splitter for the SPAMC protocol.

Request layout::

    <VERB> SPAMC/<version>\\r\\n
    Content-length: <len(message) + 2>\\r\\n      (only with a message)
    <Name>: <value>\\r\\n                          (extra headers, in order)
    \\r\\n
    <message>\\r\\n                               (only with a message)

- Content-length counts UTF-8 bytes of the message plus its trailing CRLF
- The transport appends one more CRLF (``REQUEST_TERMINATOR``) when sending
- spamd replies with CRLF-separated lines and closes the connection when done
"""

from __future__ import annotations

import codecs
from collections.abc import Iterable

CRLF = "\r\n"
REQUEST_TERMINATOR = b"\r\n"
ENCODING = "utf-8"


def build_request(
    verb: str,
    message: str | None = None,
    extra_headers: Iterable[tuple[str, str]] = (),
    protocol_version: str = "1.5",
) -> bytes:
    """Encode a SPAMC request.

    Args:
        verb: Command verb, e.g. ``CHECK``.
        message: Raw email text. ``None`` for commands without a body (PING).
        extra_headers: ``(name, value)`` pairs written after Content-length.
            Only emitted when a message is present. Not validated.
        protocol_version: Version sent in the request line.

    Returns:
        The request bytes, without the final ``REQUEST_TERMINATOR``.
    """
    request = f"{verb} SPAMC/{protocol_version}{CRLF}"
    if message is not None:
        body = message + CRLF
        request += f"Content-length: {len(body.encode(ENCODING))}{CRLF}"
        for name, value in extra_headers:
            request += f"{name}: {value}{CRLF}"
        request += CRLF + body
    return request.encode(ENCODING)


class LineAccumulator:
    """Split inbound chunks into non-empty CRLF-delimited lines.

    A line (or a multi-byte character) cut between two chunks is held
    back until the rest arrives. Empty lines are dropped.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder(ENCODING)(errors="replace")
        self._partial = ""
        self.lines: list[str] = []

    def feed(self, chunk: bytes) -> None:
        text = self._partial + self._decoder.decode(chunk)
        parts = text.split(CRLF)
        self._partial = parts.pop()
        self.lines.extend(part for part in parts if part)

    def finish(self) -> list[str]:
        """Flush whatever is left after EOF and return all lines."""
        tail = self._partial + self._decoder.decode(b"", final=True)
        self._partial = ""
        if tail:
            self.lines.append(tail)
        return self.lines
