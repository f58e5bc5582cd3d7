"""Response parsing for spamd replies.

spamd answers with a status line followed by a loosely structured body
that depends on the command. Each piece of the body has its own small
grammar, implemented as an independent function below. ``parse_response``
composes them in a fixed order per line: verdict, then symbol list, then
report entries.
"""

from __future__ import annotations

import re

from ..errors import ProtocolParseError
from ..models.response import ReportEntry, SpamdResponse
from .commands import Command

STATUS_LINE = re.compile(r"^SPAMD/([0-9.]+)\s+([0-9]+)\s+(.+)$")
VERDICT_LINE = re.compile(
    r"Spam:\s*(True|False|Yes|No)\s*;\s*(-?[0-9.]+)\s*/\s*(-?[0-9.]+)"
)
SYMBOL_LIST = re.compile(r"^[A-Z0-9_]+(?:,[A-Z0-9_]+)*,?$")
REPORT_ENTRY = re.compile(
    r"(?:^|\s)(-?[0-9.]+)\s([A-Z0-9_]+)\s([^:]+):[ \t]+(\S+)[^\n]*"
)
LINE_BREAK = re.compile(r"\s*\n\s*")

# Lines before the body in PROCESS / HEADERS replies
BODY_OFFSET = 3

EX_NOTENABLED = 69


def parse_status_line(line: str) -> tuple[str, int, str] | None:
    """Parse ``SPAMD/<version> <code> <message>``.

    Returns:
        ``(version, code, message)`` or ``None`` if the line does not match.
    """
    match = STATUS_LINE.match(line.strip())
    if match is None:
        return None
    version, code, message = match.groups()
    return version, int(code), message.strip()


def parse_verdict_line(line: str) -> tuple[bool, float, float] | None:
    """Parse ``Spam: True ; 15.0 / 5.0``.

    Returns:
        ``(is_spam, score, threshold)`` or ``None`` if the line does not match.

    Raises:
        ProtocolParseError: If a score token is not a valid number.
    """
    match = VERDICT_LINE.search(line)
    if match is None:
        return None
    verdict, score, threshold = match.groups()
    try:
        return verdict in ("True", "Yes"), float(score), float(threshold)
    except ValueError as e:
        raise ProtocolParseError(f"spamd sent a malformed score: {line!r}") from e


def parse_symbol_list(line: str, allow_single: bool = False) -> list[str] | None:
    """Parse a comma-separated rule list such as ``BAYES_00,HTML_MESSAGE``.

    A bare name without any comma only counts when ``allow_single`` is set,
    since most replies can contain upper-case words on their own.
    """
    line = line.rstrip()
    if SYMBOL_LIST.match(line) is None:
        return None
    if "," not in line and not allow_single:
        return None
    return [name for name in line.split(",") if name]


def parse_report_entries(text: str) -> list[ReportEntry]:
    """Extract every scored rule from a chunk of report text.

    spamd separates report rows with bare LF, so one received line can
    hold the whole table. A description wrapped over several rows is
    joined with single spaces.
    """
    entries = []
    for match in REPORT_ENTRY.finditer(text):
        score, name, description, kind = match.groups()
        entries.append(
            ReportEntry(
                score=score,
                name=name,
                description=LINE_BREAK.sub(" ", description).strip(),
                type=kind,
            )
        )
    return entries


def fold_headers(lines: list[str]) -> list[str]:
    """Rebuild headers, appending tab-indented continuation lines to their header."""
    headers: list[str] = []
    for line in lines:
        if "\t" in line and headers:
            headers[-1] += line
        else:
            headers.append(line)
    return headers


def parse_pong(lines: list[str]) -> bool:
    """Return True if the first reply line contains PONG after its start."""
    if not lines:
        return False
    return lines[0].find("PONG") > 0


def parse_response(command: Command, lines: list[str]) -> SpamdResponse:
    """Parse the lines of a spamd reply for the given command.

    Args:
        command: The verb that was sent.
        lines: Non-empty reply lines, status line first.

    Returns:
        A ``SpamdResponse`` with the sections present in the reply.

    Raises:
        ProtocolParseError: If the status line is missing or malformed, or
            a numeric field cannot be parsed.
    """
    status = parse_status_line(lines[0]) if lines else None
    if status is None:
        first = lines[0] if lines else ""
        raise ProtocolParseError(f"spamd unrecognized response: {first!r}")

    version, code, text = status
    result = SpamdResponse(
        response_code=code, response_message=text, spamd_version=version
    )
    if command == Command.TELL:
        result.did_set = False
        result.did_remove = False

    for line in lines:
        verdict = parse_verdict_line(line)
        if verdict is not None:
            result.is_spam, result.spam_score, result.base_spam_score = verdict
        else:
            symbols = parse_symbol_list(
                line, allow_single=command == Command.SYMBOLS
            )
            if symbols is not None:
                result.matches = symbols
            elif command != Command.PROCESS:
                entries = parse_report_entries(line)
                if entries:
                    if result.report is None:
                        result.report = []
                    result.report.extend(entries)

        if "DidSet:" in line:
            result.did_set = True
        if "DidRemove:" in line:
            result.did_remove = True

    body = lines[BODY_OFFSET:]
    if command == Command.PROCESS:
        result.message = "".join(line + "\r\n" for line in body)
    elif command in (Command.HEADERS, Command.TELL):
        result.headers = fold_headers(body)

    return result
