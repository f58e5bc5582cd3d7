"""Tests for request encoding and reply line splitting."""

from spamc_mcp.protocol.framing import (
    LineAccumulator,
    REQUEST_TERMINATOR,
    build_request,
)


def test_build_request_check_layout():
    """A CHECK request carries the verb line, length, blank line and body."""
    request = build_request("CHECK", "Hello")
    assert request == (
        b"CHECK SPAMC/1.5\r\n"
        b"Content-length: 7\r\n"
        b"\r\n"
        b"Hello\r\n"
    )


def test_build_request_without_message():
    """PING has no Content-length and no body."""
    assert build_request("PING") == b"PING SPAMC/1.5\r\n"


def test_build_request_terminator_is_not_included():
    """The transport appends the final CRLF, not the encoder."""
    assert REQUEST_TERMINATOR == b"\r\n"
    assert build_request("PING") + REQUEST_TERMINATOR == b"PING SPAMC/1.5\r\n\r\n"


def test_content_length_counts_utf8_bytes():
    """Content-length is a byte count, not a character count."""
    request = build_request("CHECK", "héllo")
    # 6 bytes of UTF-8 + CRLF
    assert b"Content-length: 8\r\n" in request
    assert request.endswith("héllo\r\n".encode("utf-8"))


def test_extra_headers_in_order_after_length():
    request = build_request(
        "TELL", "msg", [("Message-class", "spam"), ("Set", "local")]
    )
    assert request == (
        b"TELL SPAMC/1.5\r\n"
        b"Content-length: 5\r\n"
        b"Message-class: spam\r\n"
        b"Set: local\r\n"
        b"\r\n"
        b"msg\r\n"
    )


def test_extra_headers_ignored_without_message():
    request = build_request("PING", None, [("Set", "local")])
    assert request == b"PING SPAMC/1.5\r\n"


def test_protocol_version_in_request_line():
    assert build_request("PING", protocol_version="1.2").startswith(b"PING SPAMC/1.2\r\n")


def test_empty_message_still_has_body():
    """An empty string is a message; only None means no body."""
    request = build_request("CHECK", "")
    assert request == b"CHECK SPAMC/1.5\r\nContent-length: 2\r\n\r\n\r\n"


def test_accumulator_drops_empty_lines():
    acc = LineAccumulator()
    acc.feed(b"SPAMD/1.5 0 EX_OK\r\nSpam: True ; 15.0 / 5.0\r\n\r\nBODY\r\n")
    assert acc.finish() == ["SPAMD/1.5 0 EX_OK", "Spam: True ; 15.0 / 5.0", "BODY"]


def test_accumulator_joins_line_split_across_chunks():
    acc = LineAccumulator()
    acc.feed(b"SPAMD/1.5 0 EX")
    acc.feed(b"_OK\r")
    acc.feed(b"\nSpam: False ; 1.0 / 5.0")
    assert acc.finish() == ["SPAMD/1.5 0 EX_OK", "Spam: False ; 1.0 / 5.0"]


def test_accumulator_handles_split_multibyte_character():
    encoded = "Subject: café\r\n".encode("utf-8")
    cut = encoded.index(b"\xc3") + 1
    acc = LineAccumulator()
    acc.feed(encoded[:cut])
    acc.feed(encoded[cut:])
    assert acc.finish() == ["Subject: café"]


def test_accumulator_keeps_bare_lf_inside_line():
    """Report rows are LF separated and stay within one CRLF line."""
    acc = LineAccumulator()
    acc.feed(b" 1.0 A_RULE desc: x\n 2.0 B_RULE desc: y\r\n")
    assert acc.finish() == [" 1.0 A_RULE desc: x\n 2.0 B_RULE desc: y"]


def test_accumulator_replaces_invalid_bytes():
    acc = LineAccumulator()
    acc.feed(b"bad \xff byte\r\n")
    assert acc.finish() == ["bad � byte"]
