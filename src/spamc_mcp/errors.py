"""Exceptions raised by the spamc client.

Every error derives from :class:`SpamcError`. Where a builtin describes the
failure (``ConnectionError``, ``TimeoutError``, ``ValueError``) the error also
derives from it, so callers can catch either.
"""

from __future__ import annotations


class SpamcError(Exception):
    """Base class for all spamc client errors."""


class TransportError(SpamcError, ConnectionError):
    """The TCP exchange with spamd failed (refused, reset, DNS failure)."""


class SpamdTimeoutError(TransportError, TimeoutError):
    """spamd did not close the connection before the timeout expired."""


class ProtocolParseError(SpamcError, ValueError):
    """The response from spamd did not match the expected grammar."""


class FeatureDisabledError(SpamcError):
    """spamd accepted the request but has the feature turned off.

    Raised for TELL-family commands when spamd answers with code 69
    (``EX_NOTENABLED``), which means it was started without ``--allow-tell``.
    """


class InvalidArgumentError(SpamcError, ValueError):
    """A caller-supplied argument was rejected before contacting spamd."""
