"""SPAMC protocol client for SpamAssassin's spamd, with an MCP server front end."""

from .client import SpamcClient
from .errors import (
    FeatureDisabledError,
    InvalidArgumentError,
    ProtocolParseError,
    SpamcError,
    SpamdTimeoutError,
    TransportError,
)
from .models import ClientConfig, ReportEntry, SpamdResponse
