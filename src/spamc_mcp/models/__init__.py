"""Data models for client configuration and parsed responses."""

from .config import ClientConfig
from .response import ReportEntry, SpamdResponse
