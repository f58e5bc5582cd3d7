"""Transport layer: one TCP exchange per spamd command."""

from .tcp_connection import SpamdConnection
