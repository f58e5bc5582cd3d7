"""Protocol layer: request encoding, command builders, and response parsing."""

from .framing import build_request, LineAccumulator
from .commands import Command, build_command
from .parser import parse_response, parse_pong
