"""Parsed spamd response model."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields


@dataclass
class ReportEntry:
    """One scored rule line from a REPORT-style reply.

    Example source line::

        -1.9 BAYES_00  BODY: Bayes spam probability is 0 to 1%

    ``score`` is kept as the text spamd sent.
    """

    score: str
    name: str
    description: str
    type: str


@dataclass
class SpamdResponse:
    """Structured result of a single spamd command.

    Only ``response_code`` and ``response_message`` are always set. The
    other fields stay ``None`` unless the reply carried the matching
    section.
    """

    response_code: int
    response_message: str
    spamd_version: str = ""
    is_spam: bool | None = None
    spam_score: float | None = None
    base_spam_score: float | None = None
    matches: list[str] | None = None
    report: list[ReportEntry] | None = None
    message: str | None = None
    headers: list[str] | None = None
    did_set: bool | None = None
    did_remove: bool | None = None

    @property
    def threshold(self) -> float | None:
        """Alias for ``base_spam_score``, the score needed to be spam."""
        return self.base_spam_score

    def to_dict(self) -> dict:
        """Return the populated fields as a JSON-friendly dict."""
        out: dict = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name == "report":
                value = [asdict(entry) for entry in value]
            out[f.name] = value
        return out
