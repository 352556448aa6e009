"""
Structured text produced by the description generator.

A description is a sequence of spans, some emphasized. Callers decide how
emphasis is rendered: markdown, plain text or a rich console.
"""

from typing import List, Tuple

from pydantic import Field

from pglocks.models.base import PgLocksBaseModel


class TextSpan(PgLocksBaseModel):
    """A run of text, optionally emphasized."""

    text: str
    emphasized: bool = False


class Description(PgLocksBaseModel):
    """Natural-language summary of a lock or command."""

    subject: str = Field(..., description="Name of the described lock or command")
    spans: Tuple[TextSpan, ...] = Field(default=())

    def to_markdown(self) -> str:
        """Render with `**bold**` around emphasized spans."""
        return "".join(f"**{s.text}**" if s.emphasized else s.text for s in self.spans)

    def to_plain(self) -> str:
        return "".join(s.text for s in self.spans)

    def emphasized_terms(self) -> List[str]:
        """Emphasized texts in order of appearance."""
        return [s.text for s in self.spans if s.emphasized]

    def __str__(self) -> str:
        return self.to_markdown()


class DescriptionBuilder:
    """Accumulates spans, merging adjacent runs with the same emphasis."""

    def __init__(self) -> None:
        self._spans: List[TextSpan] = []

    def text(self, value: str) -> "DescriptionBuilder":
        return self._append(value, False)

    def strong(self, value: str) -> "DescriptionBuilder":
        return self._append(value, True)

    def _append(self, value: str, emphasized: bool) -> "DescriptionBuilder":
        if not value:
            return self
        # Emphasized terms stay separate so each one keeps its own span
        if not emphasized and self._spans and not self._spans[-1].emphasized:
            last = self._spans.pop()
            value = last.text + value
        self._spans.append(TextSpan(text=value, emphasized=emphasized))
        return self

    def build(self, subject: str) -> Description:
        return Description(subject=subject, spans=tuple(self._spans))
