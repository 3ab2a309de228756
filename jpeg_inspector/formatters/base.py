"""Abstract base formatter and output container.

WHY: Every report format consumes the same Document but produces
different file content. This base class gives the CLI one way to run
any formatter.

HOW: BaseFormatter is an ABC with a ``name`` property and a
``format()`` method. FormatterOutput bundles a file suffix with its
content and MIME type.

RULES:
- Subclasses MUST implement ``name`` and ``format()``
- ``format()`` returns a list, usually of one item
- ``suffix`` starts with a hyphen, e.g. ``"-segments.json"``
- The caller prepends the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from jpeg_inspector.core.ir import Document


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-segments.json"`` → ``"photo-segments.json"``.
        content: The file content.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: str | bytes
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all report formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'JSON report'."""

    @abstractmethod
    def format(self, document: Document) -> list[FormatterOutput]:
        """Render the Document into one or more output files."""
