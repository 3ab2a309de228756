"""Report formatter registry.

WHY: The CLI needs a single lookup to find a formatter by name. A
central dict makes adding a format one import and one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["json_report"]()``.

RULES:
- Keys are snake_case identifiers (used in the --formats flag)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jpeg_inspector.formatters.json_report import JsonReportFormatter
from jpeg_inspector.formatters.summary_text import SummaryTextFormatter

if TYPE_CHECKING:
    from jpeg_inspector.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "json_report": JsonReportFormatter,
    "summary_text": SummaryTextFormatter,
}
