"""
Plain-text export of a workshop summary (strategic-insights.txt).
"""
from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from services.insights import InsightsSummary
from services.responses import Response

EXPORT_FILENAME = "strategic-insights.txt"
EXPORT_MEDIA_TYPE = "text/plain"
DEFAULT_THEME_LIMIT = 10


def format_locale_date(day: date) -> str:
    """en-US short date, e.g. 3/7/2026"""
    return f"{day.month}/{day.day}/{day.year}"


def _bullets(items: Sequence[str]) -> str:
    return "\n".join(f"• {item}" for item in items)


def render_export(responses: Sequence[Response], summary: InsightsSummary,
                  generated_on: Optional[date] = None,
                  theme_limit: int = DEFAULT_THEME_LIMIT) -> str:
    generated_on = generated_on or date.today()

    response_blocks = "\n".join(
        f"\n{response.question}\n→ {response.answer}\n" for response in responses
    )
    themes = [
        f"{entry.word} (mentioned {entry.count} times)"
        for entry in summary.word_cloud[:theme_limit]
    ]

    sections = [
        "Strategic Workshop Insights\n==========================",
        f"RESPONSES:\n{response_blocks}",
        f"KEY THEMES:\n{_bullets(themes)}",
        f"STRATEGIC PRIORITIES:\n{_bullets(summary.priorities)}",
        f"POTENTIAL PITFALLS:\n{_bullets(summary.pitfalls)}",
        f"Generated on {format_locale_date(generated_on)}",
    ]
    return "\n\n".join(sections) + "\n"
