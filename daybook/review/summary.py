"""
Journal review module.

Formats the statistics as a plain-text report for reflection.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from daybook.core.utils import format_days_human

logger = logging.getLogger(__name__)


def _top(counts: Dict[str, int], limit: int = 5) -> list:
    return [f"  {label}: {count}" for label, count in list(counts.items())[:limit]]


def format_summary(stats: dict) -> str:
    """
    Format journal statistics as plain text.

    Args:
        stats: Output of JournalStats.get_summary()
    """
    lines = [
        f"Daybook - Journal Review ({stats['today']:%Y-%m-%d})",
        "",
    ]

    if stats["total_entries"] == 0:
        lines.extend([
            "No entries written yet.",
            "",
            "Start small:",
            "- One sentence about today is enough.",
        ])
        return "\n".join(lines)

    since_days = (stats["today"] - stats["first_entry"]).days

    lines.extend([
        f"Entries: {stats['total_entries']}",
        f"Words: {stats['total_words']:,}",
        f"Journaling since: {stats['first_entry']:%Y-%m-%d} ({format_days_human(since_days)})",
        "",
        "Streaks:",
        f"Current: {stats['current_streak']} days",
        f"Longest: {stats['longest_streak']} days",
        f"Missed: {stats['missed_days']} days",
        "",
    ])

    if stats["mood_counts"]:
        lines.append("Moods:")
        lines.extend(_top(stats["mood_counts"]))
        families = stats["mood_category_counts"]
        lines.append(
            "  (" + ", ".join(f"{name} {count}" for name, count in families.items()) + ")"
        )
        lines.append("")

    lines.append("Categories:")
    lines.extend(_top(stats["category_counts"]))
    lines.append("")

    if stats["tag_counts"]:
        lines.append("Tags:")
        lines.extend(_top(stats["tag_counts"]))
        lines.append("")

    lines.append("Entries per month:")
    lines.extend(_top(stats["entries_per_month"], limit=12))
    lines.append("")

    # Suggest ONE focus
    if stats["current_streak"] == 0:
        lines.append("ONE FOCUS NEXT:")
        lines.append("-> Write today's entry to restart the streak")
        lines.append("")
    elif stats["missed_days"] > stats["total_entries"]:
        lines.append("ONE FOCUS NEXT:")
        lines.append("-> Pick a fixed time of day for writing")
        lines.append("")

    return "\n".join(lines)


def export_summary(stats: dict, filepath: Optional[str] = None) -> str:
    """
    Export the review report to file.

    Returns file path.
    """
    if not filepath:
        filepath = f"data/journal_review_{stats['today']:%Y%m%d}.txt"

    Path(filepath).parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w") as f:
        f.write(format_summary(stats))

    logger.info(f"Journal review exported to {filepath}")
    return filepath
