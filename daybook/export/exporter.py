"""
Journal export and import.

Writes entries as CSV, JSON or a PDF report, and reads back
the JSON format.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from daybook.core.db import StorageHandle
from daybook.core.models import JournalEntry
from daybook.core.utils import parse_date
from daybook.export.pdf import build_pdf
from daybook.store.entries import EntryStore

logger = logging.getLogger(__name__)

CSV_HEADER = "Date,Title,Content,PrimaryMood,Category,WordCount"

# Entry fields taken from imported JSON; everything else is ignored
IMPORT_FIELDS = (
    "title",
    "content",
    "primary_mood",
    "secondary_mood1",
    "secondary_mood2",
    "category",
)

EXPORT_SUFFIXES = {"csv": ".csv", "json": ".json", "pdf": ".pdf"}


def _csv_quote(value: Optional[str]) -> str:
    """Always quote, doubling embedded quotes."""
    # csv.writer quotes all columns or none; date and word count stay bare
    return '"' + (value or "").replace('"', '""') + '"'


def _parse_import_item(item: Any) -> Optional[JournalEntry]:
    """Build a transient entry from one JSON object, or None if unusable."""
    if not isinstance(item, dict) or "entry_date" not in item:
        return None

    try:
        entry_date = parse_date(item["entry_date"])
    except ValueError:
        return None

    fields: Dict[str, Any] = {}
    for name in IMPORT_FIELDS:
        value = item.get(name)
        if value is not None and not isinstance(value, str):
            return None
        fields[name] = value

    return JournalEntry(entry_date=entry_date, **fields)


class JournalExporter:
    """Serializes the journal and restores it from JSON."""

    def __init__(self, handle: StorageHandle):
        self.handle = handle
        self.entries = EntryStore(handle)

    def _oldest_first(self) -> List[JournalEntry]:
        return list(reversed(self.entries.list_all_newest_first()))

    def to_csv(self) -> str:
        """
        Export entries as CSV, oldest first.

        Text fields are always quoted so any consumer can parse content
        containing commas, quotes or newlines.
        """
        lines = [CSV_HEADER]

        for entry in self._oldest_first():
            lines.append(",".join([
                entry.entry_date.strftime("%Y-%m-%d"),
                _csv_quote(entry.title),
                _csv_quote(entry.content),
                _csv_quote(entry.primary_mood),
                _csv_quote(entry.category),
                str(entry.word_count or 0),
            ]))

        return "\n".join(lines) + "\n"

    def to_json(self) -> str:
        """Export entries as an indented JSON array, oldest first. Tags are not included."""
        return json.dumps(
            [entry.to_dict() for entry in self._oldest_first()],
            indent=2,
            ensure_ascii=False,
        )

    def to_pdf_bytes(self) -> bytes:
        """Render entries, oldest first, as a PDF report."""
        return build_pdf(self._oldest_first(), title=self.handle.config.pdf_title)

    def import_from_json(self, text: Optional[str]) -> int:
        """
        Import entries from the JSON export format.

        Each item is upserted by date; ids, timestamps and word counts in
        the input are ignored. Tags are not restored. Malformed input
        imports nothing.

        Returns:
            Number of distinct days imported (0 on malformed input)
        """
        if not text or not text.strip():
            return 0

        try:
            items = json.loads(text)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Import skipped, invalid JSON: {e}")
            return 0

        if not isinstance(items, list) or not items:
            logger.warning("Import skipped, expected a non-empty JSON array")
            return 0

        parsed = [_parse_import_item(item) for item in items]
        if any(entry is None for entry in parsed):
            bad = sum(1 for entry in parsed if entry is None)
            logger.warning(f"Import skipped, {bad} of {len(items)} items are not valid entries")
            return 0

        with self.handle.session_scope() as session:
            for entry in parsed:
                self.entries.upsert_in_session(session, entry)

        imported = len({entry.entry_date for entry in parsed})
        logger.info(f"Imported {imported} entries from JSON")
        return imported

    def write_export(self, kind: str, path: Optional[str] = None) -> Path:
        """
        Write an export to disk.

        Args:
            kind: "csv", "json" or "pdf"
            path: Output file (defaults to a timestamped file in export_dir)

        Returns:
            Path written

        Raises:
            ValueError: If kind is not supported
        """
        kind = kind.lower()
        if kind not in EXPORT_SUFFIXES:
            raise ValueError(
                f"Unknown export format '{kind}'. Available: {', '.join(EXPORT_SUFFIXES)}"
            )

        if path:
            output = Path(path)
        else:
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output = Path(self.handle.config.export_dir) / f"journal_export_{stamp}{EXPORT_SUFFIXES[kind]}"

        output.parent.mkdir(parents=True, exist_ok=True)

        if kind == "pdf":
            output.write_bytes(self.to_pdf_bytes())
        elif kind == "json":
            output.write_text(self.to_json(), encoding="utf-8")
        else:
            output.write_text(self.to_csv(), encoding="utf-8", newline="")

        logger.info(f"Exported journal as {kind} to {output}")
        return output
