"""
Export module for Daybook.

Handles CSV, JSON and PDF output and JSON import.
"""

from daybook.export.exporter import JournalExporter
from daybook.export.pdf import build_pdf

__all__ = ["JournalExporter", "build_pdf"]
