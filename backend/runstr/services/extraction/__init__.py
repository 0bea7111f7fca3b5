"""
Extraction module - Turns free-text running notes into typed measurements.
"""
from runstr.services.extraction.parser import NoteParser, extract, parse_note

__all__ = [
    "NoteParser",
    "extract",
    "parse_note",
]
