"""Service layer for buildcat: I/O at the edges of the pure core."""

from .records import JsonFileRecordSource, load_catalog, load_records, normalize_record_items

__all__ = [
    "JsonFileRecordSource",
    "load_catalog",
    "load_records",
    "normalize_record_items",
]
