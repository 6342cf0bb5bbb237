"""In-memory data structures for a key-value store: lock tables, dicts, lists, bitmaps, sets and sorted sets."""

__version__ = "0.1.0"