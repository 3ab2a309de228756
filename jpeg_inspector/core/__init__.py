"""Core dispatch engine, cursor, registry and intermediate representation.

WHY: The core package holds the parts every caller depends on: the
marker catalogue, the byte cursor, the Document IR with its table
registry, the error taxonomy and the dispatch loop itself.

HOW: markers.py names the codes, cursor.py reads the bytes, ir.py and
tables.py hold the results, opener.py drives the loop, errors.py
defines what can go wrong.

RULES:
- No pixel reconstruction here; scans are headers only
- No module-level mutable state; every parse gets a fresh Document
- Segment payload layouts live in jpeg_inspector.segments, not here
"""
