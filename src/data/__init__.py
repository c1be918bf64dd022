"""
Data I/O and schema enforcement.

Handles reading the wide temperature text file and the cached growth-study CSV,
with strict schema validation at every boundary.
"""
