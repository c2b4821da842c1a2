"""
HMI Text Table Translator

Translates one language column of an HMI/PLC text table export (.xlsx)
into another with Google Gemini, reusing earlier translations wherever the
row structure allows.

Main features:
- Row classification: placeholders, numbers and defaults are copied or skipped
- Reuse: "#" prefixes, "_<number>" suffixes and numeric templates
- Quick mode: only fill target cells that are still empty or "Text"
- Output as .xlsx or .csv
"""

__version__ = "1.0.0"
__author__ = "HMI Text Table Translator project"
