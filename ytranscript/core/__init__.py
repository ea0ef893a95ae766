"""Core segmentation, timestamp, and insertion modules.

WHY: The core package is the pure heart of ytranscript — the IR
dataclasses, the two grouping strategies, timestamp labels, and the
frontmatter-aware insertion planner. Formatters, the CLI, and the panel
service all build on it.

HOW: ir.py defines the data structures, segmenter.py groups fragments
into blocks, timestamps.py formats offsets, insertion.py decides where
exported text goes in a note.

RULES:
- No I/O anywhere in this package
- IR dataclasses are the contract between fetching and rendering
- Segmentation is format-agnostic — no markdown or UI details here
"""
