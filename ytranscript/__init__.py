"""YTranscript — YouTube caption tracks as markdown notes and timestamped blocks.

WHY: A video's caption track arrives as a flat list of short timed
fragments. Nobody reads that list directly: notes want flowing prose with
occasional timestamps, and a side panel wants uniform blocks that jump
the video to the moment they start.

HOW: Three-stage pipeline — fetch (caption source client), segment (core
grouping strategies), render (pluggable formatters). Each stage is
independently testable; only the fetch stage touches the network.

RULES:
- All renderers consume the same CaptionFragment list
- Adding an output format = one new formatter module, no core changes
- The grouping cadence is always validated before any work starts
"""

__version__ = "0.1.0"
