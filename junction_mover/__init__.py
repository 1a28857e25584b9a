"""Move directory trees elsewhere and leave junctions at their old paths."""

__version__ = "0.1.0"
