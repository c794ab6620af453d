"""Text data tools: angle analysis, SEP table interpolation, and magnetometer file conversion and merging."""

__version__ = "1.0.0"