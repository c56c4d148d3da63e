"""Generate, sort, split and search timestamped sensor log files."""

__version__ = "0.1.0"