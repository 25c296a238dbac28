"""locpattern - warehouse location pattern expansion."""

__version__ = "0.1.0"
