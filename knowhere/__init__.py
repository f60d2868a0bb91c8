"""Vector similarity search primitives: datasets, metrics, range utilities, brute-force search and index interfaces."""

__version__ = "0.1.0"