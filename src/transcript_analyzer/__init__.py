"""Cost-aware hierarchical analysis of legal transcripts."""

__version__ = "0.1.0"
