"""cacheprime — deterministic filler data for benchmark cache priming."""

__version__ = "0.1.0"
