"""Read shell command usage statistics and show them as terminal tables."""

__version__ = "0.1.0"