"""cobragen — scaffold Cobra command-line applications."""

__version__ = "0.1.0"
