"""AI Mirror: safety-gated conversation classification service."""

__version__ = "0.1.0"
