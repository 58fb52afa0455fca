"""CodeGuard AI command-line scanner."""

__version__ = "1.0.0"
