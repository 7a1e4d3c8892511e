"""Code Store: image hosting keyed by 4-digit codes."""

__version__ = "0.1.0"
