"""GitHub repository hygiene reports."""

__version__ = "0.1.0"
