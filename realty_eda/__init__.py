"""Sales and rainfall exploratory-analysis pipeline."""

__version__ = "0.1.0"
