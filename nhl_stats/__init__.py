"""NHL Stats - fetch, store and export NHL game feeds."""

__version__ = "0.1.0"
