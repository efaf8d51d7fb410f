"""Building blocks for HTTP APIs: JSON and CSV codecs, Content-Type parsing, API errors, byte sizes, logging and URL routing."""

__version__ = "0.1.0"