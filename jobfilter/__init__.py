"""LATAM remote-relevance classification for ATS job postings."""

__version__ = "0.1.0"
