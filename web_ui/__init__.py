"""
Thumbmark v1 - Web UI

FastAPI application for listing, adding, importing and exporting bookmarks.
"""

__version__ = "1.0.0"
