"""
Encore - content-addressed music library import.

Encore walks one or more library roots, fingerprints every supported audio file
by its bytes and imports each distinct piece of content exactly once into a small
SQLite catalog of tracks, artists and albums.
"""

__version__ = "0.1.0"
__author__ = "Encore Contributors"
__license__ = "GPL-2.0"

from encore.core.library import MusicLibrary
from encore.core.scanner import LibraryScanner, ScanResult

__all__ = ["LibraryScanner", "MusicLibrary", "ScanResult", "__version__"]
