"""Subtitle document service.

This service handles:
- Decoding uploaded subtitle files from legacy encodings
- SRT parsing and serialization
- Storing documents with their timed captions
- Exporting documents with user translations merged in
"""

__version__ = "1.0.0"
