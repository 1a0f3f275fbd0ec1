"""Recipe Extractor Service.

Turns a recipe page URL into a normalized, saved recipe bookmark.
"""

__version__ = "0.1.0"
