"""
mdpreview - Markdown to HTML live preview.
"""

__version__ = "1.0.0"
