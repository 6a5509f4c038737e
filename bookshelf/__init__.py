"""
bookshelf - Browse bestseller list categories from the terminal
"""

__version__ = "0.3.0"
