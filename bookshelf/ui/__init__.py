"""UI package for bookshelf terminal user interfaces.

All UI components are built on the Textual framework. The category list
follows a presenter/screen split: the presenter owns state, the screen
only renders it and forwards user intents.
"""
