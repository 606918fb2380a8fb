"""Wicket mockup server — preview Wicket-style pages, panels and dialogs."""
from wicketmock._version import __version__

__all__ = ["__version__"]
