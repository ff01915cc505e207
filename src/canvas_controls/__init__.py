"""
Canvas Controls - control availability and composition for canvas elements

Decides which operations a selected canvas element exposes on the toolbar,
the context menu and the tool panel, and whether each one is enabled.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
