"""
Starfall Arcade Framework

Shared pieces used by every Starfall game: the BaseGame interface, the
standard GameState enum, keyboard input sampling, and project logging.
"""

__version__ = "1.0.0"

__all__ = ['__version__']
