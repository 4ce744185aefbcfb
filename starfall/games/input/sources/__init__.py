"""
Input source implementations.
"""

from starfall.games.input.sources.keyboard import KeyboardInputSource

__all__ = ['KeyboardInputSource']
