"""
Input abstraction layer for Starfall games.

Games never read the keyboard directly; a source samples the device once
per frame and hands the game an immutable InputFrame.
"""

from starfall.games.input.input_frame import InputFrame

__all__ = ['InputFrame']
