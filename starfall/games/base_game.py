"""Base class for Starfall games.

A game is driven one frame at a time by its host:
handle_input(frame) -> update(dt) -> render(). Metadata and command-line
options are class attributes so a runner can build its argument parser
without creating the game.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from starfall.games.game_state import GameState
from starfall.games.input import InputFrame
from starfall.logging import get_logger

log = get_logger('base_game')


class BaseGame(ABC):
    """Interface every Starfall game implements.

    Class Attributes:
        NAME: Title shown to players
        DESCRIPTION: One-line summary
        VERSION: Game version
        AUTHOR: Who made it
        ARGUMENTS: argparse option dicts ('name' plus add_argument kwargs)
    """

    NAME: str = "Unnamed Game"
    DESCRIPTION: str = ""
    VERSION: str = "1.0.0"
    AUTHOR: str = "Unknown"

    ARGUMENTS: List[Dict[str, Any]] = []

    # Options every game accepts, appended after the game's own
    _COMMON_ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--seed',
            'type': int,
            'default': None,
            'help': 'Random seed for reproducible runs'
        },
        {
            'name': '--no-audio',
            'action': 'store_true',
            'default': False,
            'help': 'Disable sound effects'
        },
    ]

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        """Game options followed by the common ones; first definition of a name wins."""
        merged: Dict[str, Dict[str, Any]] = {}
        for arg in cls.ARGUMENTS + cls._COMMON_ARGUMENTS:
            merged.setdefault(arg['name'], arg)
        return list(merged.values())

    @property
    def state(self) -> GameState:
        """Host-facing state. Subclasses override _get_internal_state()."""
        return self._get_internal_state()

    @abstractmethod
    def _get_internal_state(self) -> GameState:
        pass

    @abstractmethod
    def get_score(self) -> int:
        pass

    @abstractmethod
    def handle_input(self, frame: InputFrame) -> None:
        """Consume the controls sampled for this frame."""

    @abstractmethod
    def update(self, dt: float) -> None:
        """Advance by dt seconds of wall-clock time."""

    @abstractmethod
    def render(self) -> None:
        """Push the current frame to whatever output the game was given."""

    def reset(self) -> None:
        """Return to the initial state."""
        log.debug("%s reset", self.NAME)
