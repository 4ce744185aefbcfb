"""Output interfaces between the simulation and its presentation.

The game mode only talks to these three sinks. Null sinks drop
everything; recording sinks keep what they receive for tests and
replays.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple

from models import InvadersInternalState, SoundEvent

from .descriptors import HudDescriptor, Renderable


class RenderSink(ABC):
    """Receives one frame of descriptors per render() call."""

    @abstractmethod
    def begin_frame(self) -> None:
        """Start a new frame (clear, draw background)."""
        pass

    @abstractmethod
    def draw(self, renderable: Renderable) -> None:
        """Draw one entity."""
        pass

    @abstractmethod
    def draw_hud(self, hud: HudDescriptor) -> None:
        """Draw overlays: combo, countdown, objectives, state screens."""
        pass

    @abstractmethod
    def end_frame(self) -> None:
        """Finish the frame."""
        pass


class SoundSink(ABC):
    """Plays gameplay sound events."""

    @abstractmethod
    def play(self, event: SoundEvent) -> None:
        pass


class UISink(ABC):
    """Status readouts outside the playfield."""

    @abstractmethod
    def update_stats(self, score: int, lives: int, level: int) -> None:
        pass

    @abstractmethod
    def set_mode_label(self, label: str) -> None:
        pass

    @abstractmethod
    def show_state(self, state: InvadersInternalState) -> None:
        pass

    @abstractmethod
    def show_game_over(self, final_score: int) -> None:
        pass


class NullRenderSink(RenderSink):
    def begin_frame(self) -> None:
        pass

    def draw(self, renderable: Renderable) -> None:
        pass

    def draw_hud(self, hud: HudDescriptor) -> None:
        pass

    def end_frame(self) -> None:
        pass


class NullSoundSink(SoundSink):
    def play(self, event: SoundEvent) -> None:
        pass


class NullUISink(UISink):
    def update_stats(self, score: int, lives: int, level: int) -> None:
        pass

    def set_mode_label(self, label: str) -> None:
        pass

    def show_state(self, state: InvadersInternalState) -> None:
        pass

    def show_game_over(self, final_score: int) -> None:
        pass


class RecordingRenderSink(RenderSink):
    """Keeps the most recent complete frame."""

    def __init__(self):
        self.frames = 0
        self.drawn: List[Renderable] = []
        self.hud: HudDescriptor = None
        self._pending: List[Renderable] = []

    def begin_frame(self) -> None:
        self._pending = []

    def draw(self, renderable: Renderable) -> None:
        self._pending.append(renderable)

    def draw_hud(self, hud: HudDescriptor) -> None:
        self.hud = hud

    def end_frame(self) -> None:
        self.drawn = self._pending
        self.frames += 1

    def kinds(self) -> List[str]:
        """Entity kinds in the last frame, in draw order."""
        return [r.kind for r in self.drawn]


class RecordingSoundSink(SoundSink):
    def __init__(self):
        self.events: List[SoundEvent] = []

    def play(self, event: SoundEvent) -> None:
        self.events.append(event)

    def count(self, event: SoundEvent) -> int:
        return self.events.count(event)


class RecordingUISink(UISink):
    """Remembers the latest value of every readout."""

    def __init__(self):
        self.stats: Tuple[int, int, int] = (0, 0, 0)
        self.stats_updates = 0
        self.mode_label = ''
        self.states: List[InvadersInternalState] = []
        self.game_over_scores: List[int] = []

    def update_stats(self, score: int, lives: int, level: int) -> None:
        self.stats = (score, lives, level)
        self.stats_updates += 1

    def set_mode_label(self, label: str) -> None:
        self.mode_label = label

    def show_state(self, state: InvadersInternalState) -> None:
        self.states.append(state)

    def show_game_over(self, final_score: int) -> None:
        self.game_over_scores.append(final_score)
