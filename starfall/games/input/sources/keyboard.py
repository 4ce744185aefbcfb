"""
Keyboard Input Source - Samples pygame keyboard events into InputFrames.

This is a shared module used by all games.
"""
from typing import Dict, Iterable, Set

import pygame

from starfall.games.input.input_frame import InputFrame


# Held controls
LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
SHOOT_KEYS = (pygame.K_SPACE,)

# Edge-triggered controls
PAUSE_KEYS = (pygame.K_p,)
MODE_KEYS = (pygame.K_t,)
START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)
RESTART_KEYS = (pygame.K_r,)
UPGRADE_KEYS: Dict[int, int] = {
    pygame.K_1: 1,
    pygame.K_2: 2,
    pygame.K_3: 3,
    pygame.K_4: 4,
}


class KeyboardInputSource:
    """Keyboard input source.

    Feed it the pygame events of each frame with process_events(), then call
    poll() once to get the frame's InputFrame. Edge-triggered flags are
    cleared by poll(); held keys persist until their KEYUP arrives.
    """

    def __init__(self):
        """Initialize the keyboard input source."""
        self._held: Set[int] = set()
        self._pressed: Set[int] = set()

    def process_events(self, events: Iterable[pygame.event.Event]) -> None:
        """Record KEYDOWN/KEYUP events; other event types are ignored."""
        for event in events:
            if event.type == pygame.KEYDOWN:
                self._held.add(event.key)
                self._pressed.add(event.key)
            elif event.type == pygame.KEYUP:
                self._held.discard(event.key)

    def poll(self) -> InputFrame:
        """Build the InputFrame for this frame and clear edge flags."""
        upgrade = 0
        for key, slot in UPGRADE_KEYS.items():
            if key in self._pressed:
                upgrade = slot
                break

        frame = InputFrame(
            left=self._any(self._held, LEFT_KEYS),
            right=self._any(self._held, RIGHT_KEYS),
            shoot=self._any(self._held, SHOOT_KEYS),
            pause=self._any(self._pressed, PAUSE_KEYS),
            toggle_mode=self._any(self._pressed, MODE_KEYS),
            start=self._any(self._pressed, START_KEYS),
            restart=self._any(self._pressed, RESTART_KEYS),
            upgrade=upgrade,
        )
        self._pressed.clear()
        return frame

    def clear(self) -> None:
        """Forget all held and pressed keys (e.g. on window focus loss)."""
        self._held.clear()
        self._pressed.clear()

    @staticmethod
    def _any(keys: Set[int], wanted: Iterable[int]) -> bool:
        return any(k in keys for k in wanted)
