"""Procedural tone playback for Invaders sound events.

Each event gets a short numpy-generated tone with a decaying envelope.
If the mixer cannot be opened the sink logs a warning and plays nothing.
"""

from typing import Dict, Optional

import numpy as np
import pygame

from models import SoundEvent

from ..config import AUDIO_ENABLED, MASTER_VOLUME, SFX_VOLUME
from .sinks import SoundSink
from starfall.logging import get_logger

log = get_logger('invaders.audio')

SAMPLE_RATE = 22050

# (frequency Hz, duration s, waveform)
TONES: Dict[SoundEvent, tuple] = {
    SoundEvent.SHOOT: (800.0, 0.1, 'square'),
    SoundEvent.EXPLOSION: (200.0, 0.3, 'sawtooth'),
    SoundEvent.ENEMY_HIT: (400.0, 0.15, 'triangle'),
    SoundEvent.POWER_UP: (1200.0, 0.2, 'sine'),
}


def waveform(frequency: float, duration: float, shape: str = 'sine',
             sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Raw waveform in [-1, 1] with an exponential decay from 1.0 to 0.1.

    Raises:
        ValueError: If shape is not sine, square, sawtooth or triangle
    """
    num_samples = max(1, int(sample_rate * duration))
    t = np.linspace(0, duration, num_samples, False)
    phase = (t * frequency) % 1.0

    if shape == 'sine':
        wave = np.sin(2.0 * np.pi * phase)
    elif shape == 'square':
        wave = np.where(phase < 0.5, 1.0, -1.0)
    elif shape == 'sawtooth':
        wave = 2.0 * phase - 1.0
    elif shape == 'triangle':
        wave = 1.0 - 4.0 * np.abs(phase - 0.5)
    else:
        raise ValueError(f"Unknown waveform: {shape}")

    envelope = np.geomspace(1.0, 0.1, num_samples)
    return wave * envelope


def to_stereo_int16(wave: np.ndarray, gain: float = 0.3) -> np.ndarray:
    """Scale to 16-bit and duplicate into two contiguous channels."""
    mono = (wave * 32767 * gain).astype(np.int16)
    return np.ascontiguousarray(np.column_stack((mono, mono)))


class ToneSoundSink(SoundSink):
    """SoundSink backed by pygame.mixer.

    Attributes:
        audio_enabled: False when disabled by the caller or if mixer setup failed
        sounds: Generated sound per event (empty when audio is off)
    """

    def __init__(self, audio_enabled: bool = True):
        self.audio_enabled = audio_enabled and AUDIO_ENABLED
        self.sounds: Dict[SoundEvent, Optional[pygame.mixer.Sound]] = {}

        if self.audio_enabled:
            self._init_audio()

    def _init_audio(self) -> None:
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
            for event, (frequency, duration, shape) in TONES.items():
                sound = pygame.sndarray.make_sound(to_stereo_int16(waveform(frequency, duration, shape)))
                sound.set_volume(SFX_VOLUME * MASTER_VOLUME)
                self.sounds[event] = sound
        except (pygame.error, ValueError) as e:
            log.warning(f"Audio initialization failed, sound disabled: {e}")
            self.audio_enabled = False
            self.sounds = {}

    def play(self, event: SoundEvent) -> None:
        """Play an event's tone. Does nothing while audio is off."""
        if not self.audio_enabled:
            return
        sound = self.sounds.get(event)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as e:
            log.warning(f"Could not play {event.value}: {e}")
