#!/usr/bin/env python3
"""Invaders - Standalone Entry Point.

Run this to play with the keyboard.

Usage:
    python main.py
    python main.py --mode timeAttack
    python main.py --lives 5 --seed 42
    python main.py --config invaders.yaml --no-audio
"""

import argparse
import os
import sys

# Add project root to path for imports
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import pygame

from starfall.games.input.sources import KeyboardInputSource
from starfall.logging import get_logger, register_sink, create_sink_for_environment, close_all_sinks
from games.Invaders.config import FPS, SettingsError, load_settings
from games.Invaders.game_mode import InvadersMode
from games.Invaders.game.audio import ToneSoundSink
from games.Invaders.game.hud import HudPanel
from games.Invaders.game.skins import GeometricSkin

log = get_logger('invaders.main')


def build_parser() -> argparse.ArgumentParser:
    """Argument parser from the game's declared ARGUMENTS."""
    parser = argparse.ArgumentParser(description="Starfall Invaders - Standalone")
    for arg in InvadersMode.get_arguments():
        spec = {k: v for k, v in arg.items() if k != 'name'}
        parser.add_argument(arg['name'], **spec)
    return parser


def main(argv=None) -> int:
    """Run Invaders standalone."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(
            args.config,
            width=args.width,
            height=args.height,
            lives=args.lives,
            mode=args.mode,
            seed=args.seed,
            audio=False if args.no_audio else None,
        )
    except SettingsError as e:
        log.error(str(e))
        return 2

    register_sink('session', create_sink_for_environment('session'))

    pygame.init()
    pygame.font.init()
    screen = pygame.display.set_mode((settings.width, settings.height))
    pygame.display.set_caption("Starfall Invaders")

    hud = HudPanel()
    game = InvadersMode(
        settings=settings,
        render_sink=GeometricSkin(screen),
        sound_sink=ToneSoundSink(audio_enabled=settings.audio),
        ui_sink=hud,
    )
    keyboard = KeyboardInputSource()

    print("\n" + "=" * 50)
    print("STARFALL INVADERS")
    print("=" * 50)
    print("Controls:")
    print("  - ENTER to start")
    print("  - Arrows or A/D to move, SPACE to shoot")
    print("  - P to pause, T to switch mode (when not playing)")
    print("  - 1-4 to spend upgrade points")
    print("  - R to restart after game over")
    print("  - ESC to quit")
    print("=" * 50 + "\n")

    clock = pygame.time.Clock()
    running = True
    try:
        while running:
            dt = clock.tick(FPS) / 1000.0

            events = pygame.event.get()
            for event in events:
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.WINDOWFOCUSLOST:
                    keyboard.clear()
            keyboard.process_events(events)

            game.handle_input(keyboard.poll())
            game.update(dt)
            game.render()
            hud.render(screen)
            pygame.display.flip()
    finally:
        close_all_sinks()
        pygame.quit()

    print(f"\nFinal Score: {game.get_score()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
