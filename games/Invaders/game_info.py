"""Invaders - Game Info.

Hosts that load games by name call get_game_mode().
"""


def get_game_mode(**kwargs):
    """Factory function to create an Invaders game instance.

    Args:
        **kwargs: InvadersMode constructor options

    Returns:
        InvadersMode instance
    """
    from games.Invaders.game_mode import InvadersMode
    return InvadersMode(**kwargs)
