"""Collision detection for Invaders.

All entities are axis-aligned boxes with x, y, width and height. Boxes
that only share an edge do not overlap.

The resolve_* helpers walk both lists last-to-first and delete consumed
entities in place, so callers never see a removed member again.
"""

from typing import Callable, List, Protocol, TypeVar


class Box(Protocol):
    x: float
    y: float
    width: float
    height: float


T = TypeVar('T', bound=Box)
B = TypeVar('B', bound=Box)


def overlaps(a: Box, b: Box) -> bool:
    """Check if two boxes overlap. Touching edges do not count.

    Args:
        a: First box
        b: Second box

    Returns:
        True if the interiors intersect (symmetric in a and b)
    """
    return (a.x < b.x + b.width and
            a.x + a.width > b.x and
            a.y < b.y + b.height and
            a.y + a.height > b.y)


def resolve_bullet_hits(
    bullets: List[B],
    targets: List[T],
    on_hit: Callable[[B, T], bool],
) -> int:
    """Match each bullet against the targets; the first match wins.

    Bullets and targets are both walked last-to-first. A matching bullet
    is always removed. The target is removed only when on_hit returns True,
    so damageable targets can survive a hit.

    Args:
        bullets: Bullets to test (mutated)
        targets: Targets to test against (mutated)
        on_hit: Called as on_hit(bullet, target) for each hit

    Returns:
        Number of hits
    """
    hits = 0
    for i in range(len(bullets) - 1, -1, -1):
        bullet = bullets[i]
        for j in range(len(targets) - 1, -1, -1):
            target = targets[j]
            if overlaps(bullet, target):
                del bullets[i]
                if on_hit(bullet, target):
                    del targets[j]
                hits += 1
                break
    return hits


def resolve_touches(
    body: Box,
    items: List[T],
    on_touch: Callable[[T], None],
) -> int:
    """Remove every item overlapping body, calling on_touch for each.

    Items are walked last-to-first.

    Args:
        body: Box the items are tested against (usually the player)
        items: Candidates (mutated)
        on_touch: Called with each removed item

    Returns:
        Number of items touched
    """
    touched = 0
    for i in range(len(items) - 1, -1, -1):
        item = items[i]
        if overlaps(body, item):
            del items[i]
            on_touch(item)
            touched += 1
    return touched
