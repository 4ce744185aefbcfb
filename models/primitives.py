"""
Value types shared by Starfall configuration and rendering.
"""

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Color(BaseModel):
    """Frozen RGBA color, each channel 0-255.

    Examples:
        >>> Color(r=255, g=0, b=0).as_rgb_tuple
        (255, 0, 0)
        >>> Color.from_hex('#00ff0080').as_tuple
        (0, 255, 0, 128)
    """
    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    a: int = Field(255, ge=0, le=255)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_hex(cls, value: str) -> 'Color':
        """Parse '#rrggbb' or '#rrggbbaa'."""
        digits = value.lstrip('#')
        if len(digits) not in (6, 8):
            raise ValueError(f'Expected #rrggbb or #rrggbbaa, got {value!r}')
        channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        return cls(**dict(zip('rgba', channels)))

    @computed_field
    @property
    def as_tuple(self) -> Tuple[int, int, int, int]:
        """(r, g, b, a) for pygame calls that take alpha."""
        return (self.r, self.g, self.b, self.a)

    @computed_field
    @property
    def as_rgb_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def __str__(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}{self.a:02x}"
