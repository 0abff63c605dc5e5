import colorsys
from collections.abc import Sequence
from dataclasses import dataclass

from matplotlib.colors import LinearSegmentedColormap
from matplotlib.colors import to_rgba


@dataclass(frozen=True)
class HslColor:
    """Color described by hue (degrees), saturation and lightness (percent)."""

    hue: float
    saturation: float
    lightness: float
    alpha: float = 1.0

    @classmethod
    def from_rgba(cls, rgba: Sequence[float]) -> "HslColor":
        red, green, blue = rgba[:3]
        alpha = rgba[3] if len(rgba) > 3 else 1.0
        hue, lightness, saturation = colorsys.rgb_to_hls(red, green, blue)
        return cls(hue * 360.0, saturation * 100.0, lightness * 100.0, alpha)

    def rgba(self) -> tuple[float, float, float, float]:
        red, green, blue = colorsys.hls_to_rgb(
            (self.hue % 360.0) / 360.0,
            self.lightness / 100.0,
            self.saturation / 100.0,
        )
        return (red, green, blue, self.alpha)


NEUTRAL_GRAY = HslColor(0.0, 0.0, 128 / 255 * 100, 0.6)
CYAN = HslColor(180.0, 100.0, 50.0, 0.8)

NEON_HUE_START = 180.0
NEON_HUE_SPAN = 160.0
NEON_LIGHTNESS_START = 35.0
NEON_LIGHTNESS_SPAN = 20.0
NEON_SATURATION = 95.0

# Offset 0 is the top of the plot area.
GRADIENT_STOPS: tuple[tuple[float, str], ...] = (
    (0.0, "#00fff7"),
    (0.45, "#ff3af0"),
    (0.75, "#ffb86b"),
    (1.0, "#7fff00"),
)


def scale_maximum(values: Sequence[int]) -> int:
    """Return the color scaling maximum, never below 1."""

    return max([*values, 1])


def neon_color(value: float, maximum: float) -> HslColor:
    """Map a value to the cyan -> magenta -> yellow -> green neon sweep.

    The ratio ``value / maximum`` is clamped to [0, 1]. A zero maximum has no
    meaningful ratio and maps to ``NEUTRAL_GRAY``.
    """

    if maximum == 0:
        return NEUTRAL_GRAY

    ratio = min(max(value / maximum, 0.0), 1.0)
    return HslColor(
        hue=NEON_HUE_START + ratio * NEON_HUE_SPAN,
        saturation=NEON_SATURATION,
        lightness=NEON_LIGHTNESS_START + ratio * NEON_LIGHTNESS_SPAN,
    )


def neon_colors(values: Sequence[int]) -> list[HslColor]:
    maximum = scale_maximum(values)
    return [neon_color(value, maximum) for value in values]


def gradient_colormap() -> LinearSegmentedColormap:
    return LinearSegmentedColormap.from_list("neon-gradient", list(GRADIENT_STOPS))


def gradient_color(offset: float) -> HslColor:
    """Look up the gradient color at an offset in [0, 1] from the top."""

    offset = min(max(offset, 0.0), 1.0)
    for (start, start_hex), (end, end_hex) in zip(GRADIENT_STOPS, GRADIENT_STOPS[1:]):
        if offset <= end:
            ratio = (offset - start) / (end - start)
            low = to_rgba(start_hex)
            high = to_rgba(end_hex)
            mixed = [a + (b - a) * ratio for a, b in zip(low, high)]
            return HslColor.from_rgba(mixed)
    return HslColor.from_rgba(to_rgba(GRADIENT_STOPS[-1][1]))


def gradient_colors(values: Sequence[int]) -> list[HslColor]:
    """Gradient color found at the height each value reaches."""

    maximum = scale_maximum(values)
    return [gradient_color(1.0 - value / maximum) for value in values]


def solid_colors(values: Sequence[int]) -> list[HslColor]:
    return [CYAN for _ in values]
