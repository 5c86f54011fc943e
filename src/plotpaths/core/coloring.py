"""Colour sampling interface and alpha classification.

Colour sampling itself (looking up a raster under a shape) lives outside this
package. The pipeline only calls a ``ColorSampler`` and looks at the alpha of
what comes back to decide whether a piece of geometry is worth drawing.
"""

import re
from typing import Protocol

from plotpaths.domain import SegmentCollection

_HEX = re.compile(r"^#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_FUNC = re.compile(r"^rgba?\(([^)]*)\)$", re.IGNORECASE)


class ColorSampler(Protocol):
    """Maps a piece of geometry to a colour string, or None for no colour."""

    def __call__(self, geometry: SegmentCollection) -> str | None: ...


def color_alpha(color: str | None) -> float:
    """Alpha channel of a CSS colour in the range 0..1.

    Supports ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``, ``rgb()`` and
    ``rgba()``. Colours without an alpha channel, and strings that are not
    recognized (named colours), are opaque. ``None`` is fully transparent.

    Examples:
        >>> color_alpha("#000")
        1.0
        >>> color_alpha("#00000080")
        0.5019607843137255
        >>> color_alpha("rgba(0, 0, 0, 0.25)")
        0.25
    """
    if color is None:
        return 0.0

    value = color.strip()

    match = _HEX.match(value)
    if match:
        digits = match.group(1)
        if len(digits) == 4:
            return int(digits[3] * 2, 16) / 255
        if len(digits) == 8:
            return int(digits[6:], 16) / 255
        return 1.0

    match = _FUNC.match(value)
    if match:
        parts = [p.strip() for p in re.split(r"[,/\s]+", match.group(1).strip()) if p.strip()]
        if len(parts) < 4:
            return 1.0
        alpha = parts[3]
        if alpha.endswith("%"):
            return max(0.0, min(1.0, float(alpha[:-1]) / 100))
        return max(0.0, min(1.0, float(alpha)))

    return 1.0


def is_below_alpha(color: str | None, min_alpha: float) -> bool:
    """Whether a colour is too transparent to count as drawn output.

    Geometry the sampler left uncoloured (None) is never below the threshold.
    """
    return color is not None and min_alpha > 0 and color_alpha(color) < min_alpha


def apply_colors(
    items: list[SegmentCollection],
    sampler: ColorSampler,
    min_alpha: float = 0.0,
) -> tuple[list[SegmentCollection], int]:
    """Attach sampled colours and drop geometry below the alpha threshold.

    Args:
        items: Collections to colour; their ``data`` gains a ``color`` key
        sampler: Colour sampling collaborator
        min_alpha: Minimum alpha to keep, 0 keeps everything

    Returns:
        Tuple of (kept collections, number dropped)
    """
    kept = []
    dropped = 0
    for item in items:
        color = sampler(item)
        if is_below_alpha(color, min_alpha):
            dropped += 1
            continue
        if color is not None:
            item.data["color"] = color
        kept.append(item)
    return kept, dropped
