"""Color, unit and class-name helpers shared by the HTML and CSS assemblers."""

from typing import Optional

from .nodes import Color, DesignNode


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _channel(value: float) -> int:
    # half-up rounding; round() is banker's rounding
    return int(_clamp(value) * 255 + 0.5)


def rgba_from_color(color: Optional[Color], opacity: Optional[float] = None) -> str:
    """Normalized 0-1 color → ``rgba(r, g, b, a)``.

    The paint opacity multiplies the color's own alpha; either defaults to 1.
    """
    if color is None:
        return "rgba(0, 0, 0, 0)"
    alpha = color.a if color.a is not None else 1.0
    if opacity is not None:
        alpha *= opacity
    alpha = _clamp(alpha)
    return f"rgba({_channel(color.r)}, {_channel(color.g)}, {_channel(color.b)}, {alpha:.2f})"


def to_css_unit(value: float, unit: str = "px") -> str:
    if float(value).is_integer():
        return f"{int(value)}{unit}"
    return f"{round(value, 2)}{unit}"


def css_class_name(node: DesignNode) -> str:
    """Class keyed by node type and id, e.g. ``text-12-34``."""
    if not node.id:
        return ""
    safe_id = node.id.replace(":", "-").replace(";", "-")
    return f"{node.type.lower()}-{safe_id}"
