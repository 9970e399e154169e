"""
CSS assembler — one class rule per design node plus a static theme layer.

Rules are keyed by ``css_class_name`` so they line up with the classes the
HTML side emits. Parents come before their children.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .detectors import CHANGE_PASSWORD, FORGOT_PASSWORD, LOGIN
from .nodes import DesignNode, Effect
from .styles import css_class_name, rgba_from_color, to_css_unit

_TEXT_CASE = {"UPPER": "uppercase", "LOWER": "lowercase", "TITLE": "capitalize"}
_HORIZONTAL_ALIGN = {"CENTER": "center", "RIGHT": "right", "JUSTIFIED": "justify"}
_VERTICAL_ALIGN = {"CENTER": "center", "BOTTOM": "flex-end"}
_DECORATION = {"UNDERLINE": "underline", "STRIKETHROUGH": "line-through"}


@dataclass
class StyleSheet:
    rules: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def add_node(self, node: DesignNode) -> Optional[str]:
        class_name = css_class_name(node)
        styles = node_styles(node)
        if not class_name or not styles or class_name in self.rules:
            return None
        self.rules[class_name] = styles
        return class_name

    def add_tree(self, node: DesignNode) -> None:
        self.add_node(node)
        for child in node.children:
            self.add_tree(child)

    def to_css(self) -> str:
        blocks = []
        for class_name, styles in self.rules.items():
            body = "\n".join(f"  {prop}: {val};" for prop, val in styles.items())
            blocks.append(f".{class_name} {{\n{body}\n}}")
        return "\n\n".join(blocks) + "\n" if blocks else ""


def _shadow(effect: Effect) -> str:
    inset = "inset " if effect.type == "INNER_SHADOW" else ""
    return (
        f"{inset}{to_css_unit(effect.offset_x)} {to_css_unit(effect.offset_y)} "
        f"{to_css_unit(effect.radius)} {to_css_unit(effect.spread)} {rgba_from_color(effect.color)}"
    )


def _typography(node: DesignNode, styles: Dict[str, str]) -> None:
    s = node.style
    if s is None:
        return
    if s.font_family:
        styles["font-family"] = f"'{s.font_family}', sans-serif"
    if s.font_size:
        styles["font-size"] = to_css_unit(s.font_size)
    if s.font_weight:
        styles["font-weight"] = str(int(s.font_weight))
    if s.italic:
        styles["font-style"] = "italic"
    if s.line_height_unit == "FONT_SIZE_%" and s.line_height_percent:
        styles["line-height"] = to_css_unit(s.line_height_percent, "%")
    elif s.line_height_px:
        styles["line-height"] = to_css_unit(s.line_height_px)
    if s.letter_spacing:
        styles["letter-spacing"] = to_css_unit(s.letter_spacing)
    if s.text_align_horizontal:
        styles["text-align"] = _HORIZONTAL_ALIGN.get(s.text_align_horizontal, "left")
    vertical = _VERTICAL_ALIGN.get(s.text_align_vertical or "")
    if vertical:
        styles["display"] = "flex"
        styles["align-items"] = vertical
    if s.text_decoration in _DECORATION:
        styles["text-decoration"] = _DECORATION[s.text_decoration]
    if s.text_case in _TEXT_CASE:
        styles["text-transform"] = _TEXT_CASE[s.text_case]


def node_styles(node: DesignNode) -> Dict[str, str]:
    """Declarations for a single node, in emission order."""
    styles: Dict[str, str] = {}
    if node.bounds is not None:
        if node.bounds.width > 5:
            styles["width"] = to_css_unit(node.bounds.width)
        if node.bounds.height > 5:
            styles["height"] = to_css_unit(node.bounds.height)

    fill = node.first_fill
    if fill is not None and fill.type == "SOLID" and fill.visible:
        prop = "color" if node.is_text else "background-color"
        styles[prop] = rgba_from_color(fill.color, fill.opacity)

    if node.strokes and node.stroke_weight:
        stroke = node.strokes[0]
        styles["border"] = f"{to_css_unit(node.stroke_weight)} solid {rgba_from_color(stroke.color, stroke.opacity)}"

    if node.corner_radius:
        styles["border-radius"] = to_css_unit(node.corner_radius)

    _typography(node, styles)

    if node.padding is not None and not node.padding.is_zero():
        p = node.padding
        styles["padding"] = " ".join(to_css_unit(v) for v in (p.top, p.right, p.bottom, p.left))

    effects = [e for e in node.effects if e.visible]
    shadows: List[str] = [_shadow(e) for e in effects if e.type in ("DROP_SHADOW", "INNER_SHADOW")]
    if shadows:
        styles["box-shadow"] = ", ".join(shadows)
    for effect in effects:
        if effect.type == "LAYER_BLUR":
            styles["filter"] = f"blur({to_css_unit(effect.radius)})"
        elif effect.type == "BACKGROUND_BLUR":
            styles["backdrop-filter"] = f"blur({to_css_unit(effect.radius)})"
    return styles


def generate_css(node: DesignNode) -> str:
    sheet = StyleSheet()
    sheet.add_tree(node)
    return sheet.to_css()


BASE_CSS = """\
.frame-wrapper {
  display: flex;
  flex-direction: column;
  justify-content: center;
  align-items: center;
  min-height: 100vh;
  background-color: #f7f7fa;
}

.form-main-container {
  background: #fff;
  padding: 32px 32px 24px 32px;
  border-radius: 16px;
  box-shadow: 0 4px 32px 0 rgba(0, 0, 0, 0.08);
  max-width: 400px;
  width: 100%;
  display: flex;
  flex-direction: column;
  gap: 20px;
  align-items: stretch;
}

.sidebar {
  width: 240px;
  min-height: 100vh;
}

.sidebar-logo {
  max-width: 160px;
  max-height: 60px;
  object-fit: contain;
}

.page-logo {
  max-width: 180px;
  max-height: 80px;
  object-fit: contain;
}
"""

_CARD_CSS = """\
.card {
  background: #fff;
  border-radius: 8px;
  box-shadow: 0 4px 16px rgba(0, 0, 0, 0.1);
  width: 100%%;
  max-width: 400px;
}

.card-body {
  padding: 24px;
}

h2.text-center {
  font-size: 24px;
  font-weight: 700;
  margin-bottom: 24px;
  color: %(title_color)s;
}

.form-label {
  font-size: 14px;
  font-weight: 500;
  color: #333;
  margin-bottom: 4px;
}

.form-control {
  border: 1px solid #ddd;
  border-radius: 4px;
  padding: 10px 12px;
  font-size: 14px;
}

.btn-primary {
  background-color: %(accent)s;
  border: none;
  border-radius: 4px;
  font-weight: 600;
  padding: 10px 0;
}

.btn-primary:hover {
  background-color: %(accent_hover)s;
}

.text-decoration-none {
  color: #0078d4;
  font-size: 14px;
}
"""

LOGIN_THEME = "/* login */\n" + _CARD_CSS % {
    "title_color": "#000", "accent": "#003966", "accent_hover": "#00508a",
} + """
.form-check-input {
  width: 16px;
  height: 16px;
}
"""

FORGOT_PASSWORD_THEME = "/* forgot password */\n" + _CARD_CSS % {
    "title_color": "#333", "accent": "#0078d4", "accent_hover": "#0062a9",
} + """
.text-center a {
  display: block;
  margin-top: 16px;
}
"""

CHANGE_PASSWORD_THEME = "/* change password */\n" + _CARD_CSS % {
    "title_color": "#333", "accent": "#003966", "accent_hover": "#00508a",
} + """
.btn-primary {
  margin-top: 16px;
}
"""

DEFAULT_THEME = """\
/* default */
.form-label {
  font-size: 14px;
  font-weight: 600;
  color: #222;
  margin-bottom: 2px;
}

.form-control {
  padding: 10px 12px;
  border: 1px solid #e0e0e0;
  border-radius: 8px;
  font-size: 15px;
  transition: border 0.2s;
}

.form-control:focus {
  border-color: #003966;
  box-shadow: none;
}

.btn-primary {
  background: #003966;
  border: none;
  font-weight: 600;
}

.btn-primary:hover {
  background: #00508a;
}
"""

THEMES = {
    LOGIN: LOGIN_THEME,
    FORGOT_PASSWORD: FORGOT_PASSWORD_THEME,
    CHANGE_PASSWORD: CHANGE_PASSWORD_THEME,
}


def enhance_component_styles(archetype: str, css: str) -> str:
    """Append the base layer and the theme for ``archetype`` to ``css``."""
    theme = THEMES.get(archetype, DEFAULT_THEME)
    parts = [css.rstrip("\n"), BASE_CSS, theme] if css.strip() else [BASE_CSS, theme]
    return "\n".join(p for p in parts if p)
