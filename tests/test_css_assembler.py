"""
CSS assembler 測試：宣告順序、文字顏色、陰影合併、主題附加。
"""
from figma_html.css_assembler import enhance_component_styles, generate_css, node_styles
from figma_html.nodes import DesignNode


def _make_node(**kwargs):
    base = {
        "id": "1:1",
        "type": "RECTANGLE",
        "name": "Box",
        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 200, "height": 40},
    }
    base.update(kwargs)
    return DesignNode.from_dict(base)


def test_rectangle_declaration_order():
    node = _make_node(
        fills=[{"type": "SOLID", "color": {"r": 1, "g": 1, "b": 1}}],
        strokes=[{"type": "SOLID", "color": {"r": 0, "g": 0, "b": 0}}],
        strokeWeight=1,
        cornerRadius=8,
        paddingTop=4, paddingRight=8, paddingBottom=4, paddingLeft=8,
    )
    styles = node_styles(node)
    assert list(styles) == ["width", "height", "background-color", "border", "border-radius", "padding"]
    assert styles["background-color"] == "rgba(255, 255, 255, 1.00)"
    assert styles["border"] == "1px solid rgba(0, 0, 0, 1.00)"
    assert styles["padding"] == "4px 8px 4px 8px"


def test_tiny_sizes_skipped():
    styles = node_styles(_make_node(absoluteBoundingBox={"x": 0, "y": 0, "width": 4, "height": 2}))
    assert "width" not in styles and "height" not in styles


def test_text_uses_color_and_typography():
    node = _make_node(
        type="TEXT",
        characters="Hello",
        fills=[{"type": "SOLID", "color": {"r": 1, "g": 0, "b": 0}, "opacity": 0.5}],
        style={
            "fontFamily": "Inter", "fontSize": 16, "fontWeight": 600, "italic": True,
            "lineHeightPx": 24, "letterSpacing": 0.5, "textAlignHorizontal": "CENTER",
            "textAlignVertical": "CENTER", "textDecoration": "UNDERLINE", "textCase": "UPPER",
        },
    )
    styles = node_styles(node)
    assert styles["color"] == "rgba(255, 0, 0, 0.50)"
    assert "background-color" not in styles
    assert styles["font-family"] == "'Inter', sans-serif"
    assert styles["font-weight"] == "600"
    assert styles["font-style"] == "italic"
    assert styles["line-height"] == "24px"
    assert styles["text-align"] == "center"
    assert styles["display"] == "flex" and styles["align-items"] == "center"
    assert styles["text-decoration"] == "underline"
    assert styles["text-transform"] == "uppercase"


def test_percent_line_height():
    node = _make_node(type="TEXT", style={"lineHeightUnit": "FONT_SIZE_%", "lineHeightPercentFontSize": 150, "lineHeightPx": 24})
    assert node_styles(node)["line-height"] == "150%"


def test_image_fill_and_border_without_weight_ignored():
    node = _make_node(fills=[{"type": "IMAGE", "imageRef": "x"}], strokes=[{"type": "SOLID", "color": {"r": 0, "g": 0, "b": 0}}])
    styles = node_styles(node)
    assert "background-color" not in styles
    assert "border" not in styles


def test_shadows_combined_with_inset():
    node = _make_node(effects=[
        {"type": "DROP_SHADOW", "color": {"r": 0, "g": 0, "b": 0, "a": 0.25}, "offset": {"x": 0, "y": 4}, "radius": 8},
        {"type": "INNER_SHADOW", "color": {"r": 0, "g": 0, "b": 0, "a": 0.1}, "offset": {"x": 1, "y": 1}, "radius": 2},
        {"type": "LAYER_BLUR", "radius": 4},
        {"type": "BACKGROUND_BLUR", "radius": 10},
        {"type": "DROP_SHADOW", "visible": False, "radius": 99},
    ])
    styles = node_styles(node)
    assert styles["box-shadow"] == "0px 4px 8px 0px rgba(0, 0, 0, 0.25), inset 1px 1px 2px 0px rgba(0, 0, 0, 0.10)"
    assert styles["filter"] == "blur(4px)"
    assert styles["backdrop-filter"] == "blur(10px)"


def test_generate_css_parent_before_children():
    root = DesignNode.from_dict({
        "id": "1:1", "type": "FRAME",
        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 400, "height": 300},
        "children": [
            {"id": "1:2", "type": "TEXT", "characters": "Hi", "style": {"fontSize": 14}},
            {"id": "1:3", "type": "GROUP"},
        ],
    })
    css = generate_css(root)
    assert css.index(".frame-1-1 {") < css.index(".text-1-2 {")
    assert ".group-1-3" not in css
    assert "  font-size: 14px;" in css


def test_enhance_selects_theme():
    login = enhance_component_styles("login", ".a {\n  color: red;\n}\n")
    assert login.startswith(".a {")
    assert ".frame-wrapper" in login
    assert "/* login */" in login
    assert "#003966" in login
    other = enhance_component_styles("users", "")
    assert "/* default */" in other
    assert "/* login */" not in other


def test_card_themes_are_fully_filled_in():
    from figma_html.css_assembler import CHANGE_PASSWORD_THEME, FORGOT_PASSWORD_THEME, LOGIN_THEME

    for theme in (LOGIN_THEME, FORGOT_PASSWORD_THEME, CHANGE_PASSWORD_THEME):
        assert "  width: 100%;" in theme
        assert "%(" not in theme and "%%" not in theme
    assert "background-color: #0078d4;" in FORGOT_PASSWORD_THEME
