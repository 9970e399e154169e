"""
Role classifier 單元測試：placeholder / label 互斥、按鈕、標題、logo 優先序。
"""
import pytest

from figma_html.classifiers import (
    find_input_candidates,
    find_logo_node,
    find_title_node,
    is_checkbox_label,
    is_input_placeholder,
    is_label,
    is_link,
    is_submit_button,
    is_title,
)
from figma_html.nodes import DesignNode


def _make_node(**kwargs):
    base = {"id": "1:1", "type": "FRAME", "name": ""}
    base.update(kwargs)
    return DesignNode.from_dict(base)


def _text(characters, node_id="1:1", y=0, **kwargs):
    return _make_node(
        id=node_id,
        type="TEXT",
        characters=characters,
        absoluteBoundingBox={"x": 0, "y": y, "width": 100, "height": 20},
        **kwargs,
    )


IMAGE_FILL = [{"type": "IMAGE", "imageRef": "ref"}]


# ─── placeholder / label ────────────────────────────────────────────────────

def test_placeholder():
    assert is_input_placeholder(_text("Enter your email"))
    assert is_input_placeholder(_text("e.g. john@example.com"))
    assert not is_input_placeholder(_text("Email Address"))


def test_label_requires_asterisk():
    assert is_label(_text("Email Address*"))
    assert not is_label(_text("Email Address"))


@pytest.mark.parametrize("text", [
    "Enter your email*",
    "Enter your email",
    "Type your message",
    "Your name*",
    "Password*",
    "e.g. phone",
    "",
])
def test_placeholder_never_also_label(text):
    node = _text(text)
    if is_input_placeholder(node):
        assert not is_label(node)


def test_non_text_is_never_placeholder_or_label():
    frame = _make_node(name="Enter your email*")
    assert not is_input_placeholder(frame)
    assert not is_label(frame)


# ─── submit button ──────────────────────────────────────────────────────────

def test_submit_frame_with_single_text_child():
    button = _make_node(type="RECTANGLE", children=[
        {"id": "2:1", "type": "TEXT", "characters": "  Login "},
    ])
    assert is_submit_button(button)


def test_submit_frame_needs_exactly_one_child():
    button = _make_node(children=[
        {"id": "2:1", "type": "TEXT", "characters": "Login"},
        {"id": "2:2", "type": "TEXT", "characters": "Now"},
    ])
    assert not is_submit_button(button)


def test_submit_vocabulary_is_exact():
    button = _make_node(children=[{"id": "2:1", "type": "TEXT", "characters": "Login here"}])
    assert not is_submit_button(button)


def test_submit_text_needs_solid_fill():
    assert is_submit_button(_text("Save", fills=[{"type": "SOLID", "color": {"r": 0, "g": 0, "b": 1}}]))
    assert not is_submit_button(_text("Save"))


# ─── other predicates ───────────────────────────────────────────────────────

def test_checkbox_and_link():
    assert is_checkbox_label(_text("Remember me"))
    assert is_link(_text("Forgot password?"))
    assert not is_link(_text("Welcome back"))


def test_title_by_metrics():
    assert is_title(_text("Dashboard", style={"fontSize": 24}))
    assert is_title(_text("Dashboard", style={"fontSize": 16, "fontWeight": 700}))
    assert not is_title(_text("Dashboard", style={"fontSize": 16, "fontWeight": 400}))
    assert not is_title(_text("Dashboard"))


def test_title_excludes_submit_vocabulary():
    assert not is_title(_text("Login", style={"fontSize": 28, "fontWeight": 700}))


def test_find_title_prefers_styled_then_notification_action():
    nodes = [
        _text("Create push notification", node_id="1:1"),
        _text("Welcome", node_id="1:2", style={"fontSize": 24}),
    ]
    assert find_title_node(nodes).id == "1:2"
    assert find_title_node(nodes[:1]).id == "1:1"
    assert find_title_node([_text("hello")]) is None


# ─── logo ───────────────────────────────────────────────────────────────────

def test_logo_name_match_beats_top_band_image():
    unnamed = _make_node(id="1:1", type="RECTANGLE", name="Rectangle 4", fills=IMAGE_FILL,
                         absoluteBoundingBox={"x": 0, "y": 10, "width": 50, "height": 50})
    named = _make_node(id="1:2", type="RECTANGLE", name="Logo", fills=IMAGE_FILL,
                       absoluteBoundingBox={"x": 0, "y": 500, "width": 50, "height": 50})
    assert find_logo_node([unnamed, named]).id == "1:2"


def test_logo_name_without_image_is_ignored():
    named_text = _make_node(id="1:1", type="FRAME", name="Brand")
    top_image = _make_node(id="1:2", type="RECTANGLE", fills=IMAGE_FILL,
                           absoluteBoundingBox={"x": 0, "y": 40, "width": 50, "height": 50})
    assert find_logo_node([named_text, top_image]).id == "1:2"


def test_logo_bare_image_node_and_none():
    assert find_logo_node([_make_node(type="IMAGE", name="brand-mark")]).type == "IMAGE"
    low_image = _make_node(type="RECTANGLE", fills=IMAGE_FILL,
                           absoluteBoundingBox={"x": 0, "y": 400, "width": 50, "height": 50})
    assert find_logo_node([low_image]) is None


# ─── input candidates ───────────────────────────────────────────────────────

def test_input_candidates_by_placeholder_child_or_label_proximity():
    with_placeholder = _make_node(id="1:1", type="RECTANGLE", children=[
        {"id": "1:2", "type": "TEXT", "characters": "Enter your name"},
    ])
    near_label = _make_node(id="2:1", type="FRAME",
                            absoluteBoundingBox={"x": 0, "y": 130, "width": 300, "height": 40})
    far_box = _make_node(id="3:1", type="FRAME",
                         absoluteBoundingBox={"x": 0, "y": 400, "width": 300, "height": 40})
    no_bounds = _make_node(id="4:1", type="FRAME")
    label = _text("Email*", node_id="5:1", y=100)
    found = find_input_candidates([with_placeholder, near_label, far_box, no_bounds, label])
    assert [n.id for n in found] == ["1:1", "2:1"]
