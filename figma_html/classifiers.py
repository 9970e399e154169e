"""
Role classifiers: single-node predicates and finders.

Every predicate fails closed (False / None) when the node lacks the data it
needs, e.g. a proximity check on a node without bounds.
"""

import re
from typing import List, Optional, Sequence

from .nodes import SHAPE_TYPES, DesignNode

PLACEHOLDER_RE = re.compile(r"enter|type|your|e\.g\.")
LABEL_RE = re.compile(r"email|password|confirm|name|username|subject|message|phone")
SUBMIT_RE = re.compile(r"^(login|signin|signup|submit|register|send|continue|save|update)$")
CHECKBOX_RE = re.compile(r"remember|agree|subscribe|i accept|keep me logged in")
LINK_RE = re.compile(r"forgot|reset|privacy|terms|learn more|click here|need help")
LOGO_NAME_RE = re.compile(r"logo|brand|icon", re.IGNORECASE)
TITLE_ACTION_RE = re.compile(r"add|create|new|edit|update|manage")
TITLE_SUBJECT_RE = re.compile(r"notification|push|alert|message")

LOGO_SHAPE_TYPES = ("RECTANGLE", "FRAME", "COMPONENT", "ELLIPSE")
LABEL_DISTANCE = 50
TOP_BAND = 200


def _lower(node: DesignNode) -> str:
    return node.text.lower()


def is_input_placeholder(node: DesignNode) -> bool:
    if not node.is_text:
        return False
    text = node.text.strip()
    return bool(PLACEHOLDER_RE.search(text.lower())) and not text.endswith("*")


def is_label(node: DesignNode) -> bool:
    # asterisk marks a required-field label, never a placeholder
    if not node.is_text:
        return False
    text = node.text.strip()
    return bool(LABEL_RE.search(text.lower())) and text.endswith("*")


def _is_submit_text(text: str) -> bool:
    return bool(SUBMIT_RE.match(text.strip().lower()))


def is_submit_button(node: DesignNode) -> bool:
    if node.type in SHAPE_TYPES:
        if len(node.children) != 1:
            return False
        child = node.children[0]
        return child.is_text and _is_submit_text(child.text)
    if node.is_text and _is_submit_text(node.text):
        fill = node.first_fill
        return fill is not None and fill.type == "SOLID"
    return False


def is_checkbox_label(node: DesignNode) -> bool:
    return node.is_text and bool(CHECKBOX_RE.search(_lower(node)))


def is_link(node: DesignNode) -> bool:
    return node.is_text and bool(LINK_RE.search(_lower(node)))


def is_title(node: DesignNode) -> bool:
    if not node.is_text or node.style is None or _is_submit_text(node.text):
        return False
    size = node.style.font_size or 0
    weight = node.style.font_weight or 0
    return size >= 20 or (size >= 16 and weight >= 600)


def find_title_node(nodes: Sequence[DesignNode]) -> Optional[DesignNode]:
    for node in nodes:
        if is_title(node) and len(node.text) < 50 and not is_submit_button(node):
            return node
    for node in nodes:
        text = _lower(node)
        if node.is_text and TITLE_ACTION_RE.search(text) and TITLE_SUBJECT_RE.search(text):
            return node
    return None


def _is_image_bearing(node: DesignNode) -> bool:
    if node.type == "IMAGE":
        return True
    return node.type in LOGO_SHAPE_TYPES and node.has_image_fill()


def find_logo_node(nodes: Sequence[DesignNode]) -> Optional[DesignNode]:
    """Named logo first, then any image shape in the top band."""
    for node in nodes:
        if LOGO_NAME_RE.search(node.name) and _is_image_bearing(node):
            return node
    for node in nodes:
        if node.type in LOGO_SHAPE_TYPES and node.has_image_fill() \
                and node.bounds is not None and node.bounds.y < TOP_BAND:
            return node
    return None


def find_input_candidates(nodes: Sequence[DesignNode]) -> List[DesignNode]:
    labels = [n for n in nodes if is_label(n) and n.bounds is not None]
    candidates = []
    for node in nodes:
        if node.type not in SHAPE_TYPES:
            continue
        if any(is_input_placeholder(c) for c in node.children):
            candidates.append(node)
            continue
        if node.bounds is None:
            continue
        if any(abs(label.bounds.y - node.bounds.y) < LABEL_DISTANCE for label in labels):
            candidates.append(node)
    return candidates
