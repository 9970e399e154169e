"""
Structural detectors over the flattened node list.

Layout patterns (a label above an input, a column of menu entries) are rarely
parent/child in the design tree, so every detector scans the depth-first flat
list and compares absolute coordinates.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .classifiers import find_input_candidates, find_title_node, is_label
from .nodes import SHAPE_TYPES, DesignNode

logger = logging.getLogger(__name__)

TABLE_HEADER_RE = re.compile(r"no\.|profile|photo|name|email|registered|action", re.IGNORECASE)
MENU_EXCLUDE_RE = re.compile(r"user|profile|log out|sign out", re.IGNORECASE)
LOGIN_RELATED_RE = re.compile(r"login|forgot password|change password|reset password", re.IGNORECASE)
FORGOT_RE = re.compile(r"forgot password|\bforgot\b|\breset password\b|recovery email", re.IGNORECASE)
CHANGE_RE = re.compile(r"change password|new password|confirm password", re.IGNORECASE)
EVENT_FORM_RE = re.compile(r"event\s*name|event\s*date|description", re.IGNORECASE)

SIDEBAR_MAX_X = 200
SIDEBAR_MIN_ITEMS = 3
SIDEBAR_MIN_SPREAD = 40
TAB_MAX_Y = 200
TAB_BAND = 40

LOGIN = "login"
FORGOT_PASSWORD = "forgot_password"
CHANGE_PASSWORD = "change_password"
NOTIFICATION = "notification"
USERS = "users"
EVENT = "event"
OTHER = "other"
LOGIN_FAMILY = (LOGIN, FORGOT_PASSWORD, CHANGE_PASSWORD)


@dataclass
class TableLayout:
    node: DesignNode
    headers: List[DesignNode] = field(default_factory=list)
    rows: List[List[DesignNode]] = field(default_factory=list)


@dataclass
class FormField:
    label: DesignNode
    box: DesignNode
    input_type: str = "text"


def find_menu_items(nodes: Sequence[DesignNode]) -> List[DesignNode]:
    """Short, narrow, left-aligned TEXT nodes sorted top to bottom."""
    items = []
    for node in nodes:
        if not node.is_text or node.bounds is None:
            continue
        text = node.text
        if not text or len(text) >= 30:
            continue
        if node.bounds.x >= SIDEBAR_MAX_X or node.bounds.width >= SIDEBAR_MAX_X:
            continue
        if TABLE_HEADER_RE.search(text) or MENU_EXCLUDE_RE.search(text):
            continue
        items.append(node)
    return sorted(items, key=lambda n: n.bounds.y)


def detect_sidebar(nodes: Sequence[DesignNode]) -> bool:
    items = find_menu_items(nodes)
    if len(items) < SIDEBAR_MIN_ITEMS:
        return False
    spread = items[-1].bounds.y - items[0].bounds.y
    return spread > SIDEBAR_MIN_SPREAD


def detect_tabs(nodes: Sequence[DesignNode]) -> List[DesignNode]:
    candidates = [
        n for n in nodes
        if n.is_text and n.bounds is not None and n.bounds.y < TAB_MAX_Y and len(n.text) < 15
    ]
    if len(candidates) < 2:
        return []
    ys = [n.bounds.y for n in candidates]
    if max(ys) - min(ys) < TAB_BAND:
        return candidates
    return []


def detect_search_input(nodes: Sequence[DesignNode]) -> Optional[DesignNode]:
    for node in nodes:
        if node.type not in SHAPE_TYPES or node.bounds is None or node.bounds.width <= 200:
            continue
        if node.bounds.y < 150:
            return node
        if any(c.is_text and "search" in c.text.lower() for c in node.children):
            return node
    for node in nodes:
        if node.is_text and "search" in node.text.lower():
            return node
    return None


def detect_table(nodes: Sequence[DesignNode]) -> Optional[DesignNode]:
    best = None
    for node in nodes:
        if node.type not in ("FRAME", "GROUP") or len(node.children) <= 5:
            continue
        if not any(c.is_text and TABLE_HEADER_RE.search(c.text) for c in node.children):
            continue
        # strict comparison keeps the first candidate on ties
        if best is None or len(node.children) > len(best.children):
            best = node
    return best


def extract_table(table: DesignNode) -> TableLayout:
    """Split a detected table frame into header cells and data rows.

    Data cells are chunked by header count in child order. A count that does
    not divide evenly leaves a short last row.
    """
    headers = [c for c in table.children if c.is_text and TABLE_HEADER_RE.search(c.text)]
    header_ids = {id(c) for c in headers}
    cells = [c for c in table.children if c.is_text and id(c) not in header_ids]
    layout = TableLayout(node=table, headers=headers)
    if not headers:
        return layout
    width = len(headers)
    layout.rows = [cells[i:i + width] for i in range(0, len(cells), width)]
    if cells and len(cells) % width:
        logger.debug(
            "Table %s: %d data cells do not fill %d columns evenly",
            table.id, len(cells), width,
        )
    return layout


def infer_field_type(label_text: str) -> str:
    text = label_text.lower()
    if "password" in text:
        return "password"
    if "email" in text:
        return "email"
    if "date" in text or "time" in text:
        return "datetime-local"
    if "message" in text or "description" in text:
        return "textarea"
    return "text"


def detect_form_fields(nodes: Sequence[DesignNode]) -> List[FormField]:
    texts = [n for n in nodes if n.is_text and n.bounds is not None and n.text.strip()]
    fields = []
    for box in nodes:
        if box.type not in SHAPE_TYPES or box.bounds is None:
            continue
        if box.bounds.width <= 100 or not 30 <= box.bounds.height <= 60:
            continue
        label = None
        for text in texts:
            gap = box.bounds.y - text.bounds.y
            if not 0 < gap <= 50 or abs(text.bounds.x - box.bounds.x) >= 100:
                continue
            if label is None or text.bounds.y > label.bounds.y:
                label = text
        if label is None:
            continue
        fields.append(FormField(label=label, box=box, input_type=infer_field_type(label.text)))
    return fields


def is_login_related(nodes: Sequence[DesignNode]) -> bool:
    return any(n.is_text and LOGIN_RELATED_RE.search(n.text) for n in nodes)


def detect_notification_form(nodes: Sequence[DesignNode]) -> bool:
    texts = [n.text.lower() for n in nodes if n.is_text]
    return any("notification text" in t for t in texts) and any("notification type" in t for t in texts)


def detect_form_type(nodes: Sequence[DesignNode]) -> str:
    if any(n.is_text and EVENT_FORM_RE.search(n.text) for n in nodes):
        return EVENT
    return OTHER


def _field_evidence(nodes: Sequence[DesignNode], pattern: str) -> bool:
    regex = re.compile(pattern, re.IGNORECASE)
    if any(is_label(n) and regex.search(n.text) for n in nodes):
        return True
    return any(regex.search(n.name) for n in find_input_candidates(nodes))


def _login_archetype(nodes: Sequence[DesignNode]) -> str:
    has_email = _field_evidence(nodes, r"email|username")
    has_password = _field_evidence(nodes, r"password|pwd")
    texts = [n.text for n in nodes if n.is_text]
    forgot = not has_password and any(FORGOT_RE.search(t) for t in texts)
    change = has_password and any(CHANGE_RE.search(t) for t in texts)
    title = find_title_node(nodes)
    title_text = title.text if title is not None else ""

    if has_email and has_password and not change:
        return LOGIN
    if forgot and re.search(r"forgot|reset", title_text, re.IGNORECASE):
        return FORGOT_PASSWORD
    if change and re.search(r"change|new password", title_text, re.IGNORECASE):
        return CHANGE_PASSWORD
    if has_email and has_password:
        return LOGIN
    if forgot:
        return FORGOT_PASSWORD
    if change:
        return CHANGE_PASSWORD
    return LOGIN


def detect_archetype(nodes: Sequence[DesignNode]) -> str:
    """Pick the screen archetype that drives the generator and theme."""
    if is_login_related(nodes):
        archetype = _login_archetype(nodes)
    elif detect_table(nodes) is not None:
        archetype = USERS
    elif detect_notification_form(nodes):
        archetype = NOTIFICATION
    else:
        archetype = detect_form_type(nodes)
    logger.debug("Detected archetype %s over %d nodes", archetype, len(nodes))
    return archetype
