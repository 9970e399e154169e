"""
HTML assembler: detect the screen archetype and layout pieces, then stitch
the matching fragments into one page body.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from html import escape
from typing import Dict, Iterable, Optional, Tuple

from . import forms
from .classifiers import find_logo_node, find_title_node
from .css_assembler import enhance_component_styles, generate_css
from .defaults import CHANGE_PASSWORD_DEFAULTS, FORGOT_PASSWORD_DEFAULTS, LOGIN_DEFAULTS
from .detectors import (
    CHANGE_PASSWORD,
    EVENT,
    FORGOT_PASSWORD,
    LOGIN,
    LOGIN_FAMILY,
    NOTIFICATION,
    OTHER,
    USERS,
    detect_archetype,
    detect_form_fields,
    detect_search_input,
    detect_sidebar,
    detect_table,
    detect_tabs,
    extract_table,
)
from .images import resolve_image_src
from .nodes import SHAPE_TYPES, DesignNode, NodeTree
from .styles import css_class_name

logger = logging.getLogger(__name__)

FORM_GENERATORS = {
    LOGIN: forms.generate_login_form,
    FORGOT_PASSWORD: forms.generate_forgot_password_form,
    CHANGE_PASSWORD: forms.generate_change_password_form,
    EVENT: forms.generate_event_form,
    NOTIFICATION: forms.generate_notification_form,
}

DEFAULT_TITLES = {
    LOGIN: LOGIN_DEFAULTS.title,
    FORGOT_PASSWORD: FORGOT_PASSWORD_DEFAULTS.title,
    CHANGE_PASSWORD: CHANGE_PASSWORD_DEFAULTS.title,
}


@dataclass
class GeneratedFrame:
    html: str
    css: str
    archetype: str


def _title(node: Optional[DesignNode], centered: bool) -> str:
    if node is None:
        return ""
    cls = "text-center mb-4" if centered else "fw-bold mb-4"
    return f"<h2 class=\"{cls} {css_class_name(node)}\">{escape(node.text)}</h2>\n"


def _is_button_caption(tree: NodeTree, node: DesignNode) -> bool:
    parent = tree.parent_of(node)
    return node.is_text and parent is not None and parent.type in SHAPE_TYPES and len(parent.children) == 1


def _assemble(tree: NodeTree, image_map: Optional[Dict[str, str]]) -> Tuple[str, str]:
    nodes = tree.flat
    archetype = detect_archetype(nodes)
    login_like = archetype in LOGIN_FAMILY
    has_sidebar = not login_like and detect_sidebar(nodes)
    tabs = [] if login_like else detect_tabs(nodes)
    search = None if login_like else detect_search_input(nodes)
    table = None if login_like else detect_table(nodes)
    # a caption inside a single-child shape belongs to a button, never the page
    title = find_title_node([n for n in nodes if not _is_button_caption(tree, n)])

    out = []
    if has_sidebar:
        out.append("<div class=\"container-fluid p-0\">\n<div class=\"row g-0\">\n")
        out.append(forms.generate_sidebar(nodes, archetype, image_map))
        out.append("<div class=\"col p-4\">\n")
    else:
        out.append(
            "<div class=\"container d-flex flex-column justify-content-center align-items-center\" "
            "style=\"min-height: 100vh;\">\n"
        )
        logo = find_logo_node(nodes) if login_like else None
        logo_src = resolve_image_src(logo, image_map) if logo is not None else None
        if logo_src:
            out.append(f"<div class=\"mb-4\"><img src=\"{escape(logo_src)}\" alt=\"Logo\" class=\"page-logo\"></div>\n")
        out.append("<div class=\"col-11 col-sm-8 col-md-6 col-lg-4\">\n")

    in_card = login_like or archetype == EVENT
    if login_like:
        out.append("<div class=\"card shadow-sm\">\n<div class=\"card-body p-4\">\n")
        if title is not None:
            out.append(_title(title, centered=True))
        else:
            out.append(f"<h2 class=\"text-center mb-4\">{escape(DEFAULT_TITLES[archetype])}</h2>\n")
    elif archetype == EVENT:
        out.append("<div class=\"card shadow-sm mb-4\">\n<div class=\"card-body p-4\">\n")
        out.append(_title(title, centered=False))
    else:
        out.append(_title(title, centered=False))

    if len(tabs) > 1:
        out.append(forms.generate_tabs(tabs))
    if search is not None or archetype == USERS:
        out.append(forms.generate_search_bar())
    if table is not None:
        out.append(forms.generate_table(extract_table(table)))

    generator = FORM_GENERATORS.get(archetype)
    if generator is not None:
        out.append(generator(nodes))
    elif archetype in (USERS, OTHER):
        out.append(forms.generate_generic_fields(detect_form_fields(nodes)))

    if in_card:
        out.append("</div>\n</div>\n")
    if has_sidebar:
        out.append("</div>\n</div>\n</div>\n")
    else:
        out.append("</div>\n</div>\n")
    logger.debug("Assembled %s layout (sidebar=%s, tabs=%d, table=%s)",
                 archetype, has_sidebar, len(tabs), table is not None)
    return "".join(out), archetype


def generate_html(roots: Iterable[DesignNode], image_map: Optional[Dict[str, str]] = None) -> str:
    html, _ = _assemble(NodeTree(roots), image_map)
    return html


def generate_frame(roots: Iterable[DesignNode], image_map: Optional[Dict[str, str]] = None) -> GeneratedFrame:
    """HTML body fragment and stylesheet for one selection of nodes."""
    tree = NodeTree(roots)
    html, archetype = _assemble(tree, image_map)
    css = "\n".join(filter(None, (generate_css(root) for root in tree.roots)))
    return GeneratedFrame(html=html, css=enhance_component_styles(archetype, css), archetype=archetype)
