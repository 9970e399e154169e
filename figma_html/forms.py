"""
Form-type generators and the shared page fragments (sidebar, tabs, search,
table, detected fields).

Every generator takes the flattened node list, returns a balanced HTML
fragment, and falls back to its defaults table when a node is not found.
When several nodes could match, the first in list order wins.
"""

import re
from html import escape
from typing import Callable, Dict, List, Optional, Sequence

from .classifiers import (
    find_logo_node,
    is_checkbox_label,
    is_input_placeholder,
    is_submit_button,
)
from .defaults import (
    CHANGE_PASSWORD_DEFAULTS,
    EVENT_DEFAULTS,
    FORGOT_PASSWORD_DEFAULTS,
    LOGIN_DEFAULTS,
    NOTIFICATION_DEFAULTS,
    SIDEBAR_DEFAULTS,
    TABLE_DEFAULTS,
    ChangePasswordDefaults,
    EventDefaults,
    ForgotPasswordDefaults,
    LoginDefaults,
    NotificationDefaults,
    SidebarDefaults,
    TableDefaults,
)
from .detectors import NOTIFICATION, USERS, EVENT, FormField, TableLayout, find_menu_items
from .images import resolve_image_src
from .nodes import SHAPE_TYPES, DesignNode
from .styles import css_class_name

ClassNameFn = Callable[[DesignNode], str]

PASSWORD_TOGGLE_SCRIPT = """<script>
  (function () {
    document.querySelectorAll('[data-toggle-password]').forEach(function (btn) {
      btn.addEventListener('click', function () {
        var input = document.getElementById(btn.getAttribute('data-toggle-password'));
        if (!input) return;
        input.type = input.type === 'password' ? 'text' : 'password';
        var icon = btn.querySelector('i');
        icon.classList.toggle('bi-eye');
        icon.classList.toggle('bi-eye-slash');
      });
    });
  })();
</script>
"""

SEARCH_BAR = (
    "<div class=\"d-flex justify-content-end mb-3\">\n"
    "  <form class=\"d-flex\" role=\"search\">\n"
    "    <input class=\"form-control me-2\" type=\"search\" placeholder=\"Search\" aria-label=\"Search\">\n"
    "    <button class=\"btn btn-outline-primary\" type=\"submit\">Search</button>\n"
    "  </form>\n"
    "</div>\n"
)


def _classes(*parts: str) -> str:
    return " ".join(p for p in parts if p)


def _class_of(node: Optional[DesignNode], class_name: ClassNameFn) -> str:
    return class_name(node) if node is not None else ""


def _find_text(nodes: Sequence[DesignNode], pattern: str) -> Optional[DesignNode]:
    regex = re.compile(pattern, re.IGNORECASE)
    for node in nodes:
        if node.is_text and regex.search(node.text):
            return node
    return None


def _find_named(nodes: Sequence[DesignNode], pattern: str, types=SHAPE_TYPES) -> Optional[DesignNode]:
    regex = re.compile(pattern, re.IGNORECASE)
    for node in nodes:
        if node.type in types and regex.search(node.name):
            return node
    return None


def _find_button(nodes: Sequence[DesignNode], caption: str, name: Optional[str] = None) -> Optional[DesignNode]:
    """First shape holding at most one child whose text (or own name) reads like an action."""
    caption_re = re.compile(caption, re.IGNORECASE)
    name_re = re.compile(name, re.IGNORECASE) if name else None
    for node in nodes:
        if node.type not in SHAPE_TYPES or len(node.children) > 1:
            continue
        if node.children and node.children[0].is_text and caption_re.search(node.children[0].text):
            return node
        if name_re is not None and name_re.search(node.name):
            return node
    return None


def _caption(node: Optional[DesignNode]) -> str:
    """Visible text of a button-like node: its own text or its first TEXT child."""
    if node is None:
        return ""
    if node.is_text:
        return node.text.strip()
    for child in node.children:
        if child.is_text and child.text.strip():
            return child.text.strip()
    return ""


def _text_or(node: Optional[DesignNode], default: str) -> str:
    text = node.text.strip() if node is not None else ""
    return escape(text or default)


def _password_input(field_id: str, label: str, placeholder: str, label_cls: str = "", input_cls: str = "") -> str:
    return (
        "  <div class=\"mb-3\">\n"
        f"    <label for=\"{field_id}\" class=\"{_classes('form-label', label_cls)}\">{label}</label>\n"
        "    <div class=\"position-relative\">\n"
        f"      <input type=\"password\" class=\"{_classes('form-control', input_cls)}\" id=\"{field_id}\" "
        f"placeholder=\"{placeholder}\" style=\"padding-right: 2.5rem;\">\n"
        f"      <button type=\"button\" class=\"btn btn-link position-absolute top-50 end-0 translate-middle-y\" "
        f"data-toggle-password=\"{field_id}\" aria-label=\"Show password\">\n"
        "        <i class=\"bi bi-eye\"></i>\n"
        "      </button>\n"
        "    </div>\n"
        "  </div>\n"
    )


def _closest_label_above(nodes: Sequence[DesignNode], box: Optional[DesignNode], pattern: str) -> Optional[DesignNode]:
    if box is None or box.bounds is None:
        return None
    regex = re.compile(pattern, re.IGNORECASE)
    best = None
    for node in nodes:
        if not node.is_text or node.bounds is None or not regex.search(node.text):
            continue
        # a few px of overlap still counts as above
        if node.bounds.y >= box.bounds.y + 5:
            continue
        if best is None or node.bounds.y > best.bounds.y:
            best = node
    return best


def generate_login_form(
    nodes: Sequence[DesignNode],
    class_name: ClassNameFn = css_class_name,
    defaults: LoginDefaults = LOGIN_DEFAULTS,
) -> str:
    email_box = _find_named(nodes, r"email")
    password_box = _find_named(nodes, r"password")
    remember_box = _find_named(nodes, r"remember", SHAPE_TYPES + ("GROUP",))
    button = None
    for node in nodes:
        if node.type not in SHAPE_TYPES:
            continue
        if "login button" in node.name.lower() or is_submit_button(node):
            button = node
            break
    forgot_link = _find_text(nodes, r"forgot")

    email_label = _find_text(nodes, r"email|username")
    password_label = _closest_label_above(nodes, password_box, r"password") or _find_text(nodes, r"password")
    remember_label = next((n for n in nodes if is_checkbox_label(n)), None)
    email_placeholder = next(
        (n for n in nodes if is_input_placeholder(n) and re.search(r"email|example@", n.text, re.IGNORECASE)),
        None,
    )
    password_placeholder = next(
        (n for n in nodes if is_input_placeholder(n) and "password" in n.text.lower()),
        None,
    )

    out = ["<form>\n"]
    out.append(
        "  <div class=\"mb-3\">\n"
        f"    <label for=\"email\" class=\"{_classes('form-label', _class_of(email_label, class_name))}\">"
        f"{_text_or(email_label, defaults.email_label)}</label>\n"
        f"    <input type=\"email\" class=\"{_classes('form-control', _class_of(email_box, class_name))}\" "
        f"id=\"email\" placeholder=\"{_text_or(email_placeholder, defaults.email_placeholder)}\">\n"
        "  </div>\n"
    )
    out.append(_password_input(
        "password",
        _text_or(password_label, defaults.password_label),
        _text_or(password_placeholder, defaults.password_placeholder),
        _class_of(password_label, class_name),
        _class_of(password_box, class_name),
    ))
    if remember_box is not None or remember_label is not None:
        out.append(
            "  <div class=\"mb-3 form-check\">\n"
            "    <input type=\"checkbox\" class=\"form-check-input\" id=\"remember\">\n"
            f"    <label class=\"{_classes('form-check-label', _class_of(remember_label, class_name))}\" "
            f"for=\"remember\">{_text_or(remember_label, defaults.remember_label)}</label>\n"
            "  </div>\n"
        )
    caption = escape(_caption(button) or defaults.submit_caption)
    out.append(
        f"  <button type=\"submit\" class=\"{_classes('btn btn-primary w-100 mb-3', _class_of(button, class_name))}\">"
        f"{caption}</button>\n"
    )
    if forgot_link is not None:
        out.append(
            "  <div class=\"text-center\">\n"
            f"    <a href=\"#\" class=\"{_classes('text-decoration-none', class_name(forgot_link))}\">"
            f"{escape(forgot_link.text)}</a>\n"
            "  </div>\n"
        )
    out.append("</form>\n")
    out.append(PASSWORD_TOGGLE_SCRIPT)
    return "".join(out)


def generate_forgot_password_form(
    nodes: Sequence[DesignNode],
    class_name: ClassNameFn = css_class_name,
    defaults: ForgotPasswordDefaults = FORGOT_PASSWORD_DEFAULTS,
) -> str:
    email_label = _find_text(nodes, r"email|mail")
    email_box = _find_named(nodes, r"email")
    description = next(
        (n for n in nodes
         if n.is_text and len(n.text) > 15 and re.search(r"email|link|reset", n.text, re.IGNORECASE)
         and not n.text.strip().endswith("*")),
        None,
    )
    button = _find_button(nodes, r"submit|send|reset|recover", r"button|submit|send|reset")
    back_link = _find_text(nodes, r"back|login")
    placeholder = next(
        (n for n in nodes if is_input_placeholder(n) and re.search(r"email|example@", n.text, re.IGNORECASE)),
        None,
    )

    return (
        "<form>\n"
        f"  <p class=\"{_classes('text-center mb-4', _class_of(description, class_name))}\">"
        f"{_text_or(description, defaults.description)}</p>\n"
        "  <div class=\"mb-4\">\n"
        f"    <label for=\"email\" class=\"{_classes('form-label', _class_of(email_label, class_name))}\">"
        f"{_text_or(email_label, defaults.email_label)}</label>\n"
        f"    <input type=\"email\" class=\"{_classes('form-control', _class_of(email_box, class_name))}\" "
        f"id=\"email\" placeholder=\"{_text_or(placeholder, defaults.email_placeholder)}\">\n"
        "  </div>\n"
        f"  <button type=\"submit\" class=\"{_classes('btn btn-primary w-100 mb-3', _class_of(button, class_name))}\">"
        f"{escape(_caption(button) or defaults.submit_caption)}</button>\n"
        "  <div class=\"text-center mt-3\">\n"
        f"    <a href=\"#\" class=\"{_classes('text-decoration-none', _class_of(back_link, class_name))}\">"
        f"{_text_or(back_link, defaults.back_link)}</a>\n"
        "  </div>\n"
        "</form>\n"
    )


def generate_change_password_form(
    nodes: Sequence[DesignNode],
    class_name: ClassNameFn = css_class_name,
    defaults: ChangePasswordDefaults = CHANGE_PASSWORD_DEFAULTS,
) -> str:
    button = _find_button(nodes, r"submit|save|update|change")
    out = ["<form>\n"]
    out.append(_password_input("currentPassword", escape(defaults.current_label), escape(defaults.current_placeholder)))
    out.append(_password_input("newPassword", escape(defaults.new_label), escape(defaults.new_placeholder)))
    out.append(_password_input("confirmPassword", escape(defaults.confirm_label), escape(defaults.confirm_placeholder)))
    out.append(
        f"  <button type=\"submit\" class=\"{_classes('btn btn-primary w-100', _class_of(button, class_name))}\">"
        f"{escape(_caption(button) or defaults.submit_caption)}</button>\n"
    )
    out.append("</form>\n")
    out.append(PASSWORD_TOGGLE_SCRIPT)
    return "".join(out)


def _options(values) -> str:
    return "".join(f"          <option>{escape(v)}</option>\n" for v in values)


def generate_notification_form(
    nodes: Sequence[DesignNode],
    class_name: ClassNameFn = css_class_name,
    defaults: NotificationDefaults = NOTIFICATION_DEFAULTS,
) -> str:
    # fully static; the node list is accepted for a uniform signature
    return (
        "<div class=\"card mb-4\">\n"
        "  <div class=\"card-body\">\n"
        "    <form>\n"
        "      <div class=\"mb-3\">\n"
        f"        <label for=\"notificationType\" class=\"form-label\">{escape(defaults.type_label)}</label>\n"
        "        <select class=\"form-select\" id=\"notificationType\">\n"
        f"{_options(defaults.type_options)}"
        "        </select>\n"
        "      </div>\n"
        "      <div class=\"mb-3\">\n"
        f"        <label for=\"notificationText\" class=\"form-label\">{escape(defaults.text_label)}</label>\n"
        "        <textarea class=\"form-control\" id=\"notificationText\" rows=\"3\"></textarea>\n"
        "      </div>\n"
        "      <div class=\"mb-3\">\n"
        f"        <label for=\"notificationRecipients\" class=\"form-label\">{escape(defaults.recipients_label)}</label>\n"
        "        <select class=\"form-select\" id=\"notificationRecipients\">\n"
        f"{_options(defaults.recipient_options)}"
        "        </select>\n"
        "      </div>\n"
        f"      <button type=\"submit\" class=\"btn btn-primary\">{escape(defaults.submit_caption)}</button>\n"
        "    </form>\n"
        "  </div>\n"
        "</div>\n"
    )


def generate_event_form(
    nodes: Sequence[DesignNode],
    class_name: ClassNameFn = css_class_name,
    defaults: EventDefaults = EVENT_DEFAULTS,
) -> str:
    name_label = _find_text(nodes, r"event\s*name")
    date_label = _find_text(nodes, r"event\s*date")
    description_label = _find_text(nodes, r"description")
    return (
        "<form>\n"
        "  <div class=\"mb-3\">\n"
        f"    <label for=\"eventName\" class=\"{_classes('form-label', _class_of(name_label, class_name))}\">"
        f"{_text_or(name_label, defaults.name_label)}</label>\n"
        "    <input type=\"text\" class=\"form-control\" id=\"eventName\">\n"
        "  </div>\n"
        "  <div class=\"mb-3\">\n"
        f"    <label for=\"eventDate\" class=\"{_classes('form-label', _class_of(date_label, class_name))}\">"
        f"{_text_or(date_label, defaults.date_label)}</label>\n"
        "    <input type=\"datetime-local\" class=\"form-control\" id=\"eventDate\">\n"
        "  </div>\n"
        "  <div class=\"mb-3\">\n"
        f"    <label for=\"eventDescription\" class=\"{_classes('form-label', _class_of(description_label, class_name))}\">"
        f"{_text_or(description_label, defaults.description_label)}</label>\n"
        "    <textarea class=\"form-control\" id=\"eventDescription\" rows=\"3\"></textarea>\n"
        "  </div>\n"
        f"  <button type=\"submit\" class=\"btn btn-primary\">{escape(defaults.submit_caption)}</button>\n"
        "</form>\n"
    )


def menu_icon(text: str, defaults: SidebarDefaults = SIDEBAR_DEFAULTS) -> str:
    lowered = text.lower()
    for key, icon in defaults.icons:
        if key in lowered:
            return icon
    return defaults.default_icon


def _is_active(text: str, archetype: str) -> bool:
    lowered = text.lower()
    if archetype == NOTIFICATION:
        return "notification" in lowered or "push" in lowered
    if archetype == USERS:
        return "user" in lowered
    if archetype == EVENT:
        return "event" in lowered
    return False


def _menu_item(text: str, icon: str, active: bool) -> str:
    state = "active" if active else "text-white"
    return (
        "    <li class=\"nav-item\">\n"
        f"      <a href=\"#\" class=\"nav-link {state}\">\n"
        f"        <i class=\"bi {icon} me-2\"></i>\n"
        f"        {escape(text)}\n"
        "      </a>\n"
        "    </li>\n"
    )


def generate_sidebar(
    nodes: Sequence[DesignNode],
    archetype: str,
    image_map: Optional[Dict[str, str]] = None,
    defaults: SidebarDefaults = SIDEBAR_DEFAULTS,
) -> str:
    out = ["<div class=\"col-auto d-flex flex-column flex-shrink-0 bg-dark text-white sidebar\">\n"]
    logo = find_logo_node(nodes)
    logo_src = resolve_image_src(logo, image_map) if logo is not None else None
    if logo_src:
        out.append(
            "  <div class=\"d-flex align-items-center justify-content-center py-3 mb-3\">\n"
            f"    <img src=\"{escape(logo_src)}\" alt=\"Logo\" class=\"sidebar-logo\">\n"
            "  </div>\n"
        )
    else:
        out.append(
            "  <a href=\"/\" class=\"d-flex align-items-center mb-3 text-white text-decoration-none p-3\">\n"
            f"    <span class=\"fs-4\">{escape(defaults.brand)}</span>\n"
            "  </a>\n"
        )
    out.append("  <hr>\n  <ul class=\"nav nav-pills flex-column mb-auto p-2\">\n")

    items = find_menu_items(nodes)
    if len(items) < 2:
        for item in defaults.menu:
            out.append(_menu_item(item.text, item.icon, bool(item.archetype) and item.archetype == archetype))
    else:
        for node in items:
            out.append(_menu_item(node.text, menu_icon(node.text, defaults), _is_active(node.text, archetype)))

    profile = next(
        (n for n in nodes
         if n.is_text and n.bounds is not None and n.bounds.x < 200 and n.bounds.y > 400
         and re.search(r"user|profile|name", n.text, re.IGNORECASE)),
        None,
    )
    out.append(
        "  </ul>\n"
        "  <hr>\n"
        "  <div class=\"dropdown p-3\">\n"
        "    <a href=\"#\" class=\"d-flex align-items-center text-white text-decoration-none dropdown-toggle\" "
        "id=\"sidebarUser\" data-bs-toggle=\"dropdown\" aria-expanded=\"false\">\n"
        f"      <img src=\"{escape(defaults.avatar_src)}\" alt=\"\" width=\"32\" height=\"32\" class=\"rounded-circle me-2\">\n"
        f"      <strong>{_text_or(profile, defaults.user_name)}</strong>\n"
        "    </a>\n"
        "    <ul class=\"dropdown-menu dropdown-menu-dark text-small shadow\" aria-labelledby=\"sidebarUser\">\n"
        "      <li><a class=\"dropdown-item\" href=\"#\">Profile</a></li>\n"
        "      <li><a class=\"dropdown-item\" href=\"#\">Settings</a></li>\n"
        "      <li><hr class=\"dropdown-divider\"></li>\n"
        "      <li><a class=\"dropdown-item\" href=\"#\">Sign out</a></li>\n"
        "    </ul>\n"
        "  </div>\n"
        "</div>\n"
    )
    return "".join(out)


def generate_tabs(tabs: Sequence[DesignNode], class_name: ClassNameFn = css_class_name) -> str:
    if not tabs:
        return ""
    out = ["<ul class=\"nav nav-tabs mb-4\">\n"]
    for index, tab in enumerate(tabs):
        link_cls = _classes("nav-link", "active" if index == 0 else "", class_name(tab))
        out.append(f"  <li class=\"nav-item\"><a class=\"{link_cls}\" href=\"#\">{escape(tab.text)}</a></li>\n")
    out.append("</ul>\n")
    return "".join(out)


def generate_search_bar() -> str:
    return SEARCH_BAR


def _cell(header: str, value: str, defaults: TableDefaults) -> str:
    lowered = header.lower()
    if "photo" in lowered:
        body = f"<img src=\"{escape(defaults.avatar_src)}\" class=\"rounded-circle\" alt=\"Profile\">"
    elif "action" in lowered:
        body = "<button type=\"button\" class=\"btn btn-sm btn-light rounded-circle\"><i class=\"bi bi-arrow-repeat\"></i></button>"
    else:
        body = escape(value)
    return f"            <td class=\"px-4 py-3\">{body}</td>\n"


def generate_table(layout: Optional[TableLayout], defaults: TableDefaults = TABLE_DEFAULTS) -> str:
    """Table card with header row, body rows and pagination footer.

    Rows come from the detected data cells by column index. Without any data
    cells the default headers are shown with sample rows, whose values fill
    the text columns left to right.
    """
    rows: List[List[str]] = []
    if layout is not None and layout.headers and layout.rows:
        headers = [h.text.strip() for h in layout.headers]
        for row in layout.rows:
            rows.append([_cell(h, row[i].text if i < len(row) else "", defaults) for i, h in enumerate(headers)])
    else:
        headers = list(defaults.headers)
        for sample in defaults.sample_rows:
            values = iter(sample)
            cells = []
            for header in headers:
                if re.search(r"photo|action", header, re.IGNORECASE):
                    cells.append(_cell(header, "", defaults))
                else:
                    cells.append(_cell(header, next(values, ""), defaults))
            rows.append(cells)

    out = [
        "<div class=\"card mb-4\">\n",
        "  <div class=\"card-body p-0\">\n",
        "    <div class=\"table-responsive\">\n",
        "      <table class=\"table table-hover align-middle mb-0\">\n",
        "        <thead class=\"bg-light\">\n",
        "          <tr>\n",
    ]
    out.extend(f"            <th class=\"px-4 py-3\">{escape(h)}</th>\n" for h in headers)
    out.append("          </tr>\n        </thead>\n        <tbody>\n")
    for cells in rows:
        out.append("          <tr>\n")
        out.extend(cells)
        out.append("          </tr>\n")
    out.append(
        "        </tbody>\n"
        "      </table>\n"
        "    </div>\n"
        "    <nav aria-label=\"Table navigation\" class=\"d-flex justify-content-between align-items-center p-3 border-top\">\n"
        "      <div>Items per page: <select class=\"form-select form-select-sm d-inline-block w-auto\">"
        f"<option>{defaults.page_size}</option></select></div>\n"
        "      <ul class=\"pagination pagination-sm mb-0\">\n"
        "        <li class=\"page-item disabled\"><a class=\"page-link\" href=\"#\">Previous</a></li>\n"
        "        <li class=\"page-item active\"><a class=\"page-link\" href=\"#\">1</a></li>\n"
        "        <li class=\"page-item\"><a class=\"page-link\" href=\"#\">2</a></li>\n"
        "        <li class=\"page-item\"><a class=\"page-link\" href=\"#\">Next</a></li>\n"
        "      </ul>\n"
        "    </nav>\n"
        "  </div>\n"
        "</div>\n"
    )
    return "".join(out)


def generate_generic_fields(fields: Sequence[FormField], class_name: ClassNameFn = css_class_name) -> str:
    if not fields:
        return ""
    out = ["<form>\n"]
    for index, item in enumerate(fields, start=1):
        field_id = f"field{index}"
        label_cls = _classes("form-label", class_name(item.label))
        input_cls = _classes("form-control", class_name(item.box))
        out.append("  <div class=\"mb-3\">\n")
        out.append(f"    <label for=\"{field_id}\" class=\"{label_cls}\">{escape(item.label.text.strip())}</label>\n")
        if item.input_type == "textarea":
            out.append(f"    <textarea class=\"{input_cls}\" id=\"{field_id}\" rows=\"3\"></textarea>\n")
        else:
            out.append(f"    <input type=\"{item.input_type}\" class=\"{input_cls}\" id=\"{field_id}\">\n")
        out.append("  </div>\n")
    out.append("  <button type=\"submit\" class=\"btn btn-primary\">Submit</button>\n")
    out.append("</form>\n")
    return "".join(out)
