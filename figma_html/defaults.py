"""
Default-value tables per archetype.

Generators fall back to these when the design has no matching node. They are
passed in through the ``defaults=`` keyword so tests and callers can swap them.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class LoginDefaults:
    title: str = "Login"
    email_label: str = "Email Address*"
    email_placeholder: str = "Enter your email address"
    password_label: str = "Password*"
    password_placeholder: str = "Enter password"
    remember_label: str = "Remember me"
    submit_caption: str = "Login"


@dataclass(frozen=True)
class ForgotPasswordDefaults:
    title: str = "Forgot Password?"
    description: str = "Enter your email address and we will send you a link to reset your password."
    email_label: str = "Email Address*"
    email_placeholder: str = "Enter email address"
    submit_caption: str = "Reset Password"
    back_link: str = "Back to Login"


@dataclass(frozen=True)
class ChangePasswordDefaults:
    title: str = "Change Password"
    current_label: str = "Current Password*"
    current_placeholder: str = "Enter current password"
    new_label: str = "New Password*"
    new_placeholder: str = "Enter new password"
    confirm_label: str = "Confirm Password*"
    confirm_placeholder: str = "Confirm new password"
    submit_caption: str = "Change Password"


@dataclass(frozen=True)
class NotificationDefaults:
    type_label: str = "Notification Type"
    type_options: Tuple[str, ...] = ("Information", "Warning", "Critical")
    text_label: str = "Notification Text"
    recipients_label: str = "Recipients"
    recipient_options: Tuple[str, ...] = ("All Users", "Admins Only", "Selected Users")
    submit_caption: str = "Send Notification"


@dataclass(frozen=True)
class EventDefaults:
    name_label: str = "Event Name"
    date_label: str = "Event Date"
    description_label: str = "Description"
    submit_caption: str = "Save Event"


@dataclass(frozen=True)
class MenuItem:
    text: str
    icon: str
    archetype: str = ""


@dataclass(frozen=True)
class SidebarDefaults:
    brand: str = "Dashboard"
    user_name: str = "User"
    avatar_src: str = "https://github.com/mdo.png"
    default_icon: str = "bi-circle"
    menu: Tuple[MenuItem, ...] = (
        MenuItem("Dashboard", "bi-speedometer2"),
        MenuItem("Users", "bi-people", "users"),
        MenuItem("Notifications", "bi-bell", "notification"),
        MenuItem("Settings", "bi-gear"),
    )
    # first substring match wins, so keep singular keys ahead of plurals
    icons: Tuple[Tuple[str, str], ...] = (
        ("dashboard", "bi-speedometer2"),
        ("home", "bi-house-door"),
        ("user", "bi-people"),
        ("business", "bi-building"),
        ("event", "bi-calendar-event"),
        ("schedule", "bi-calendar-check"),
        ("notification", "bi-bell"),
        ("push", "bi-bell"),
        ("setting", "bi-gear"),
        ("profile", "bi-person"),
        ("message", "bi-chat"),
        ("analytics", "bi-graph-up"),
        ("report", "bi-file-text"),
        ("logout", "bi-box-arrow-right"),
        ("upcoming", "bi-calendar-week"),
    )


@dataclass(frozen=True)
class TableDefaults:
    headers: Tuple[str, ...] = ("No.", "Profile Photo", "Name", "Email", "Registered on", "Action")
    sample_rows: Tuple[Tuple[str, ...], ...] = field(default_factory=lambda: tuple(
        (f"{i:02d}", "David Wagner" if i % 2 else "Ina Hogan", "mail@mail.com", "MM/DD/YYYY")
        for i in range(1, 11)
    ))
    avatar_src: str = "https://via.placeholder.com/32"
    page_size: int = 10


LOGIN_DEFAULTS = LoginDefaults()
FORGOT_PASSWORD_DEFAULTS = ForgotPasswordDefaults()
CHANGE_PASSWORD_DEFAULTS = ChangePasswordDefaults()
NOTIFICATION_DEFAULTS = NotificationDefaults()
EVENT_DEFAULTS = EventDefaults()
SIDEBAR_DEFAULTS = SidebarDefaults()
TABLE_DEFAULTS = TableDefaults()
