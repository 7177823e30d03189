"""Message templates for alert lifecycle notifications."""

from dataclasses import dataclass
from html import escape

_FOOTER = '<p style="color: #9333ea; font-size: 12px; margin-top: 30px;">Sent via CarBlock Alert System</p>'
_WRAPPER = (
    '<div style="font-family: sans-serif; max-width: 600px; margin: 0 auto; '
    'background: linear-gradient(135deg, #581c87, #86198f); padding: 30px; border-radius: 16px;">'
    "{content}" + _FOOTER + "</div>"
)
_CARD = (
    '<div style="background: rgba(255,255,255,0.1); padding: 20px; border-radius: 12px; margin-bottom: 20px;">'
    '<p style="color: #e9d5ff; margin: 0 0 10px 0; font-size: 14px;">{label}</p>'
    '<p style="color: white; margin: 0; font-size: {size}px; font-weight: bold;">{value}</p>'
    "{extra}"
    "</div>"
)


@dataclass(frozen=True)
class Notice:
    """One message rendered for both the email and push channels."""

    subject: str
    html: str
    push_title: str
    push_body: str


def _heading(text: str) -> str:
    return f'<h1 style="color: white; margin: 0 0 20px 0; font-size: 24px;">{escape(text)}</h1>'


def _card(label: str, value: str, size: int = 28, extra: str = "") -> str:
    return _CARD.format(label=escape(label), value=escape(value), size=size, extra=extra)


def _line(text: str, color: str) -> str:
    return f'<p style="color: {color}; font-size: 16px; margin-top: 20px; font-weight: bold;">{escape(text)}</p>'


def blocking_notice(plate: str) -> Notice:
    """Sent to the plate owner when a new alert is created."""
    content = (
        _heading("Your Car is Blocking")
        + _card("Your car", plate)
        + _line("Your car is blocking someone at the parking lot. Please move it as soon as possible.", "#fbbf24")
    )
    return Notice(
        subject="URGENT: Your car is blocking someone",
        html=_WRAPPER.format(content=content),
        push_title="Move Your Car",
        push_body=f"Your car ({plate}) is blocking someone",
    )


def leaving_notice(plate: str, owner_name: str | None, owner_phone: str | None, urgent: bool) -> Notice:
    """Sent to the sender when the plate owner asks them to move.

    ``urgent`` selects the leaving-now wording.
    """
    name = owner_name or "The car owner"
    call = ""
    if owner_phone:
        phone = escape(owner_phone)
        call = f'<a href="tel:{phone}" style="color: #a855f7; text-decoration: none; font-size: 16px;">Call: {phone}</a>'

    if urgent:
        title = "Move your car NOW!"
        push_body = f"{name} is leaving right now. Move your car immediately."
        closing = "They are at their car and need to leave now!"
    else:
        title = "Time to move your car!"
        push_body = f"{name} needs to leave. Please move your car."
        closing = "Please move your car as soon as possible!"

    content = (
        _heading(title)
        + _card("Car you're blocking", plate)
        + _card("Owner", name, size=18, extra=call)
        + _line(closing, "#fbbf24")
    )
    return Notice(
        subject=title,
        html=_WRAPPER.format(content=content),
        push_title=title,
        push_body=push_body,
    )


def resolved_notice(plate: str, blocker_name: str | None) -> Notice:
    """Sent to the plate owner when the sender marks the alert resolved."""
    name = blocker_name or "The person blocking you"
    message = f"{name} has moved their car. Your car is no longer blocked!"
    content = _heading("You Can Leave Now!") + _card("Your car", plate) + _line(message, "#22c55e")
    return Notice(
        subject="Your car is no longer blocked!",
        html=_WRAPPER.format(content=content),
        push_title="Your car is no longer blocked!",
        push_body=f"{name} has moved their car. You can leave now.",
    )
