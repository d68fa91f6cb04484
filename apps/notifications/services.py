"""Notification services for sending reservation emails."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.template.loader import render_to_string  # type: ignore
from django.utils.html import escape, strip_tags  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Reservation
    from apps.halls.models import SystemHandler

logger = logging.getLogger(__name__)


SYSTEM_LABELS = {
    "projector": "Projector",
    "mic": "Microphone",
    "sound_system": "Sound System",
}


# ============================================================================
# EMAIL NOTIFICATIONS
# ============================================================================

def send_email_notification(
    recipient_email: str,
    subject: str,
    template_name: str | None,
    context: dict,
    *,
    html_message: str | None = None,
) -> bool:
    """
    Send one email; never raises.

    Args:
        recipient_email: Recipient address
        subject: Subject line
        template_name: Django template path (optional)
        context: Template context
        html_message: Pre-rendered HTML body (optional)

    Returns:
        bool: True if the backend accepted the message
    """
    try:
        if html_message:
            text_message = strip_tags(html_message)
        elif template_name:
            html_message = render_to_string(template_name, context)
            text_message = strip_tags(html_message)
        else:
            text_message = context.get("message", "")
            html_message = None

        send_mail(
            subject=subject,
            message=text_message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


def _reservation_context(reservation: "Reservation") -> dict:
    return {
        "event_name": escape(reservation.event_name),
        "hall_name": escape(reservation.hall.name),
        "date": reservation.date.strftime("%d.%m.%Y"),
        "time": f"{reservation.start_time:%H:%M} - {reservation.end_time:%H:%M}",
        "department": escape(reservation.department),
        "faculty_incharge": escape(reservation.faculty_incharge),
        "booked_by": escape(reservation.requester.display_name),
        "additional_requirements": escape(reservation.additional_requirements),
    }


def send_reservation_confirmation_email(reservation: "Reservation") -> bool:
    """Booking confirmation to the requester."""
    from apps.notifications.routing import system_types_for

    subject = f"Booking Confirmation - {reservation.event_name}"
    context = _reservation_context(reservation)

    systems = sorted(system_types_for(reservation))
    systems_html = ""
    if systems:
        items = "".join(f"<li>{SYSTEM_LABELS[system]}</li>" for system in systems)
        systems_html = f"<p><strong>Required Systems:</strong></p><ul>{items}</ul>"

    notes_html = ""
    if context["additional_requirements"]:
        notes_html = f"<p><strong>Additional Requirements:</strong> {context['additional_requirements']}</p>"

    html_message = f"""
    <html>
    <body>
        <h2>Booking Confirmed</h2>
        <p>Dear {context['booked_by']},</p>
        <p>Your booking has been confirmed with the following details:</p>
        <ul>
            <li><strong>Event:</strong> {context['event_name']}</li>
            <li><strong>Hall:</strong> {context['hall_name']}</li>
            <li><strong>Date:</strong> {context['date']}</li>
            <li><strong>Time:</strong> {context['time']}</li>
            <li><strong>Department:</strong> {context['department']}</li>
            <li><strong>Expected Audience:</strong> {reservation.expected_audience}</li>
            <li><strong>Chairs Required:</strong> {reservation.chairs_required}</li>
        </ul>
        {systems_html}
        {notes_html}
        <p>Thank you!</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=reservation.requester.email,
        subject=subject,
        template_name=None,
        context=context,
        html_message=html_message,
    )


def send_reservation_rejected_email(reservation: "Reservation") -> bool:
    """Rejection notice to the requester."""
    subject = f"Booking Rejected - {reservation.event_name}"
    context = _reservation_context(reservation)

    html_message = f"""
    <html>
    <body>
        <h2>Booking Rejected</h2>
        <p>Dear {context['booked_by']},</p>
        <p>Your booking of <strong>{context['hall_name']}</strong> for
        <strong>{context['event_name']}</strong> on {context['date']} ({context['time']})
        was not approved.</p>
        <p>Please choose another slot or contact the administration.</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=reservation.requester.email,
        subject=subject,
        template_name=None,
        context=context,
        html_message=html_message,
    )


def send_handler_setup_email(reservation: "Reservation", handler: "SystemHandler") -> bool:
    """Setup instructions to one equipment handler."""
    subject = f"System Setup Required - {reservation.event_name}"
    context = _reservation_context(reservation)
    system_label = SYSTEM_LABELS.get(handler.system_type, handler.system_type)

    notes_html = ""
    if context["additional_requirements"]:
        notes_html = f"<p><strong>Additional Notes:</strong> {context['additional_requirements']}</p>"

    html_message = f"""
    <html>
    <body>
        <h2>System Setup Required</h2>
        <p>Dear {escape(handler.name)},</p>
        <p>Your assistance is required for the following event:</p>
        <ul>
            <li><strong>Event:</strong> {context['event_name']}</li>
            <li><strong>Hall:</strong> {context['hall_name']}</li>
            <li><strong>Date:</strong> {context['date']}</li>
            <li><strong>Time:</strong> {context['time']}</li>
            <li><strong>Department:</strong> {context['department']}</li>
            <li><strong>Faculty In-charge:</strong> {context['faculty_incharge']}</li>
        </ul>
        <p><strong>Your System Type:</strong> {system_label}</p>
        {notes_html}
        <p>Please ensure the {system_label.lower()} is ready before the event starts.</p>
        <p>For any queries, please contact: {context['booked_by']} ({reservation.requester.email})</p>
        <p>Thank you!</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=handler.email,
        subject=subject,
        template_name=None,
        context=context,
        html_message=html_message,
    )
