import logging

from django.conf import settings
from django.core.mail import send_mail
from django.utils.html import escape

logger = logging.getLogger("django")


def send_contact_notification_email(submission):
    """Tell the staff inbox about a new contact submission.

    Does nothing when ``CONTACT_NOTIFICATION_EMAIL`` is unset. Returns True
    only if a message was handed to the mail backend.
    """
    recipient = settings.CONTACT_NOTIFICATION_EMAIL
    if not recipient:
        return False

    subject = f"[Broodpro] New contact message from {submission.name}"
    text_message = (
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n\n"
        f"{submission.message}\n"
    )
    html_message = f"""
        <!DOCTYPE html>
        <html>
        <head>
            <title>New contact message</title>
        </head>
        <body>
            <h1>New contact message</h1>
            <p>Name: <b>{escape(submission.name)}</b></p>
            <p>Email: <b>{escape(submission.email)}</b></p>
            <p>{escape(submission.message)}</p>
        </body>
        </html>
    """
    return send_email(
        subject, text_message, settings.EMAIL_HOST_USER, [recipient], html_message
    )


def send_email(subject, message, from_email, recipient_list, html_message=None):
    try:
        send_mail(
            subject,
            message,
            from_email,
            recipient_list,
            fail_silently=False,
            html_message=html_message,
        )
        logger.info(f"Email sent to {recipient_list} with subject '{subject}'")
        return True
    except Exception as e:
        logger.error(
            f"Failed to send email to {recipient_list} with subject '{subject}': {e}",
            exc_info=True,
        )
        return False
