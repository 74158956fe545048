import logging

from django.conf import settings
from django.db import DatabaseError

from .client import ContactForm, SubmissionFailure
from .send_email_functions import send_contact_notification_email
from .serializers import ContactSubmissionSerializer

logger = logging.getLogger("django")


def save_contact_submission(serializer):
    submission = serializer.save()
    logger.info(f"Contact submission {submission.pk} received")
    send_contact_notification_email(submission)
    return submission


class StoredContactForm(ContactForm):
    """Contact form that writes to this site's database instead of posting over HTTP."""

    def __init__(self, **fields):
        super().__init__(None, **fields)

    def dispatch(self, payload):
        serializer = ContactSubmissionSerializer(data=payload)
        if not serializer.is_valid():
            raise SubmissionFailure("Contact submission rejected", detail=serializer.errors)
        try:
            save_contact_submission(serializer)
        except DatabaseError as e:
            raise SubmissionFailure(f"Could not store contact submission: {e}") from e


def build_contact_form(endpoint=None, **fields):
    """A form bound to ``endpoint``, else CONTACT_FORM_ENDPOINT, else the local database."""
    endpoint = endpoint or settings.CONTACT_FORM_ENDPOINT
    if endpoint:
        return ContactForm(endpoint, **fields)
    return StoredContactForm(**fields)
