from unittest.mock import patch

import pytest
from django.db import DatabaseError
from django.test import override_settings

from contact.client import GENERIC_ERROR_MESSAGE, ContactForm, SubmissionStatus
from contact.models import ContactSubmission
from contact.processing import StoredContactForm, build_contact_form

FIELDS = {
    "name": "John Doe",
    "email": "john@example.com",
    "message": "Hello there!",
}


@override_settings(CONTACT_FORM_ENDPOINT="https://relay.example.com/contact")
def test_build_contact_form_uses_configured_endpoint():
    contact_form = build_contact_form()

    assert type(contact_form) is ContactForm
    assert contact_form.endpoint == "https://relay.example.com/contact"


@override_settings(CONTACT_FORM_ENDPOINT="https://relay.example.com/contact")
def test_build_contact_form_explicit_endpoint_wins():
    contact_form = build_contact_form("https://other.example.com/f", **FIELDS)

    assert contact_form.endpoint == "https://other.example.com/f"
    assert contact_form.submission.to_payload() == FIELDS


@override_settings(CONTACT_FORM_ENDPOINT="")
def test_build_contact_form_without_endpoint_stores_locally():
    assert isinstance(build_contact_form(), StoredContactForm)


@pytest.mark.django_db
def test_stored_contact_form_saves_and_clears_fields():
    contact_form = StoredContactForm(**FIELDS)

    assert contact_form.submit() is True
    assert contact_form.status == SubmissionStatus.SUCCESS
    assert contact_form.submission.to_payload() == {"name": "", "email": "", "message": ""}
    assert ContactSubmission.objects.filter(email="john@example.com").count() == 1


@pytest.mark.django_db
def test_stored_contact_form_rejects_invalid_email():
    contact_form = StoredContactForm(name="John Doe", email="nope", message="Hi")

    assert contact_form.submit() is False
    assert contact_form.status == SubmissionStatus.ERROR
    assert contact_form.error_message == GENERIC_ERROR_MESSAGE
    assert contact_form.submission.email == "nope"
    assert not ContactSubmission.objects.exists()


@pytest.mark.django_db
@patch("contact.processing.save_contact_submission", side_effect=DatabaseError("locked"))
def test_stored_contact_form_database_error_keeps_fields(mock_save):
    contact_form = StoredContactForm(**FIELDS)

    assert contact_form.submit() is False
    assert contact_form.status == SubmissionStatus.ERROR
    assert contact_form.submission.to_payload() == FIELDS
