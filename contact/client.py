"""
Contact form submission flow.

A ``ContactForm`` holds the three fields a visitor types in, posts them as
JSON to whatever endpoint it is pointed at (a form relay, a serverless
function or this site's own ``/api/contact/``) and records the outcome in a
``SubmissionStatus``.
"""

import logging
import threading
from dataclasses import asdict, dataclass
from enum import Enum

import requests

logger = logging.getLogger("django")

GENERIC_ERROR_MESSAGE = "Something went wrong sending your message. Please try again."


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class SubmissionFailure(Exception):
    """Raised when the endpoint can't be reached or answers with a non-2xx status."""

    def __init__(self, message, status_code=None, detail=None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


@dataclass
class FormSubmission:
    name: str = ""
    email: str = ""
    message: str = ""

    def to_payload(self):
        return asdict(self)

    def reset(self):
        self.name = ""
        self.email = ""
        self.message = ""


def post_submission(endpoint, payload):
    """POST ``payload`` once and return the response, or raise SubmissionFailure."""
    headers = {"Content-Type": "application/json"}
    try:
        response = requests.post(endpoint, json=payload, headers=headers)
    except requests.exceptions.RequestException as e:
        raise SubmissionFailure(f"Could not reach {endpoint}: {e}") from e

    if not 200 <= response.status_code < 300:
        try:
            detail = response.json()
        except ValueError:
            detail = response.text
        raise SubmissionFailure(
            f"Endpoint answered with status {response.status_code}",
            status_code=response.status_code,
            detail=detail,
        )
    return response


class ContactForm:
    FIELDS = ("name", "email", "message")

    def __init__(self, endpoint, **fields):
        self.endpoint = endpoint
        self.submission = FormSubmission()
        self.status = SubmissionStatus.IDLE
        self.error_message = ""
        self._dispatch_lock = threading.Lock()
        if fields:
            self.update(**fields)

    def update(self, **fields):
        for field, value in fields.items():
            if field not in self.FIELDS:
                raise ValueError(f"Unknown contact form field: {field}")
            setattr(self.submission, field, value)

    def dispatch(self, payload):
        """Deliver one submission or raise SubmissionFailure."""
        post_submission(self.endpoint, payload)

    @property
    def can_submit(self):
        return self.status != SubmissionStatus.SUBMITTING

    def submit(self):
        """Send the current fields. Returns True on success.

        A call made while another submission is still outstanding is not
        dispatched and returns False without touching the status.
        """
        if not self._dispatch_lock.acquire(blocking=False):
            logger.warning("Contact form submission already in progress; ignoring")
            return False

        try:
            self.status = SubmissionStatus.SUBMITTING
            self.error_message = ""
            try:
                self.dispatch(self.submission.to_payload())
            except SubmissionFailure as e:
                logger.error(
                    f"Contact form submission failed: {e}",
                    extra={"status_code": e.status_code, "detail": e.detail},
                )
                self.status = SubmissionStatus.ERROR
                self.error_message = GENERIC_ERROR_MESSAGE
                return False

            logger.info(f"Contact form submitted to {self.endpoint or 'this site'}")
            self.status = SubmissionStatus.SUCCESS
            self.submission.reset()
            return True
        finally:
            self._dispatch_lock.release()
