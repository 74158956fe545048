import logging
from functools import wraps

from django.conf import settings
from django.core.cache import cache
from django.shortcuts import render
from django.views import View
from django_ratelimit.decorators import ratelimit
from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.views import APIView

from .client import SubmissionStatus
from .forms import ContactPageForm
from .models import ContactSubmission
from .processing import build_contact_form, save_contact_submission
from .serializers import ContactSubmissionSerializer

logger = logging.getLogger("django")

# Upper bound on how long a stuck submission blocks its session.
SUBMIT_GUARD_TIMEOUT = 300


def conditional_ratelimit(*args, **kwargs):
    def decorator(func):
        limited = ratelimit(*args, **kwargs)(func)

        @wraps(func)
        def wrapper(request, *func_args, **func_kwargs):
            if settings.TESTING:
                return func(request, *func_args, **func_kwargs)
            return limited(request, *func_args, **func_kwargs)

        return wrapper

    return decorator


@conditional_ratelimit(key="ip", rate="5/m", method="POST", block=True)
def rate_limit_check(request):
    pass


class StandardResultsSetPagination(PageNumberPagination):
    page_size = 5
    page_size_query_param = "page_size"
    max_page_size = 100


def staff_only_response():
    return Response(
        {"detail": "You do not have permission to perform this action."},
        status=status.HTTP_403_FORBIDDEN,
    )


class ContactSubmissionView(APIView):

    def get(self, request, pk=None, *args, **kwargs):
        if not request.user.is_staff:
            return staff_only_response()

        if pk is not None:
            try:
                submission = ContactSubmission.objects.get(pk=pk)
            except ContactSubmission.DoesNotExist:
                return Response(status=status.HTTP_404_NOT_FOUND)
            serializer = ContactSubmissionSerializer(submission)
            return Response(serializer.data)

        submissions = ContactSubmission.objects.all()
        paginator = StandardResultsSetPagination()
        page = paginator.paginate_queryset(submissions, request, view=self)
        serializer = ContactSubmissionSerializer(page, many=True)
        return paginator.get_paginated_response(serializer.data)

    def post(self, request, *args, **kwargs):
        rate_limit_check(request)

        serializer = ContactSubmissionSerializer(data=request.data)
        if not serializer.is_valid():
            logger.warning(
                "Contact submission rejected due to invalid data.",
                extra={"errors": serializer.errors},
            )
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            save_contact_submission(serializer)
        except Exception:
            logger.error("Unexpected error while saving contact submission", exc_info=True)
            return Response(
                {"message": "An unexpected error occurred while sending your message."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(serializer.data, status=status.HTTP_201_CREATED)

    def delete(self, request, pk, *args, **kwargs):
        if not request.user.is_staff:
            return staff_only_response()

        try:
            submission = ContactSubmission.objects.get(pk=pk)
        except ContactSubmission.DoesNotExist:
            return Response(status=status.HTTP_404_NOT_FOUND)

        submission.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


def submit_guard_key(request):
    if not request.session.session_key:
        request.session.save()
    return f"contact-page-submitting:{request.session.session_key}"


class ContactPageView(View):
    template_name = "contact/contact_form.html"

    def get(self, request, *args, **kwargs):
        # the submit guard is keyed on the session, so start one here
        submit_guard_key(request)
        return self.render_page(request, ContactPageForm(), build_contact_form())

    def post(self, request, *args, **kwargs):
        rate_limit_check(request)

        form = ContactPageForm(request.POST)
        contact_form = build_contact_form()
        if not form.is_valid():
            return self.render_page(request, form, contact_form)

        guard_key = submit_guard_key(request)
        if not cache.add(guard_key, True, SUBMIT_GUARD_TIMEOUT):
            logger.warning("Contact page submission already in progress for this session")
            return self.render_page(
                request, form, contact_form, page_status=SubmissionStatus.SUBMITTING
            )

        try:
            contact_form.update(**form.cleaned_data)
            if contact_form.submit():
                form = ContactPageForm()
            else:
                form = ContactPageForm(initial=contact_form.submission.to_payload())
        finally:
            cache.delete(guard_key)
        return self.render_page(request, form, contact_form)

    def render_page(self, request, form, contact_form, page_status=None):
        page_status = page_status or contact_form.status
        context = {
            "form": form,
            "status": page_status.value,
            "can_submit": page_status != SubmissionStatus.SUBMITTING,
            "error_message": contact_form.error_message,
            "is_success": page_status == SubmissionStatus.SUCCESS,
        }
        return render(request, self.template_name, context)
