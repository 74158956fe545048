from django.urls import path

from .views import ContactPageView, ContactSubmissionView

urlpatterns = [
    path("contact/", ContactPageView.as_view(), name="contact_page"),
    path("api/contact/", ContactSubmissionView.as_view(), name="contacts"),
    path("api/contact/<int:pk>/", ContactSubmissionView.as_view(), name="contact"),
]
