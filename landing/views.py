from django.views.generic import TemplateView


class LandingPageView(TemplateView):
    """Public marketing page: header, hero text, call to action, hero image."""

    template_name = "landing/index.html"
