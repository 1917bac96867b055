from django.conf import settings
from django.urls import include, path, re_path
from django.views.static import serve


def uploads(request, path):
    return serve(request, path, document_root=settings.MEDIA_ROOT)


urlpatterns = [
    path("api/", include("api.urls")),
    re_path(r"^{}(?P<path>.*)$".format(settings.MEDIA_URL.lstrip("/")), uploads, name="uploads"),
]
