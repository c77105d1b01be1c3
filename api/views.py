from django.conf import settings
from django.http import JsonResponse


def index(request):
    return JsonResponse({
        "name": settings.PRODUCT_NAME,
        "status": "ok",
        "docs": "/api/docs/",
    })
