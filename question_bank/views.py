"""Site-level endpoints: health check, robots.txt and the error pages."""

from django.http import HttpResponse, JsonResponse
from django.shortcuts import render


def health(request):
    """Liveness probe for the load balancer; does not touch the database."""
    return JsonResponse({'status': 'ok'})


def robots_txt(request):
    content = "User-agent: *\nDisallow: /admin/\nDisallow: /api/\n"
    return HttpResponse(
        content,
        content_type="text/plain; charset=utf-8",
        headers={
            "Cache-Control": "public, max-age=3600",
        },
    )


def page_not_found(request, exception):
    return render(request, '404.html', status=404)


def server_error(request):
    return render(request, '500.html', status=500)
