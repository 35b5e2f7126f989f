# question_bank/urls.py

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

from .views import health, robots_txt

urlpatterns = [
    path('api/admin/', include('manager.urls')),
    path('api/', include('archive.urls')),
    # upload pages share the admin/ prefix, so they go before the admin site
    path('admin/', include('manager.page_urls')),
    path('admin/', admin.site.urls),
    path('health', health, name='health'),
    path('robots.txt', robots_txt),
    path('', include('archive.page_urls')),
]

handler404 = 'question_bank.views.page_not_found'
handler500 = 'question_bank.views.server_error'

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
