from django.contrib import admin
from django.urls import include, path
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    # Dashboard aggregates
    path('api/dashboard/', include(('dashboard.urls', 'dashboard'), namespace='dashboard')),

    # Core resources (sites, labour, purchases, salaries, invoices, attendance, notifications)
    path('api/', include(('core.urls', 'core'), namespace='core')),

    # Authentication URLs (session login for the API)
    path('accounts/', include('django.contrib.auth.urls')),

    # Admin
    path('admin/', admin.site.urls),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
