from django.contrib import admin
from django.urls import path, include
from core.views import HealthCheckView

urlpatterns = [
    path('admin/', admin.site.urls),
    # signup/ and login/ share the /api/users/ prefix with the profile routes
    path('api/users/', include('authx.urls')),
    path('api/users/', include('users.urls')),
    path('api/workspace/', include('workspace.urls')),
    path("api/health/", HealthCheckView.as_view(), name="health-check"),
]
