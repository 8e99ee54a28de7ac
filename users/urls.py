# users/urls.py

from django.urls import path
from .views import UserListCreateView, UserDetailView, MeView, ChangePasswordView

urlpatterns = [
    path("", UserListCreateView.as_view(), name="user-list-create"),
    path("me/", MeView.as_view(), name="user-me"),
    path("me/password/", ChangePasswordView.as_view(), name="user-change-password"),
    path("<int:user_id>/", UserDetailView.as_view(), name="user-detail"),
]
