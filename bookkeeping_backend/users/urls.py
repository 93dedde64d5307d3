# users/urls.py

from django.urls import path

from users.views import MeView, UserListCreateView

app_name = "users"

urlpatterns = [
    # ---------------- ADMIN ONLY ----------------
    path("", UserListCreateView.as_view(), name="user-list"),
    # ---------------- AUTHENTICATED ----------------
    path("me/", MeView.as_view(), name="me"),
]
