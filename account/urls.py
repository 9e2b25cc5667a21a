# account/urls.py
from django.urls import path
from .api.views import LoginView, MeView

app_name = "account"
urlpatterns = [
    path("login", LoginView.as_view(), name="login"),
    path("me", MeView.as_view(), name="me"),
]
