from django.urls import path
from . import views

urlpatterns = [
    # Health check
    path("health", views.health, name="health"),

    # Accounts
    path("auth/signup", views.signup, name="signup"),
    path("auth/login", views.login, name="login"),
    path("users/<str:user_id>/contacts", views.contacts, name="contacts"),

    # Call history (Firestore-based, write-once records)
    path("call/logs", views.call_logs, name="call_logs"),
]
