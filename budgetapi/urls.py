from django.urls import include, path

from budgetapi import views

handler404 = "budgetapi.views.not_found"

urlpatterns = [
    path("health", views.HealthView.as_view(), name="health"),
    path("api/ok", views.OkView.as_view(), name="ok"),
    path("api/project/", include("budget.urls")),
]
