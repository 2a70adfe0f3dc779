from django.urls import path

from budget import views

urlpatterns = [
    path("budget", views.BudgetCreate.as_view(), name="budget_create"),
    path(
        "budget/currency",
        views.BudgetCurrencyConversion.as_view(),
        name="budget_currency_conversion",
    ),
    path(
        "budget/<str:project_id>", views.BudgetDetails.as_view(), name="budget_details"
    ),
]
