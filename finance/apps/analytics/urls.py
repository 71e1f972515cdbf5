from django.urls import path

from analytics import views

urlpatterns = [
    path("transactions/", views.TransactionTotals.as_view(), name="analytics_transactions"),
    path("categories/", views.CategoriesShare.as_view(), name="analytics_categories"),
    path("metrics/", views.Metrics.as_view(), name="analytics_metrics"),
]
