"""URL routing for analytics endpoints."""

from django.urls import path  # type: ignore

from .views import StatisticsView, UtilizationView


urlpatterns = [
    # Do not prefix with 'analytics/' here; the namespace is defined in config.urls
    path('statistics/', StatisticsView.as_view(), name='analytics-statistics'),
    path('utilization/', UtilizationView.as_view(), name='analytics-utilization'),
]
