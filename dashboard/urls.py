"""
URL configuration for Dashboard app.

Routes (mounted at /api/dashboard/):
- metrics/ - Headline counts and monthly spend
- recent-sites/, recent-purchases/, pending-wages/ - Latest records
- labour-team-summary/ - Totals per labour group
"""

from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    path('metrics/', views.dashboard_metrics, name='metrics'),
    path('recent-sites/', views.recent_sites, name='recent_sites'),
    path('recent-purchases/', views.recent_purchases, name='recent_purchases'),
    path('pending-wages/', views.pending_wages, name='pending_wages'),
    path('labour-team-summary/', views.labour_team_summary, name='labour_team_summary'),
]
