from django.urls import path
from . import views

app_name = 'exports'

urlpatterns = [
    path('projects/<uuid:project_id>/xlsx/', views.xlsx_export, name='xlsx'),
    path('projects/<uuid:project_id>/analytics-csv/', views.analytics_csv_export, name='analytics-csv'),
    path('projects/<uuid:project_id>/google-sheets/', views.google_sheets_sync, name='google-sheets'),
]
