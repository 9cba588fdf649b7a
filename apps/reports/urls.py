from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    path('projects/<uuid:project_id>/unit-costs/', views.unit_cost_report, name='unit-costs'),
    path('projects/<uuid:project_id>/category-spending/', views.category_spending_report, name='category-spending'),
    path('projects/<uuid:project_id>/budget-plan/', views.budget_plan_report, name='budget-plan'),
    path('projects/<uuid:project_id>/summary/', views.summary_report, name='summary'),
    path('projects/<uuid:project_id>/partners/', views.partner_balance_report, name='partners'),
    path('projects/<uuid:project_id>/alerts/', views.alerts_report, name='alerts'),
    path('projects/<uuid:project_id>/trends/', views.trends_report, name='trends'),
]
