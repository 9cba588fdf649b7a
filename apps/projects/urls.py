from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'projects'

router = DefaultRouter()
router.register(r'projects', views.ProjectViewSet, basename='project')
router.register(r'partners', views.PartnerViewSet, basename='partner')
router.register(r'units', views.UnitViewSet, basename='unit')

urlpatterns = [
    path('', include(router.urls)),
]
