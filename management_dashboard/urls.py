from django.urls import path
from . import views

app_name = 'management_dashboard'

urlpatterns = [
    path('analytics/', views.AnalyticsAPIView.as_view(), name='analytics'),
]
