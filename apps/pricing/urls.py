from django.urls import path
from . import views

app_name = 'pricing'

urlpatterns = [
    path('total/', views.ComputeTotalView.as_view(), name='compute-total'),
    path('rules/applicable/', views.ApplicableRuleView.as_view(), name='applicable-rule'),
]
