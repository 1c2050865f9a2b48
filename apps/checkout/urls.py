from django.urls import path
from . import views

app_name = 'checkout'

urlpatterns = [
    path('quote/', views.CheckoutQuoteView.as_view(), name='checkout-quote'),
    path('place/', views.CheckoutPlaceView.as_view(), name='checkout-place'),
]
