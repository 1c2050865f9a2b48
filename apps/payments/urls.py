from django.urls import path
from . import views

app_name = 'payments'

urlpatterns = [
    path('create-order/', views.CreatePaymentOrderView.as_view(), name='create-order'),
    path('verify-payment/', views.VerifyPaymentView.as_view(), name='verify-payment'),
    path('orders/<str:order_id>/', views.PaymentOrderDetailView.as_view(), name='payment-order-detail'),
    path('orders/<str:order_id>/cancel/', views.CancelPaymentOrderView.as_view(), name='cancel-payment-order'),
]
