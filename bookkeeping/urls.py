from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import TransactionViewSet, SummaryViewSet, TaxViewSet
from .apis import DashboardView, TransactionPDFExportView

router = DefaultRouter()
router.register(r'transactions', TransactionViewSet, basename='transaction')
router.register(r'summary', SummaryViewSet, basename='summary')
router.register(r'tax', TaxViewSet, basename='tax')

urlpatterns = [
    path('', include(router.urls)),
    path('dashboard/', DashboardView.as_view(), name='dashboard'),
    path('reports/transactions/pdf/', TransactionPDFExportView.as_view(), name='transactions_pdf'),
]
