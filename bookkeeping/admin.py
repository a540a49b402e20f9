from django.contrib import admin
from .models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ['transaction_date', 'transaction_type', 'category', 'amount', 'user', 'is_deleted']
    list_filter = ['transaction_type', 'category', 'is_deleted', 'transaction_date']
    search_fields = ['description', 'user__email']
    readonly_fields = ['id', 'created_at', 'updated_at']
