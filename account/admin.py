from django.contrib import admin
from account.models import User, Profile


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ['email', 'first_name', 'last_name', 'is_staff', 'date_joined']
    search_fields = ['email', 'first_name', 'last_name']
    readonly_fields = ['id', 'date_joined', 'last_login']


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['full_name', 'business_name', 'user_type', 'user', 'created_at']
    list_filter = ['user_type']
    search_fields = ['full_name', 'business_name', 'user__email']
    readonly_fields = ['created_at', 'updated_at']
