from django.contrib import admin
from .models import Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ['name', 'barber', 'duration', 'price', 'is_active']
    list_filter = ['is_active', 'barber']
    search_fields = ['name', 'barber__user__name']
