from django.contrib import admin
from .models import Barber, WorkingHour


class WorkingHourInline(admin.TabularInline):
    model = WorkingHour
    extra = 0
    fields = ("day_of_week", "start_time", "end_time", "break_start", "break_end", "is_active")
    ordering = ("day_of_week",)


@admin.register(Barber)
class BarberAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "is_active", "services_count")
    list_filter = ("is_active",)
    search_fields = ("user__name", "user__phone", "user__email")
    inlines = [WorkingHourInline]

    def services_count(self, obj):
        return obj.services.count()
    services_count.short_description = "Serviços"
