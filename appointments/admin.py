from django.contrib import admin
from core.choices import AppointmentStatus, UserRole
from .models import Appointment


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'date', 'start_time', 'end_time', 'barber_name', 'client_name', 'service', 'status', 'canceled_by')
    list_filter = ('status', 'canceled_by', 'date', 'barber')
    list_select_related = ('barber__user', 'client', 'service')
    search_fields = ('client__name', 'client__phone', 'barber__user__name')
    date_hierarchy = 'date'
    ordering = ('-date', 'start_time')
    readonly_fields = ('created_at', 'canceled_at', 'canceled_by')
    actions = ['cancel_scheduled']

    fieldsets = (
        ('Horário', {'fields': ('barber', 'service', 'date', 'start_time', 'end_time')}),
        ('Cliente', {'fields': ('client', 'status', 'created_at')}),
        ('Cancelamento', {'fields': ('cancel_reason', 'canceled_at', 'canceled_by')}),
    )

    @admin.display(description='Cliente', ordering='client__name')
    def client_name(self, obj):
        return obj.client.name

    @admin.display(description='Barbeiro', ordering='barber__user__name')
    def barber_name(self, obj):
        return obj.barber.user.name

    @admin.action(description='Cancelar agendamentos selecionados')
    def cancel_scheduled(self, request, queryset):
        # only scheduled bookings hold a slot; the rest are left untouched
        scheduled = queryset.filter(status=AppointmentStatus.SCHEDULED)
        count = 0
        for appointment in scheduled:
            appointment.cancel(reason='Cancelado pela administração.', canceled_by=UserRole.ADMIN)
            count += 1
        self.message_user(request, f'{count} agendamento(s) cancelado(s).')
