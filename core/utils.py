import logging
from datetime import timedelta

from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone
from rest_framework import serializers

from appointments.models import Appointment
from barbers.models import WorkingHour
from core.choices import AppointmentStatus
from core.exceptions import PersistenceError
from core.scheduling import AvailabilityModel, available_slots, bookable_dates, generate_slots

logger = logging.getLogger(__name__)


def get_availability(barber_id):
    try:
        entries = list(WorkingHour.objects.filter(barber_id=barber_id, is_active=True))
    except DatabaseError as exc:
        logger.exception('Erro ao carregar expediente do barbeiro %s', barber_id)
        raise PersistenceError() from exc
    return AvailabilityModel(entries)


def get_scheduled_appointments(barber_id, start_date, end_date):
    try:
        return list(Appointment.objects.filter(
            barber_id=barber_id,
            status=AppointmentStatus.SCHEDULED,
            date__gte=start_date,
            date__lte=end_date,
        ).only('date', 'start_time', 'end_time', 'status'))
    except DatabaseError as exc:
        logger.exception('Erro ao carregar agendamentos do barbeiro %s', barber_id)
        raise PersistenceError() from exc


def check_booking_date(date, today=None):
    """Reject dates before today or past the last bookable day."""
    today = today or timezone.localdate()
    if date < today:
        raise serializers.ValidationError('Data no passado não é permitida.')
    if date >= today + timedelta(days=settings.BOOKING_HORIZON_DAYS):
        raise serializers.ValidationError(
            f'Agendamentos só podem ser feitos com até {settings.BOOKING_HORIZON_DAYS} dias de antecedência.'
        )
    return date


def get_bookable_dates(barber_id, today=None, horizon_days=None):
    today = today or timezone.localdate()
    if horizon_days is None:
        horizon_days = settings.BOOKING_HORIZON_DAYS
    return bookable_dates(today, get_availability(barber_id), horizon_days)


def get_schedule_slots(barber_id, date, service, now=None):
    """Slots the schedule offers on ``date`` ignoring existing bookings."""
    now = now or timezone.localtime()
    entry = get_availability(barber_id).entry_for_date(date)
    slots = generate_slots(date, entry, int(service.duration), now, settings.BOOKING_SLOT_STEP_MINUTES)
    return [slot.label for slot in slots]


def get_available_slots(barber_id, date, service, now=None):
    now = now or timezone.localtime()
    availability = get_availability(barber_id)
    busy = get_scheduled_appointments(barber_id, date, date)

    slots = available_slots(
        date,
        availability,
        int(service.duration),
        busy,
        now,
        settings.BOOKING_SLOT_STEP_MINUTES,
    )
    return [slot.label for slot in slots]
