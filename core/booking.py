"""Conflict-checked creation of appointments.

The slot list a client picked from may be stale by the time they confirm,
so the committer re-checks inside a transaction and relies on the
``unique_scheduled_slot`` constraint to settle the race between two
commits that both pass the check.
"""

import logging
from functools import partial

from django.db import DatabaseError, IntegrityError, transaction
from rest_framework import serializers

from accounts.models import User
from appointments.models import Appointment
from appointments.tasks import notify_new_appointment
from barbers.models import Barber
from core.choices import AppointmentStatus
from core.exceptions import PersistenceError, SlotAlreadyTaken
from core.scheduling import minutes_to_time, to_minutes
from services.models import Service

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


def compute_end_time(start_time, duration_minutes):
    if duration_minutes is None or duration_minutes <= 0:
        raise serializers.ValidationError('A duração do serviço deve ser positiva.')

    end = to_minutes(start_time) + duration_minutes
    if end >= MINUTES_PER_DAY:
        raise serializers.ValidationError('O atendimento precisa terminar no mesmo dia.')
    return minutes_to_time(end)


def has_conflict(barber_id, date, start_time, end_time):
    return Appointment.objects.filter(
        barber_id=barber_id,
        date=date,
        status=AppointmentStatus.SCHEDULED,
        start_time__lt=end_time,
        end_time__gt=start_time,
    ).exists()


def dispatch_new_appointment(appointment_id, client_id):
    try:
        notify_new_appointment.delay(appointment_id, str(client_id))
    except Exception:
        # the booking is already durable; a lost notification must not surface
        logger.exception('Falha ao despachar notificação do agendamento %s', appointment_id)


def _load_participants(barber_id, client_id, service_id):
    barber = Barber.objects.select_for_update().filter(pk=barber_id, is_active=True).first()
    if barber is None:
        raise serializers.ValidationError('Barbeiro(a) inválido ou indisponível.')

    service = Service.objects.filter(pk=service_id, is_active=True).first()
    if service is None or service.barber_id != barber.pk:
        raise serializers.ValidationError('Serviço inválido ou indisponível.')

    client = User.objects.filter(pk=client_id, is_active=True).first()
    if client is None:
        raise serializers.ValidationError('Cliente não encontrado.')

    return barber, client, service


def commit_booking(*, barber_id, client_id, service_id, date, start_time, duration_minutes=None, notify=True):
    """Reserve ``start_time`` on ``date`` for the client and return the appointment.

    Raises ``SlotAlreadyTaken`` when a scheduled appointment already overlaps
    the requested interval, ``PersistenceError`` when the database fails, and
    ``ValidationError`` for missing or unknown ids. Nothing is retried here.
    """
    if not all([barber_id, client_id, service_id, date, start_time]):
        raise serializers.ValidationError('Dados do agendamento incompletos.')

    try:
        with transaction.atomic():
            # row lock on the barber serializes concurrent commits where supported
            barber, client, service = _load_participants(barber_id, client_id, service_id)

            duration = service.duration if duration_minutes is None else duration_minutes
            end_time = compute_end_time(start_time, duration)

            if has_conflict(barber.pk, date, start_time, end_time):
                logger.info('Horário %s %s já ocupado para o barbeiro %s', date, start_time, barber.pk)
                raise SlotAlreadyTaken()

            appointment = Appointment.objects.create(
                client=client,
                barber=barber,
                service=service,
                date=date,
                start_time=start_time,
                end_time=end_time,
                status=AppointmentStatus.SCHEDULED,
            )
    except IntegrityError:
        logger.info('Reserva concorrente rejeitada para o barbeiro %s em %s %s', barber_id, date, start_time)
        raise SlotAlreadyTaken()
    except DatabaseError as exc:
        logger.exception('Erro de banco ao reservar horário para o barbeiro %s', barber_id)
        raise PersistenceError() from exc

    logger.info('Agendamento %s criado (%s %s-%s)', appointment.pk, date, start_time, end_time)

    if notify:
        transaction.on_commit(partial(dispatch_new_appointment, appointment.pk, client.pk))

    return appointment
