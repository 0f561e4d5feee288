import logging

from celery import shared_task

from .models import Appointment

logger = logging.getLogger(__name__)


@shared_task(ignore_result=True)
def notify_new_appointment(appointment_id, client_id):
    appointment = (
        Appointment.objects.select_related('barber__user', 'client', 'service')
        .filter(pk=appointment_id, client_id=client_id)
        .first()
    )
    if appointment is None:
        logger.warning('Agendamento %s não encontrado para notificação.', appointment_id)
        return None

    title = 'Novo agendamento'
    body = (
        f"{appointment.client.name} agendou {appointment.service.name} "
        f"em {appointment.date:%d/%m} às {appointment.start_time:%H:%M}"
    )
    logger.info('Notificando %s: %s - %s', appointment.barber.user.phone, title, body)
    return {'title': title, 'body': body, 'appointment_id': appointment.pk}
