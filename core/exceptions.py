from rest_framework import status
from rest_framework.exceptions import APIException


class SlotAlreadyTaken(APIException):
    """The chosen slot was booked by someone else after it was offered.

    Expected in normal operation: the caller must refresh the slot list and
    ask for a new choice, never retry the same slot blindly.
    """

    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Esse horário acabou de ser reservado. Escolha outro horário.'
    default_code = 'slot_taken'


class PersistenceError(APIException):
    """Storage failed while reading or writing appointments.

    Retryable at the caller's discretion. A timeout here is ambiguous: the
    caller has to re-read its appointments before trying again.
    """

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Não foi possível concluir o agendamento. Tente novamente.'
    default_code = 'persistence_error'
