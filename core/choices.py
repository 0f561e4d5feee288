from django.db import models


class UserRole(models.TextChoices):
    ADMIN = "admin", "Dono(a)"
    CLIENT = "client", "Cliente"
    BARBER = "barber", "Barbeiro(a)"


class AppointmentStatus(models.TextChoices):
    SCHEDULED = 'scheduled', 'Agendado'
    COMPLETED = 'completed', 'Concluído'
    CANCELLED = 'cancelled', 'Cancelado'


class Weekday(models.IntegerChoices):
    SUNDAY = 0, 'Dom'
    MONDAY = 1, 'Seg'
    TUESDAY = 2, 'Ter'
    WEDNESDAY = 3, 'Qua'
    THURSDAY = 4, 'Qui'
    FRIDAY = 5, 'Sex'
    SATURDAY = 6, 'Sab'
