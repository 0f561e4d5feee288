from django.db import models
from core.choices import Weekday


class Barber(models.Model):
    user = models.OneToOneField('accounts.User', on_delete=models.CASCADE, related_name='barber')
    bio = models.TextField(max_length=300, blank=True, null=True)
    is_active = models.BooleanField(default=True)

    def __str__(self):
        return self.user.name


class WorkingHour(models.Model):
    """One weekday of a barber's recurring schedule.

    The whole set is replaced when the barber saves the week, so rows are
    never edited one by one.
    """

    barber = models.ForeignKey('barbers.Barber', on_delete=models.CASCADE, related_name='working_hours')
    day_of_week = models.IntegerField(choices=Weekday.choices)
    start_time = models.TimeField()
    end_time = models.TimeField()
    break_start = models.TimeField(blank=True, null=True)
    break_end = models.TimeField(blank=True, null=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ['day_of_week']
        constraints = [
            models.UniqueConstraint(
                fields=['barber', 'day_of_week'],
                name='unique_barber_weekday'
            )
        ]

    def __str__(self):
        return f'{self.get_day_of_week_display()} {self.start_time:%H:%M}-{self.end_time:%H:%M}'
