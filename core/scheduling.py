"""Slot computation for a barber's recurring weekly schedule.

Everything here is pure: inputs are snapshots (schedule entries, existing
appointments, the current moment) and outputs are new lists. Times are
handled as minutes since midnight so comparisons are plain integer ones.

Entries and appointments are read by attribute, so the Django models
(`barbers.WorkingHour`, `appointments.Appointment`) can be passed in as-is
next to the lightweight `ScheduleEntry` / `ExistingAppointment` tuples.
"""

from datetime import date as date_type, time, timedelta
from typing import Iterable, NamedTuple, Optional

from rest_framework import serializers

from core.choices import AppointmentStatus

DEFAULT_HORIZON_DAYS = 30
DEFAULT_STEP_MINUTES = 30


class ScheduleEntry(NamedTuple):
    day_of_week: int
    start_time: time
    end_time: time
    break_start: Optional[time] = None
    break_end: Optional[time] = None
    is_active: bool = True


class ExistingAppointment(NamedTuple):
    date: date_type
    start_time: time
    end_time: time
    status: str = AppointmentStatus.SCHEDULED


class CandidateSlot(NamedTuple):
    start: int
    end: int

    @property
    def start_time(self) -> time:
        return minutes_to_time(self.start)

    @property
    def end_time(self) -> time:
        return minutes_to_time(self.end)

    @property
    def label(self) -> str:
        return self.start_time.strftime('%H:%M')


def to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def minutes_to_time(minutes: int) -> time:
    return time(minutes // 60, minutes % 60)


def day_of_week(value: date_type) -> int:
    """Sunday-based weekday (0 = Sunday ... 6 = Saturday)."""
    return (value.weekday() + 1) % 7


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    # half-open intervals: touching ends do not overlap
    return a_start < b_end and a_end > b_start


def validate_entry(entry) -> None:
    if entry.day_of_week not in range(7):
        raise serializers.ValidationError('Dia da semana inválido.')
    if entry.start_time >= entry.end_time:
        raise serializers.ValidationError('O horário de início deve ser antes do horário de término.')

    has_start = entry.break_start is not None
    has_end = entry.break_end is not None
    if has_start != has_end:
        raise serializers.ValidationError('Informe o início e o fim do intervalo.')
    if has_start and not (entry.start_time <= entry.break_start < entry.break_end <= entry.end_time):
        raise serializers.ValidationError('O intervalo deve estar dentro do expediente.')


class AvailabilityModel:
    """One barber's validated weekly availability.

    Inactive entries are dropped. Two active entries for the same weekday are
    rejected rather than merged, so `entry_for` is always unambiguous.
    """

    def __init__(self, entries: Iterable):
        self._entries = {}
        for entry in entries:
            if not entry.is_active:
                continue
            validate_entry(entry)
            if entry.day_of_week in self._entries:
                raise serializers.ValidationError('Há mais de um horário ativo para o mesmo dia da semana.')
            self._entries[entry.day_of_week] = entry

    @property
    def days(self) -> list[int]:
        return sorted(self._entries)

    def entry_for(self, weekday: int):
        return self._entries.get(weekday)

    def entry_for_date(self, value: date_type):
        return self.entry_for(day_of_week(value))


def bookable_dates(today: date_type, availability: AvailabilityModel, horizon_days: int = DEFAULT_HORIZON_DAYS) -> list[date_type]:
    if horizon_days <= 0:
        raise serializers.ValidationError('O horizonte de datas deve ser positivo.')

    dates = []
    for offset in range(horizon_days):
        current = today + timedelta(days=offset)
        if availability.entry_for_date(current) is not None:
            dates.append(current)
    return dates


def generate_slots(target_date: date_type, entry, duration_minutes: int, now, step_minutes: int = DEFAULT_STEP_MINUTES) -> list[CandidateSlot]:
    """Candidate start times for `target_date`, before conflict filtering.

    Slots start at `entry.start_time` and advance by `step_minutes` no matter
    how long the service is. On the current day only slots starting strictly
    after `now` are kept.
    """
    if duration_minutes is None or duration_minutes <= 0:
        raise serializers.ValidationError('A duração do serviço deve ser positiva.')
    if step_minutes <= 0:
        raise serializers.ValidationError('O intervalo entre horários deve ser positivo.')
    if entry is None:
        return []

    day_start = to_minutes(entry.start_time)
    day_end = to_minutes(entry.end_time)

    has_break = entry.break_start is not None and entry.break_end is not None
    if has_break:
        break_start = to_minutes(entry.break_start)
        break_end = to_minutes(entry.break_end)

    is_today = target_date == now.date()
    now_seconds = now.hour * 3600 + now.minute * 60 + now.second + now.microsecond / 1_000_000

    slots = []
    start = day_start
    while start + duration_minutes <= day_end:
        end = start + duration_minutes
        in_past = is_today and start * 60 <= now_seconds
        in_break = has_break and overlaps(start, end, break_start, break_end)
        if not in_past and not in_break:
            slots.append(CandidateSlot(start, end))
        start += step_minutes

    return slots


def filter_conflicts(slots: Iterable[CandidateSlot], appointments: Iterable, target_date: Optional[date_type] = None) -> list[CandidateSlot]:
    busy = [
        (to_minutes(appt.start_time), to_minutes(appt.end_time))
        for appt in appointments
        if appt.status == AppointmentStatus.SCHEDULED
        and (target_date is None or appt.date == target_date)
    ]

    return [
        slot for slot in slots
        if not any(overlaps(slot.start, slot.end, b_start, b_end) for b_start, b_end in busy)
    ]


def available_slots(target_date: date_type, availability: AvailabilityModel, duration_minutes: int, appointments: Iterable, now, step_minutes: int = DEFAULT_STEP_MINUTES) -> list[CandidateSlot]:
    entry = availability.entry_for_date(target_date)
    candidates = generate_slots(target_date, entry, duration_minutes, now, step_minutes)
    return filter_conflicts(candidates, appointments, target_date)
