"""Tests for the conflict-checked booking commit."""

import threading
from datetime import time
from unittest.mock import patch

import pytest
from django.db import OperationalError, connection
from rest_framework.exceptions import ValidationError

from appointments.models import Appointment
from core import booking
from core.booking import commit_booking, compute_end_time
from core.choices import AppointmentStatus
from core.exceptions import PersistenceError, SlotAlreadyTaken
from services.models import Service


def book(barber, client, service, day, start=time(10, 0), **kwargs):
    return commit_booking(
        barber_id=barber.pk,
        client_id=client.pk,
        service_id=service.pk,
        date=day,
        start_time=start,
        notify=kwargs.pop("notify", False),
        **kwargs,
    )


class TestComputeEndTime:
    def test_adds_duration(self):
        assert compute_end_time(time(9, 30), 45) == time(10, 15)

    def test_rejects_non_positive_duration(self):
        with pytest.raises(ValidationError):
            compute_end_time(time(9, 0), 0)

    def test_rejects_crossing_midnight(self):
        with pytest.raises(ValidationError):
            compute_end_time(time(23, 30), 30)


@pytest.mark.django_db
class TestCommitBooking:
    def test_creates_scheduled_appointment(self, barber, client_user, haircut, booking_date):
        appointment = book(barber, client_user, haircut, booking_date)

        assert appointment.pk is not None
        assert appointment.status == AppointmentStatus.SCHEDULED
        assert appointment.start_time == time(10, 0)
        assert appointment.end_time == time(10, 30)
        assert appointment.client == client_user

    def test_same_slot_rejected(self, barber, client_user, other_client, haircut, booking_date):
        book(barber, client_user, haircut, booking_date)

        with pytest.raises(SlotAlreadyTaken):
            book(barber, other_client, haircut, booking_date)

        assert Appointment.objects.filter(barber=barber, date=booking_date).count() == 1

    def test_overlapping_slot_rejected(self, barber, client_user, other_client, long_service, haircut, booking_date):
        book(barber, client_user, long_service, booking_date, start=time(10, 0))

        with pytest.raises(SlotAlreadyTaken):
            book(barber, other_client, haircut, booking_date, start=time(10, 30))

    def test_touching_slot_accepted(self, barber, client_user, other_client, haircut, booking_date):
        book(barber, client_user, haircut, booking_date, start=time(10, 0))

        appointment = book(barber, other_client, haircut, booking_date, start=time(10, 30))

        assert appointment.start_time == time(10, 30)

    def test_cancelled_slot_can_be_rebooked(self, barber, client_user, other_client, haircut, booking_date):
        first = book(barber, client_user, haircut, booking_date)
        first.cancel(reason="imprevisto")

        second = book(barber, other_client, haircut, booking_date)

        assert second.pk != first.pk
        assert Appointment.objects.filter(status=AppointmentStatus.SCHEDULED).count() == 1

    def test_same_client_may_hold_two_slots_same_day(self, barber, client_user, haircut, booking_date):
        book(barber, client_user, haircut, booking_date, start=time(10, 0))
        book(barber, client_user, haircut, booking_date, start=time(15, 0))

        assert client_user.appointments.count() == 2

    def test_missing_ids_rejected(self, barber, client_user, haircut, booking_date):
        with pytest.raises(ValidationError):
            commit_booking(
                barber_id=None,
                client_id=client_user.pk,
                service_id=haircut.pk,
                date=booking_date,
                start_time=time(10, 0),
            )

    def test_service_of_other_barber_rejected(self, barber, client_user, booking_date, django_user_model):
        from barbers.models import Barber

        other = Barber.objects.create(
            user=django_user_model.objects.create_user(phone="21999990099", name="Outro")
        )
        foreign = Service.objects.create(barber=other, name="Barba", duration=30, price=30)

        with pytest.raises(ValidationError):
            book(barber, client_user, foreign, booking_date)

    def test_inactive_service_rejected(self, barber, client_user, haircut, booking_date):
        haircut.is_active = False
        haircut.save()

        with pytest.raises(ValidationError):
            book(barber, client_user, haircut, booking_date)

    def test_database_failure_becomes_persistence_error(self, barber, client_user, haircut, booking_date):
        with patch.object(booking, "has_conflict", side_effect=OperationalError("disk I/O error")):
            with pytest.raises(PersistenceError):
                book(barber, client_user, haircut, booking_date)

    def test_notification_dispatched_after_commit(self, barber, client_user, haircut, booking_date, django_capture_on_commit_callbacks):
        with patch("core.booking.notify_new_appointment.delay") as delay:
            with django_capture_on_commit_callbacks(execute=True):
                appointment = book(barber, client_user, haircut, booking_date, notify=True)

        delay.assert_called_once_with(appointment.pk, str(client_user.pk))

    def test_notification_failure_keeps_booking(self, barber, client_user, haircut, booking_date, django_capture_on_commit_callbacks):
        with patch("core.booking.notify_new_appointment.delay", side_effect=ConnectionError("broker down")):
            with django_capture_on_commit_callbacks(execute=True):
                appointment = book(barber, client_user, haircut, booking_date, notify=True)

        assert Appointment.objects.filter(pk=appointment.pk, status=AppointmentStatus.SCHEDULED).exists()

    def test_rejected_commit_sends_no_notification(self, barber, client_user, other_client, haircut, booking_date, django_capture_on_commit_callbacks):
        book(barber, client_user, haircut, booking_date)

        with django_capture_on_commit_callbacks() as callbacks:
            with pytest.raises(SlotAlreadyTaken):
                book(barber, other_client, haircut, booking_date, notify=True)

        assert callbacks == []


@pytest.mark.django_db
class TestDoubleBookingRace:
    def test_constraint_rejects_commit_that_passed_stale_check(self, barber, client_user, other_client, haircut, booking_date):
        """Second commit read before the first wrote: the unique constraint must settle it."""
        book(barber, client_user, haircut, booking_date)

        with patch.object(booking, "has_conflict", return_value=False):
            with pytest.raises(SlotAlreadyTaken):
                book(barber, other_client, haircut, booking_date)

        assert Appointment.objects.filter(
            barber=barber, date=booking_date, start_time=time(10, 0), status=AppointmentStatus.SCHEDULED
        ).count() == 1


@pytest.mark.django_db(transaction=True)
class TestConcurrentCommits:
    def test_two_threads_same_slot_one_winner(self, barber, client_user, other_client, haircut, booking_date):
        barrier = threading.Barrier(2)
        outcomes = []
        lock = threading.Lock()

        def attempt(client):
            try:
                barrier.wait(timeout=5)
                book(barber, client, haircut, booking_date)
                result = "committed"
            except SlotAlreadyTaken:
                result = "taken"
            except PersistenceError:
                result = "persistence"
            finally:
                connection.close()
            with lock:
                outcomes.append(result)

        threads = [threading.Thread(target=attempt, args=(c,)) for c in (client_user, other_client)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert len(outcomes) == 2
        assert outcomes.count("committed") == 1
        assert Appointment.objects.filter(
            barber=barber, date=booking_date, status=AppointmentStatus.SCHEDULED
        ).count() == 1
