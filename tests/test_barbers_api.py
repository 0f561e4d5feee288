"""Tests for barber listing, bookable dates, slot lookup and schedule management."""

from datetime import time, timedelta

import pytest
from django.utils import timezone

from barbers.models import Barber, WorkingHour
from core.booking import commit_booking

SCHEDULE_URL = "/api/barbers/me/schedule/"


def availability_url(barber):
    return f"/api/barbers/{barber.pk}/availability/"


def dates_url(barber):
    return f"/api/barbers/{barber.pk}/available-dates/"


@pytest.mark.django_db
class TestBarberList:
    def test_lists_active_barbers_with_services(self, api_client, barber, haircut):
        response = api_client.get("/api/barbers/")

        assert response.status_code == 200
        assert response.data[0]["name"] == "Barbeiro Teste"
        assert response.data[0]["services"][0]["duration_min"] == 30

    def test_inactive_barber_hidden(self, api_client, barber):
        barber.is_active = False
        barber.save()

        response = api_client.get("/api/barbers/")

        assert response.data == []


@pytest.mark.django_db
class TestAvailableDates:
    def test_full_week_gives_whole_horizon(self, api_client, barber, full_week):
        response = api_client.get(dates_url(barber))

        assert response.status_code == 200
        dates = response.data["available_dates"]
        assert len(dates) == 30
        assert dates[0] == timezone.localdate().strftime("%Y-%m-%d")

    def test_only_configured_weekdays(self, api_client, barber, full_week):
        WorkingHour.objects.filter(barber=barber).exclude(day_of_week=1).delete()

        response = api_client.get(dates_url(barber), {"days": 14})

        assert response.data["days"] == 14
        assert len(response.data["available_dates"]) == 2

    def test_no_schedule_no_dates(self, api_client, barber):
        response = api_client.get(dates_url(barber))

        assert response.data["available_dates"] == []

    def test_unknown_barber_404(self, api_client, db):
        response = api_client.get("/api/barbers/9999/available-dates/")

        assert response.status_code == 404


@pytest.mark.django_db
class TestAvailability:
    def test_slots_skip_break(self, api_client, barber, full_week, haircut, booking_date):
        response = api_client.get(availability_url(barber), {"date": booking_date, "service_id": haircut.pk})

        assert response.status_code == 200
        slots = response.data["available_slots"]
        assert slots[0] == "09:00"
        assert "11:30" in slots
        assert "12:00" not in slots
        assert "12:30" not in slots
        assert "13:00" in slots
        assert len(slots) == 16
        assert response.data["service_duration"] == 30

    def test_booked_slot_removed(self, api_client, barber, full_week, haircut, client_user, booking_date):
        commit_booking(
            barber_id=barber.pk,
            client_id=client_user.pk,
            service_id=haircut.pk,
            date=booking_date,
            start_time=time(10, 0),
            notify=False,
        )

        response = api_client.get(availability_url(barber), {"date": booking_date, "service_id": haircut.pk})

        assert "10:00" not in response.data["available_slots"]
        assert "09:30" in response.data["available_slots"]
        assert "10:30" in response.data["available_slots"]

    def test_day_off_returns_message(self, api_client, barber, haircut, booking_date):
        response = api_client.get(availability_url(barber), {"date": booking_date, "service_id": haircut.pk})

        assert response.status_code == 200
        assert response.data["available_slots"] == []
        assert "message" in response.data

    def test_past_date_rejected(self, api_client, barber, full_week, haircut):
        yesterday = timezone.localdate() - timedelta(days=1)

        response = api_client.get(availability_url(barber), {"date": yesterday, "service_id": haircut.pk})

        assert response.status_code == 400

    def test_date_past_horizon_rejected(self, api_client, barber, full_week, haircut, settings):
        too_far = timezone.localdate() + timedelta(days=settings.BOOKING_HORIZON_DAYS)

        response = api_client.get(availability_url(barber), {"date": too_far, "service_id": haircut.pk})

        assert response.status_code == 400
        assert "date" in response.data

    def test_horizon_follows_setting(self, api_client, barber, full_week, haircut, settings):
        settings.BOOKING_HORIZON_DAYS = 60
        far = timezone.localdate() + timedelta(days=45)

        response = api_client.get(availability_url(barber), {"date": far, "service_id": haircut.pk})

        assert response.status_code == 200
        assert response.data["available_slots"][0] == "09:00"

    def test_service_of_other_barber_rejected(self, api_client, barber, full_week, booking_date, django_user_model):
        from services.models import Service

        other = Barber.objects.create(user=django_user_model.objects.create_user(phone="21999990077", name="Outro"))
        foreign = Service.objects.create(barber=other, name="Barba", duration=30, price=30)

        response = api_client.get(availability_url(barber), {"date": booking_date, "service_id": foreign.pk})

        assert response.status_code == 400


@pytest.mark.django_db
class TestWeeklySchedule:
    payload = {
        "schedules": [
            {"day_of_week": 1, "start_time": "09:00", "end_time": "18:00", "break_start": "12:00", "break_end": "13:00", "is_active": True},
            {"day_of_week": 3, "start_time": "10:00", "end_time": "16:00", "is_active": True},
            {"day_of_week": 5, "start_time": "10:00", "end_time": "16:00", "is_active": False},
        ]
    }

    def test_get_returns_current_schedule(self, api_client, barber, barber_user, full_week):
        api_client.force_authenticate(barber_user)

        response = api_client.get(SCHEDULE_URL)

        assert response.status_code == 200
        assert len(response.data["schedules"]) == 7

    def test_put_replaces_with_active_subset(self, api_client, barber, barber_user, full_week):
        api_client.force_authenticate(barber_user)

        response = api_client.put(SCHEDULE_URL, self.payload, format="json")

        assert response.status_code == 200
        days = list(barber.working_hours.values_list("day_of_week", flat=True))
        assert days == [1, 3]
        monday = barber.working_hours.get(day_of_week=1)
        assert monday.break_start == time(12, 0)

    def test_break_outside_work_rejected_and_schedule_kept(self, api_client, barber, barber_user, full_week):
        api_client.force_authenticate(barber_user)
        payload = {"schedules": [
            {"day_of_week": 1, "start_time": "09:00", "end_time": "18:00", "break_start": "08:00", "break_end": "09:30"},
        ]}

        response = api_client.put(SCHEDULE_URL, payload, format="json")

        assert response.status_code == 400
        assert barber.working_hours.count() == 7

    def test_duplicate_weekday_rejected(self, api_client, barber, barber_user):
        api_client.force_authenticate(barber_user)
        payload = {"schedules": [
            {"day_of_week": 2, "start_time": "09:00", "end_time": "12:00"},
            {"day_of_week": 2, "start_time": "13:00", "end_time": "18:00"},
        ]}

        response = api_client.put(SCHEDULE_URL, payload, format="json")

        assert response.status_code == 400
        assert barber.working_hours.count() == 0

    def test_client_cannot_manage_schedule(self, api_client, client_user):
        api_client.force_authenticate(client_user)

        response = api_client.put(SCHEDULE_URL, self.payload, format="json")

        assert response.status_code == 403

    def test_barber_profile_without_barber_role_forbidden(self, api_client, client_user):
        Barber.objects.create(user=client_user)
        api_client.force_authenticate(client_user)

        response = api_client.get(SCHEDULE_URL)

        assert response.status_code == 403

    def test_anonymous_cannot_manage_schedule(self, api_client, db):
        response = api_client.get(SCHEDULE_URL)

        assert response.status_code == 401
