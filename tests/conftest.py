"""Shared fixtures for booking tests."""

from datetime import time, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from accounts.models import User
from barbers.models import Barber, WorkingHour
from core.choices import UserRole
from services.models import Service


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def client_user(db) -> User:
    return User.objects.create_user(phone="21999990001", name="Cliente Teste", password="senha-forte-123")


@pytest.fixture
def other_client(db) -> User:
    return User.objects.create_user(phone="21999990002", name="Outro Cliente", password="senha-forte-123")


@pytest.fixture
def barber_user(db) -> User:
    return User.objects.create_user(
        phone="21999990010", name="Barbeiro Teste", password="senha-forte-123", role=UserRole.BARBER
    )


@pytest.fixture
def barber(barber_user) -> Barber:
    return Barber.objects.create(user=barber_user)


@pytest.fixture
def haircut(barber) -> Service:
    """30-minute service owned by ``barber``."""
    return Service.objects.create(barber=barber, name="Corte", duration=30, price=Decimal("40.00"))


@pytest.fixture
def long_service(barber) -> Service:
    """60-minute service owned by ``barber``."""
    return Service.objects.create(barber=barber, name="Corte + Barba", duration=60, price=Decimal("70.00"))


@pytest.fixture
def full_week(barber) -> list[WorkingHour]:
    """09:00-18:00 every day with a 12:00-13:00 break."""
    return [
        WorkingHour.objects.create(
            barber=barber,
            day_of_week=day,
            start_time=time(9, 0),
            end_time=time(18, 0),
            break_start=time(12, 0),
            break_end=time(13, 0),
        )
        for day in range(7)
    ]


@pytest.fixture
def booking_date():
    """A date one week ahead, so no slot is excluded as past."""
    return timezone.localdate() + timedelta(days=7)
