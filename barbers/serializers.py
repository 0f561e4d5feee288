from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework import serializers

from core.scheduling import AvailabilityModel, ScheduleEntry
from core.utils import check_booking_date, get_available_slots, get_bookable_dates
from services.models import Service
from services.serializers import ServiceSerializer
from .models import Barber, WorkingHour


class BarberSerializer(serializers.ModelSerializer):
    services = serializers.SerializerMethodField()
    name = serializers.CharField(source="user.name", read_only=True)
    phone = serializers.CharField(source="user.phone", read_only=True)

    class Meta:
        model = Barber
        fields = ["id", "name", "phone", "bio", "services"]

    def get_services(self, obj):
        services = obj.services.filter(is_active=True).order_by("name")
        return ServiceSerializer(services, many=True).data


class WorkingHourSerializer(serializers.ModelSerializer):
    class Meta:
        model = WorkingHour
        fields = ["day_of_week", "start_time", "end_time", "break_start", "break_end", "is_active"]


class WeeklyScheduleSerializer(serializers.Serializer):
    schedules = WorkingHourSerializer(many=True)

    def validate_schedules(self, value):
        entries = [ScheduleEntry(**item) for item in value]
        AvailabilityModel(entries)
        return value

    def save(self, barber):
        active = [item for item in self.validated_data["schedules"] if item.get("is_active", True)]

        with transaction.atomic():
            barber.working_hours.all().delete()
            WorkingHour.objects.bulk_create(
                WorkingHour(barber=barber, **item) for item in active
            )

        return list(barber.working_hours.order_by("day_of_week"))


class AvailableDatesSerializer(serializers.Serializer):
    days = serializers.IntegerField(required=False, min_value=1, max_value=90)

    def validate(self, attrs):
        barber_id = self.context.get("barber_id")
        if not barber_id:
            raise serializers.ValidationError({"barber_id": "Barbeiro não informado no contexto."})

        attrs["days"] = attrs.get("days") or settings.BOOKING_HORIZON_DAYS
        attrs["dates"] = get_bookable_dates(barber_id, timezone.localdate(), attrs["days"])
        return attrs

    def to_representation(self, instance):
        data = self.validated_data
        return {
            "barber_id": self.context.get("barber_id"),
            "days": data["days"],
            "available_dates": [d.strftime("%Y-%m-%d") for d in data["dates"]],
        }


class BarberAvailabilitySerializer(serializers.Serializer):
    date = serializers.DateField(required=True)
    service_id = serializers.IntegerField(required=True)

    def validate_date(self, value):
        return check_booking_date(value)

    def validate(self, attrs):
        barber_id = self.context.get("barber_id")
        if not barber_id:
            raise serializers.ValidationError({"barber_id": "Barbeiro não informado no contexto."})

        date = attrs["date"]
        service_id = attrs["service_id"]

        service = Service.objects.filter(id=service_id, barber_id=barber_id, is_active=True).first()
        if service is None:
            raise serializers.ValidationError({"service_id": "Serviço inválido."})

        slots = get_available_slots(barber_id, date, service)

        attrs.update({
            "service": service,
            "available_slots": slots,
        })
        if not slots:
            attrs["message"] = "Nenhum horário disponível para este dia."

        return attrs

    def to_representation(self, instance):
        barber_id = self.context.get("barber_id")
        data = self.validated_data
        return {
            "barber_id": barber_id,
            "date": data["date"].strftime("%Y-%m-%d"),
            "service_id": data["service_id"],
            "service_duration": int(data["service"].duration),
            "available_slots": data.get("available_slots", []),
            **({"message": data["message"]} if "message" in data else {})
        }
