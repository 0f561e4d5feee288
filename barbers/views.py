from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework import viewsets, status, permissions
from .models import Barber
from .serializers import (
    AvailableDatesSerializer,
    BarberAvailabilitySerializer,
    BarberSerializer,
    WeeklyScheduleSerializer,
    WorkingHourSerializer,
)


class BarberViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Barber.objects.filter(is_active=True).select_related("user")
    serializer_class = BarberSerializer
    pagination_class = None
    lookup_value_regex = r"\d+"

    @action(detail=True, methods=["get"], url_path="available-dates")
    def available_dates(self, request, pk=None):
        barber = self.get_object()
        serializer = AvailableDatesSerializer(
            data=request.query_params,
            context={"barber_id": barber.pk}
        )
        serializer.is_valid(raise_exception=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["get"], url_path="availability")
    def availability(self, request, pk=None):
        barber = self.get_object()
        serializer = BarberAvailabilitySerializer(
            data=request.query_params,
            context={"barber_id": barber.pk}
        )
        serializer.is_valid(raise_exception=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @action(
        detail=False,
        methods=["get", "put"],
        url_path="me/schedule",
        permission_classes=[permissions.IsAuthenticated],
    )
    def my_schedule(self, request):
        barber = None
        if request.user.is_barber:
            barber = Barber.objects.filter(user=request.user).first()
        if barber is None:
            raise PermissionDenied("Apenas barbeiros podem gerenciar horários.")

        if request.method == "GET":
            schedules = barber.working_hours.order_by("day_of_week")
            return Response({"schedules": WorkingHourSerializer(schedules, many=True).data})

        serializer = WeeklyScheduleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        schedules = serializer.save(barber)
        return Response(
            {"schedules": WorkingHourSerializer(schedules, many=True).data},
            status=status.HTTP_200_OK,
        )
