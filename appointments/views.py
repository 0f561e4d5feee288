import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status, permissions, generics
from core.choices import UserRole
from core.exceptions import SlotAlreadyTaken
from .models import Appointment
from .serializers import (
    AppointmentCancelSerializer,
    AppointmentCompleteSerializer,
    AppointmentCreateSerializer,
    AppointmentFilterSerializer,
    AppointmentSerializer,
)

logger = logging.getLogger(__name__)


class AppointmentCreateView(APIView):
    """Book a slot for the authenticated user.

    A 409 answer carries the refreshed slot list for the same day so the
    client can pick again. A request that times out may or may not have
    been committed; clients should re-read ``appointments/me/`` before
    retrying.
    """

    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        serializer = AppointmentCreateSerializer(data=request.data, context={"request": request})
        try:
            serializer.is_valid(raise_exception=True)
            data = serializer.save()
        except SlotAlreadyTaken as exc:
            logger.info("Horário indisponível para %s: %s", request.user.pk, request.data)
            return Response(
                {
                    "code": exc.default_code,
                    "message": str(exc.detail),
                    "available_slots": serializer.refreshed_slots or [],
                },
                status=exc.status_code,
            )
        return Response(data, status=status.HTTP_201_CREATED)


class AppointmentCancelView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, pk):
        serializer = AppointmentCancelSerializer(
            data=request.data,
            context={"request": request, "pk": pk}
        )
        if serializer.is_valid():
            data = serializer.save()
            return Response({"status": "ok", "message": "Agendamento cancelado com sucesso.", "data": data}, status=status.HTTP_200_OK)
        return Response({"status": "error", "message": "Não foi possível cancelar o agendamento.", "data": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)


class AppointmentCompleteView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, pk):
        serializer = AppointmentCompleteSerializer(
            data=request.data,
            context={"request": request, "pk": pk}
        )
        if serializer.is_valid():
            data = serializer.save()
            return Response({"status": "ok", "message": "Atendimento concluído.", "data": data}, status=status.HTTP_200_OK)
        return Response({"status": "error", "message": "Não foi possível concluir o atendimento.", "data": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)


class AppointmentsListView(generics.ListAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = AppointmentSerializer
    pagination_class = None

    def get_queryset(self):
        user = self.request.user
        qs = Appointment.objects.select_related("barber__user", "client", "service")

        if user.role == UserRole.CLIENT:
            return qs.filter(client=user).order_by("-date", "-start_time")

        if user.role == UserRole.BARBER:
            qs = qs.filter(barber__user=user)

        filters = AppointmentFilterSerializer(data=self.request.query_params)
        filters.is_valid(raise_exception=True)

        params = filters.validated_data
        if "date" in params:
            qs = qs.filter(date=params["date"])
        if "barber_id" in params:
            qs = qs.filter(barber_id=params["barber_id"])
        if "status" in params:
            qs = qs.filter(status=params["status"])

        return qs.order_by("-date", "-start_time")
