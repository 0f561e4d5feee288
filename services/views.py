from rest_framework import viewsets
from .models import Service
from .serializers import ServiceSerializer


class ServiceViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = ServiceSerializer
    pagination_class = None

    def get_queryset(self):
        qs = Service.objects.filter(is_active=True, barber__is_active=True)

        barber_id = self.request.query_params.get("barber_id")
        if barber_id:
            qs = qs.filter(barber_id=barber_id)

        return qs.order_by("name")
