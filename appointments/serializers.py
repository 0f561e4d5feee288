from rest_framework import serializers

from core.booking import commit_booking
from core.choices import AppointmentStatus, UserRole
from core.exceptions import SlotAlreadyTaken
from core.utils import check_booking_date, get_available_slots, get_schedule_slots
from services.models import Service
from .models import Appointment


class AppointmentSerializer(serializers.ModelSerializer):
    barber = serializers.SerializerMethodField()
    client = serializers.SerializerMethodField()
    service = serializers.SerializerMethodField()
    canceled_by = serializers.SerializerMethodField()

    class Meta:
        model = Appointment
        fields = ['id', 'status', 'date', 'start_time', 'end_time', 'barber', 'client', 'service', 'cancel_reason', 'canceled_at', 'canceled_by']

    def get_barber(self, obj):
        return {
            'id': obj.barber.id,
            'name': obj.barber.user.name,
            'phone': obj.barber.user.phone,
        }

    def get_client(self, obj):
        return {
            'id': str(obj.client.id),
            'name': obj.client.name,
            'phone': obj.client.phone,
        }

    def get_service(self, obj):
        return {
            'id': obj.service.id,
            'name': obj.service.name,
            'price': float(obj.service.price),
            'duration_min': obj.service.duration
        }

    def get_canceled_by(self, obj):
        mapping = {
            UserRole.CLIENT: 'Cliente',
            UserRole.BARBER: 'Barbeiro',
            UserRole.ADMIN: 'Administrador'
        }
        return mapping.get(obj.canceled_by, obj.canceled_by or '—')


class AppointmentFilterSerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
    barber_id = serializers.IntegerField(required=False)
    status = serializers.ChoiceField(choices=AppointmentStatus.choices, required=False)


class AppointmentCreateSerializer(serializers.Serializer):
    service_id = serializers.IntegerField()
    barber_id = serializers.IntegerField()
    date = serializers.DateField()
    start_time = serializers.TimeField()

    refreshed_slots = None

    def _validate_service(self, attrs):
        service = Service.objects.filter(
            id=attrs['service_id'], barber_id=attrs['barber_id'], is_active=True
        ).first()
        if service is None:
            raise serializers.ValidationError('Serviço inválido ou indisponível.')
        attrs['service'] = service
        return attrs

    def _validate_date(self, attrs):
        check_booking_date(attrs['date'])
        return attrs

    def _validate_slot(self, attrs):
        barber_id = attrs['barber_id']
        date = attrs['date']
        service = attrs['service']
        label = attrs['start_time'].strftime('%H:%M')

        slots = get_available_slots(barber_id, date, service)
        if label in slots:
            return attrs

        if label in get_schedule_slots(barber_id, date, service):
            self.refreshed_slots = slots
            raise SlotAlreadyTaken()
        raise serializers.ValidationError('Horário inválido ou indisponível.')

    def validate(self, attrs):
        attrs = self._validate_service(attrs)
        attrs = self._validate_date(attrs)
        attrs = self._validate_slot(attrs)
        return attrs

    def create(self, validated_data):
        request = self.context.get('request')

        try:
            appointment = commit_booking(
                barber_id=validated_data['barber_id'],
                client_id=request.user.pk,
                service_id=validated_data['service_id'],
                date=validated_data['date'],
                start_time=validated_data['start_time'],
                duration_minutes=validated_data['service'].duration,
            )
        except SlotAlreadyTaken:
            self.refreshed_slots = get_available_slots(
                validated_data['barber_id'], validated_data['date'], validated_data['service']
            )
            raise

        return {
            'appointment_id': appointment.id,
            'date': appointment.date.strftime('%Y-%m-%d'),
            'start_time': appointment.start_time.strftime('%H:%M'),
            'end_time': appointment.end_time.strftime('%H:%M'),
            'status': appointment.status,
        }


class AppointmentStatusSerializer(serializers.Serializer):
    def _get_appointment(self):
        pk = self.context.get('pk')
        try:
            return Appointment.objects.select_related('barber__user', 'client').get(pk=pk)
        except Appointment.DoesNotExist:
            raise serializers.ValidationError({'message': 'Agendamento não encontrado.'})

    def _check_scheduled(self, appointment):
        if appointment.status != AppointmentStatus.SCHEDULED:
            raise serializers.ValidationError({'message': 'Agendamento já está cancelado ou finalizado.'})


class AppointmentCancelSerializer(AppointmentStatusSerializer):
    reason = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        request = self.context.get('request')
        user = request.user
        appointment = self._get_appointment()

        is_owner = appointment.client_id == user.pk
        is_barber = appointment.barber.user_id == user.pk
        if not (is_owner or is_barber or user.is_shop_admin):
            raise serializers.ValidationError({'message': 'Você não tem permissão para cancelar este agendamento.'})

        self._check_scheduled(appointment)

        attrs['appointment'] = appointment
        attrs['reason'] = attrs.get('reason', '')
        return attrs

    def save(self):
        request = self.context.get('request')
        appointment = self.validated_data['appointment']
        reason = self.validated_data['reason']

        canceled_by = UserRole.CLIENT
        if request.user.role in [UserRole.BARBER, UserRole.ADMIN]:
            canceled_by = request.user.role

        appointment.cancel(reason=reason, canceled_by=canceled_by)
        return {
            'appointment_id': appointment.id,
            'canceled_by': canceled_by,
            'reason': reason
        }


class AppointmentCompleteSerializer(AppointmentStatusSerializer):
    def validate(self, attrs):
        user = self.context.get('request').user
        appointment = self._get_appointment()

        if appointment.barber.user_id != user.pk and not user.is_shop_admin:
            raise serializers.ValidationError({'message': 'Apenas o barbeiro do atendimento pode concluí-lo.'})

        self._check_scheduled(appointment)

        attrs['appointment'] = appointment
        return attrs

    def save(self):
        appointment = self.validated_data['appointment']
        appointment.complete()
        return {'appointment_id': appointment.id, 'status': appointment.status}
