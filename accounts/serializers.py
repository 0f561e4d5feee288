from rest_framework import serializers
from .models import User


class MeSerializer(serializers.ModelSerializer):
    barber_id = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ("id", "name", "phone", "email", "role", "barber_id")

    def get_barber_id(self, obj):
        barber = getattr(obj, "barber", None)
        return barber.id if barber else None
