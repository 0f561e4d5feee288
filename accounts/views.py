from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status, permissions
from . import serializers


class MeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        data = serializers.MeSerializer(request.user).data
        return Response(data, status=status.HTTP_200_OK)
