from django.urls import path
from .views import AppointmentCreateView, AppointmentsListView, AppointmentCancelView, AppointmentCompleteView

urlpatterns = [
    path("appointments/create/", AppointmentCreateView.as_view(), name="appointment-create"),
    path("appointments/<int:pk>/cancel/", AppointmentCancelView.as_view(), name="appointment-cancel"),
    path("appointments/<int:pk>/complete/", AppointmentCompleteView.as_view(), name="appointment-complete"),
    path("appointments/me/", AppointmentsListView.as_view(), name="my-appointments"),
]
