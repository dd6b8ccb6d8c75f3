from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    # POST   /api/notifications/register-token/              - Register push token
    # POST   /api/notifications/schedule/                    - Create schedule
    # GET    /api/notifications/schedules/{device_id}/       - Device's schedules
    # PUT    /api/notifications/schedule/{id}/               - Update schedule
    # DELETE /api/notifications/schedule/{id}/               - Delete schedule
    # POST   /api/notifications/send-expiration-reminders/   - Send reminders now
    path('register-token/', views.register_token, name='register-token'),
    path('schedule/', views.create_notification_schedule, name='schedule-create'),
    path('schedule/<uuid:schedule_id>/', views.schedule_detail, name='schedule-detail'),
    path('schedules/<str:device_id>/', views.device_schedules, name='device-schedules'),
    path('send-expiration-reminders/', views.send_reminders, name='send-reminders'),
]
