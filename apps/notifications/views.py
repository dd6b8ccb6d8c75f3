from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from drf_spectacular.types import OpenApiTypes

from .serializers import (
    PushTokenSerializer,
    RegisterPushTokenSerializer,
    NotificationScheduleSerializer,
    ScheduleCreateSerializer,
    ScheduleUpdateSerializer,
    SendRemindersSerializer,
    SendRemindersResponseSerializer,
    ErrorResponseSerializer,
)

from apps.notifications.services import (
    register_push_token,
    create_schedule,
    list_schedules,
    update_schedule,
    delete_schedule,
    send_expiration_reminders,
    # Exceptions
    PushTokenNotFoundError,
    ScheduleNotFoundError,
    InvalidScheduleError,
)


@extend_schema(
    request=RegisterPushTokenSerializer,
    responses={201: PushTokenSerializer, 200: PushTokenSerializer},
    description="Register or replace the Expo push token of a device.",
    tags=['notifications'],
)
@api_view(['POST'])
def register_token(request):
    """Register a device's push token."""
    serializer = RegisterPushTokenSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    token, created = register_push_token(**serializer.validated_data)

    return Response(
        PushTokenSerializer(token).data,
        status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
    )


@extend_schema(
    request=ScheduleCreateSerializer,
    responses={201: NotificationScheduleSerializer, 400: ErrorResponseSerializer},
    description="Create a daily or weekly reminder schedule (day_of_week: 0 = Sunday).",
    tags=['notifications'],
)
@api_view(['POST'])
def create_notification_schedule(request):
    """Create a reminder schedule."""
    serializer = ScheduleCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        schedule = create_schedule(**serializer.validated_data)
    except InvalidScheduleError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    output_serializer = NotificationScheduleSerializer(schedule)
    return Response(output_serializer.data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: NotificationScheduleSerializer(many=True)},
    description="Reminder schedules of a device.",
    tags=['notifications'],
)
@api_view(['GET'])
def device_schedules(request, device_id):
    """List a device's reminder schedules."""
    schedules = list_schedules(device_id=device_id)
    serializer = NotificationScheduleSerializer(schedules, many=True)
    return Response(serializer.data)


@extend_schema(
    methods=['PUT'],
    request=ScheduleUpdateSerializer,
    responses={200: NotificationScheduleSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Change enabled, time_of_day or day_of_week of a schedule.",
    tags=['notifications'],
)
@extend_schema(
    methods=['DELETE'],
    responses={200: OpenApiTypes.OBJECT, 404: ErrorResponseSerializer},
    description="Delete a schedule.",
    tags=['notifications'],
)
@api_view(['PUT', 'DELETE'])
def schedule_detail(request, schedule_id):
    """Update (PUT) or delete (DELETE) a reminder schedule."""
    if request.method == 'DELETE':
        try:
            delete_schedule(schedule_id=schedule_id)
        except ScheduleNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'success': True})

    serializer = ScheduleUpdateSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)

    try:
        schedule = update_schedule(schedule_id=schedule_id, **serializer.validated_data)
    except ScheduleNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InvalidScheduleError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(NotificationScheduleSerializer(schedule).data)


@extend_schema(
    request=SendRemindersSerializer,
    responses={200: SendRemindersResponseSerializer, 404: ErrorResponseSerializer},
    description="Push one reminder per entry of the device that is expiring soon.",
    tags=['notifications'],
)
@api_view(['POST'])
def send_reminders(request):
    """Send expiration reminders to a device."""
    serializer = SendRemindersSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        sent = send_expiration_reminders(device_id=serializer.validated_data['device_id'])
    except PushTokenNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response({'success': True, 'notifications_sent': sent})
