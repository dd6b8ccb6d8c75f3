from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    DailyCheckSessionSerializer,
    StartSessionSerializer,
    RecordActionSerializer,
    RecordActionResponseSerializer,
    ErrorResponseSerializer,
)

from apps.products.serializers import ProductEntrySerializer
from apps.daily_checks.services import (
    start_session,
    get_session,
    list_store_sessions,
    get_worklist,
    complete_session,
    record_action,
    # Exceptions
    SessionNotFoundError,
    StoreNotFoundError,
    WorklistItemNotFoundError,
    SessionNotInProgressError,
    ItemAlreadyProcessedError,
    InvalidWarningDaysError,
    InvalidActionError,
    NotStoreMemberError,
)


@extend_schema(
    request=StartSessionSerializer,
    responses={
        201: DailyCheckSessionSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Start a daily check; the worklist is frozen at this moment.",
    tags=['daily-checks'],
)
@api_view(['POST'])
def start_daily_check(request):
    """Start a daily check for a store."""
    serializer = StartSessionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        session = start_session(**serializer.validated_data)
    except InvalidWarningDaysError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except StoreNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except NotStoreMemberError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    output_serializer = DailyCheckSessionSerializer(session)
    return Response(output_serializer.data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: DailyCheckSessionSerializer(many=True)},
    description="Daily checks of a store, newest first.",
    tags=['daily-checks'],
)
@api_view(['GET'])
def store_daily_checks(request, store_id):
    """List a store's daily checks."""
    sessions = list_store_sessions(store_id=store_id)
    serializer = DailyCheckSessionSerializer(sessions, many=True)
    return Response(serializer.data)


@extend_schema(
    responses={200: DailyCheckSessionSerializer, 404: ErrorResponseSerializer},
    description="Session summary with counters.",
    tags=['daily-checks'],
)
@api_view(['GET'])
def daily_check_detail(request, session_id):
    """Get a daily check summary."""
    try:
        session = get_session(session_id=session_id)
    except SessionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(DailyCheckSessionSerializer(session).data)


@extend_schema(
    responses={200: ProductEntrySerializer(many=True), 404: ErrorResponseSerializer},
    description="Entries still waiting for an action, soonest expiring first.",
    tags=['daily-checks'],
)
@api_view(['GET'])
def daily_check_products(request, session_id):
    """Get the remaining worklist of a daily check."""
    try:
        entries = get_worklist(session_id=session_id)
    except SessionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    serializer = ProductEntrySerializer(entries, many=True)
    return Response(serializer.data)


@extend_schema(
    request=None,
    responses={200: DailyCheckSessionSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Complete a daily check. Completing it twice is an error.",
    tags=['daily-checks'],
)
@api_view(['PUT'])
def complete_daily_check(request, session_id):
    """Complete a daily check."""
    try:
        session = complete_session(session_id=session_id)
    except SessionNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except SessionNotInProgressError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(DailyCheckSessionSerializer(session).data)


@extend_schema(
    request=RecordActionSerializer,
    responses={
        201: RecordActionResponseSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Record what was done with a worklist entry. The entry itself is not changed.",
    tags=['daily-checks'],
)
@api_view(['POST'])
def record_daily_check_action(request):
    """Record an action on a worklist entry."""
    serializer = RecordActionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        item, remaining = record_action(**serializer.validated_data)
    except (SessionNotFoundError, WorklistItemNotFoundError) as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except (SessionNotInProgressError, ItemAlreadyProcessedError, InvalidActionError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except NotStoreMemberError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    output_serializer = RecordActionResponseSerializer({'item': item, 'remaining_count': remaining})
    return Response(output_serializer.data, status=status.HTTP_201_CREATED)
