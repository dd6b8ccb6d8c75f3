from django.http import HttpResponse
from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .models import Store
from .serializers import (
    StoreSerializer,
    StoreCreateSerializer,
    StoreMemberSerializer,
    StoreMembershipSerializer,
    CurrentStoreSerializer,
    JoinStoreSerializer,
    DeviceSerializer,
    StoreCodeSerializer,
    ErrorResponseSerializer,
)

from apps.products.serializers import ProductEntrySerializer
from apps.stores.services import (
    create_store,
    delete_store,
    get_store_by_id,
    get_device_stores,
    get_store_entries,
    join_store,
    leave_store,
    get_store_members,
    get_current_store,
    regenerate_store_code,
    render_store_code_qr,
    # Exceptions
    StoreNotFoundError,
    InvalidStoreCodeError,
    AlreadyMemberError,
    NotMemberError,
    OwnerCannotLeaveError,
    InsufficientPermissionsError,
    StoreCodeGenerationError,
)

DEVICE_ID_PARAMETER = OpenApiParameter(
    'device_id', OpenApiTypes.STR, description='Calling device (query or body)'
)


def _membership_payload(store, member, member_count=None):
    return {
        'id': store.id,
        'name': store.name,
        'code': store.code,
        'role': member.role,
        'member_id': member.id,
        'nickname': member.nickname,
        'member_count': member_count if member_count is not None else store.members.count(),
        'created_at': store.created_at,
    }


def _requesting_device(request):
    """device_id from the body, falling back to the query string."""
    data = {'device_id': request.data.get('device_id') or request.query_params.get('device_id')}
    serializer = DeviceSerializer(data=data)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data['device_id']


class StoreViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    ViewSet for stores (teams).

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    create: Create a store; the calling device becomes owner
    retrieve: Get a specific store
    destroy: Delete a store (owner only)
    """

    queryset = Store.objects.prefetch_related('members')
    serializer_class = StoreSerializer
    lookup_value_regex = r'[0-9a-fA-F-]{36}'

    @extend_schema(
        request=StoreCreateSerializer,
        responses={201: StoreSerializer, 500: ErrorResponseSerializer},
    )
    def create(self, request, *args, **kwargs):
        """Create a new store with a fresh store code."""
        serializer = StoreCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            store = create_store(**serializer.validated_data)
        except StoreCodeGenerationError as e:
            return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        output_serializer = StoreSerializer(store)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        parameters=[DEVICE_ID_PARAMETER],
        responses={200: OpenApiTypes.OBJECT, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    )
    def destroy(self, request, *args, **kwargs):
        """Delete a store (owner only)."""
        device_id = _requesting_device(request)

        try:
            delete_store(store_id=self.kwargs['pk'], device_id=device_id)
        except StoreNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response({'success': True})

    @extend_schema(
        request=JoinStoreSerializer,
        responses={201: StoreMembershipSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    )
    @action(detail=False, methods=['post'])
    def join(self, request):
        """Join a store using its store code."""
        serializer = JoinStoreSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            store, member = join_store(**serializer.validated_data)
        except InvalidStoreCodeError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AlreadyMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = StoreMembershipSerializer(_membership_payload(store, member))
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: StoreMembershipSerializer(many=True)})
    @action(detail=False, methods=['get'], url_path=r'device/(?P<device_id>[^/]+)')
    def device_stores(self, request, device_id=None):
        """Get all stores a device belongs to."""
        stores = get_device_stores(device_id=device_id)
        serializer = StoreMembershipSerializer(stores, many=True)
        return Response(serializer.data)

    @extend_schema(
        parameters=[DEVICE_ID_PARAMETER],
        responses={200: CurrentStoreSerializer, 404: ErrorResponseSerializer},
    )
    @action(detail=False, methods=['get'])
    def current(self, request):
        """Get the device's most recently joined store with its members."""
        device_id = _requesting_device(request)

        try:
            member = get_current_store(device_id=device_id)
        except NotMemberError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        members = list(get_store_members(store_id=member.store_id))
        payload = _membership_payload(member.store, member, member_count=len(members))
        payload['members'] = members

        return Response(CurrentStoreSerializer(payload).data)

    @extend_schema(responses={200: StoreMemberSerializer(many=True), 404: ErrorResponseSerializer})
    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get all members of the store, owner first."""
        try:
            members = get_store_members(store_id=pk)
        except StoreNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        serializer = StoreMemberSerializer(members, many=True)
        return Response(serializer.data)

    @extend_schema(responses={200: ProductEntrySerializer(many=True), 404: ErrorResponseSerializer})
    @action(detail=True, methods=['get'])
    def entries(self, request, pk=None):
        """Get the store's entries, soonest expiring first."""
        try:
            entries = get_store_entries(store_id=pk)
        except StoreNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        serializer = ProductEntrySerializer(entries, many=True)
        return Response(serializer.data)

    @extend_schema(
        parameters=[DEVICE_ID_PARAMETER],
        responses={200: OpenApiTypes.OBJECT, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['delete'])
    def leave(self, request, pk=None):
        """Leave a store."""
        device_id = _requesting_device(request)

        try:
            leave_store(store_id=pk, device_id=device_id)
        except (StoreNotFoundError, NotMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except OwnerCannotLeaveError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'success': True})

    @extend_schema(
        request=DeviceSerializer,
        responses={200: StoreCodeSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['post'], url_path='regenerate-code')
    def regenerate_code(self, request, pk=None):
        """Replace the store code (owner only)."""
        device_id = _requesting_device(request)

        try:
            code = regenerate_store_code(store_id=pk, device_id=device_id)
        except StoreNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except StoreCodeGenerationError as e:
            return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({'code': code})

    @extend_schema(
        responses={(200, 'image/png'): OpenApiTypes.BINARY, 404: ErrorResponseSerializer},
        description="QR code of the store code for sharing with other devices.",
    )
    @action(detail=True, methods=['get'], url_path='code-qr')
    def code_qr(self, request, pk=None):
        """Get the store code as a PNG QR code."""
        try:
            store = get_store_by_id(store_id=pk)
        except StoreNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        png = render_store_code_qr(store=store)
        response = HttpResponse(png, content_type='image/png')
        response['Content-Disposition'] = f'inline; filename="store-{store.code}.png"'
        return response
