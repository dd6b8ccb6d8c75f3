from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema
from drf_spectacular.types import OpenApiTypes

from .models import BatchScan
from .serializers import (
    BatchScanSerializer,
    BatchScanCreateSerializer,
    BatchScanItemSerializer,
    BatchScanItemCreateSerializer,
    AddItemResponseSerializer,
    BatchCompletionSerializer,
    ErrorResponseSerializer,
)

from apps.batches.services import (
    create_batch,
    list_device_batches,
    add_item,
    get_batch_items,
    complete_batch,
    delete_batch,
    # Exceptions
    BatchNotFoundError,
    BatchNotInProgressError,
    InvalidBatchItemError,
)


class BatchScanViewSet(viewsets.GenericViewSet):
    """
    ViewSet for batch scan sessions.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    create: Start a batch scan
    retrieve: Get a batch scan
    destroy: Delete a batch scan and its items
    """

    queryset = BatchScan.objects.all()
    serializer_class = BatchScanSerializer
    lookup_value_regex = r'[0-9a-fA-F-]{36}'

    @extend_schema(request=BatchScanCreateSerializer, responses={201: BatchScanSerializer})
    def create(self, request, *args, **kwargs):
        """Start a batch scan for a device."""
        serializer = BatchScanCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        batch = create_batch(**serializer.validated_data)

        output_serializer = BatchScanSerializer(batch)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, *args, **kwargs):
        """Get a batch scan."""
        serializer = BatchScanSerializer(self.get_object())
        return Response(serializer.data)

    @extend_schema(responses={200: OpenApiTypes.OBJECT, 404: ErrorResponseSerializer})
    def destroy(self, request, *args, **kwargs):
        """Delete a batch scan in any state."""
        try:
            delete_batch(batch_id=self.kwargs['pk'])
        except BatchNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'success': True})

    @extend_schema(responses={200: BatchScanSerializer(many=True)})
    @action(detail=False, methods=['get'], url_path=r'device/(?P<device_id>[^/]+)')
    def device_batches(self, request, device_id=None):
        """Get a device's batch scans, newest first."""
        batches = list_device_batches(device_id=device_id)
        serializer = BatchScanSerializer(batches, many=True)
        return Response(serializer.data)

    @extend_schema(
        methods=['POST'],
        request=BatchScanItemCreateSerializer,
        responses={201: AddItemResponseSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    )
    @extend_schema(
        methods=['GET'],
        responses={200: BatchScanItemSerializer(many=True), 404: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['get', 'post'])
    def items(self, request, pk=None):
        """List staged items (GET) or stage a scanned product (POST)."""
        if request.method == 'GET':
            try:
                items = get_batch_items(batch_id=pk)
            except BatchNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

            serializer = BatchScanItemSerializer(items, many=True)
            return Response(serializer.data)

        serializer = BatchScanItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            item, item_count = add_item(batch_id=pk, **serializer.validated_data)
        except BatchNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except (BatchNotInProgressError, InvalidBatchItemError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = AddItemResponseSerializer({'item': item, 'item_count': item_count})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=None,
        responses={200: BatchCompletionSerializer, 400: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    )
    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        """Turn every staged item into a product entry and close the batch."""
        try:
            result = complete_batch(batch_id=pk)
        except BatchNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except BatchNotInProgressError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(BatchCompletionSerializer(result).data)
