import logging

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils import timezone
from django.utils.text import get_valid_filename
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .models import ProductEntry
from .serializers import (
    ProductSerializer,
    ProductUpsertSerializer,
    ProductEntrySerializer,
    ProductEntryCreateSerializer,
    ProductEntryUpdateSerializer,
    EntryFilterSerializer,
    EntryStatsSerializer,
    ProductImageUploadSerializer,
    ProductImageResponseSerializer,
    ProductImageSerializer,
    ProductGalleryUploadSerializer,
    ErrorResponseSerializer,
)

from apps.products.services import (
    upsert_product,
    get_product_by_barcode,
    add_product_image,
    list_product_images,
    create_entry,
    get_entry,
    update_entry,
    delete_entry,
    list_entries,
    get_entry_stats,
    # Exceptions
    ProductNotFoundError,
    EntryNotFoundError,
    InvalidEntryError,
)

logger = logging.getLogger(__name__)

UUID_REGEX = r'[0-9a-fA-F-]{36}'

ENTRY_FILTER_PARAMETERS = [
    OpenApiParameter('store_id', OpenApiTypes.UUID, description='Only entries of this store'),
    OpenApiParameter('device_id', OpenApiTypes.STR, description='Only entries scanned by this device'),
]


@extend_schema(
    responses={200: ProductSerializer, 404: ErrorResponseSerializer},
    description="Look up a catalog product by barcode.",
    tags=['products'],
)
@api_view(['GET'])
def product_by_barcode(request, barcode):
    """Get catalog record for a barcode."""
    try:
        product = get_product_by_barcode(barcode=barcode)
    except ProductNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(ProductSerializer(product).data)


@extend_schema(
    request=ProductUpsertSerializer,
    responses={200: ProductSerializer},
    description="Create or update a catalog product. Absent fields never erase stored values.",
    tags=['products'],
)
@api_view(['POST'])
def upsert_product_view(request):
    """Upsert a catalog product by barcode."""
    serializer = ProductUpsertSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    product = upsert_product(**serializer.validated_data)
    return Response(ProductSerializer(product).data)


class ProductEntryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for product entries.

    list: Entries ordered by expiration date (filters: store_id, device_id, status)
    create: Record a scanned product
    retrieve: Get a single entry
    update / partial_update: Change entry fields; status is recomputed
    destroy: Delete an entry
    stats: Counts per current status
    """

    queryset = ProductEntry.objects.select_related('product', 'store', 'created_by_member')
    serializer_class = ProductEntrySerializer
    lookup_value_regex = UUID_REGEX

    def get_serializer_class(self):
        if self.action == 'create':
            return ProductEntryCreateSerializer
        if self.action in ['update', 'partial_update']:
            return ProductEntryUpdateSerializer
        return ProductEntrySerializer

    @extend_schema(
        parameters=ENTRY_FILTER_PARAMETERS + [
            OpenApiParameter('status', OpenApiTypes.STR, description='fresh, expiring_soon or expired'),
        ],
        responses={200: ProductEntrySerializer(many=True)},
    )
    def list(self, request, *args, **kwargs):
        """List entries, soonest expiring first."""
        filters = EntryFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        entries = list_entries(**filters.validated_data)
        serializer = ProductEntrySerializer(entries, many=True)
        return Response(serializer.data)

    @extend_schema(
        request=ProductEntryCreateSerializer,
        responses={201: ProductEntrySerializer, 400: ErrorResponseSerializer},
    )
    def create(self, request, *args, **kwargs):
        """Record a scanned product with its expiration date."""
        serializer = ProductEntryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        try:
            entry = create_entry(
                barcode=data['barcode'],
                product_name=data['product_name'],
                expiration_date=data['expiration_date'],
                quantity=data['quantity'],
                category=data.get('category'),
                location=data.get('location', ''),
                notes=data.get('notes', ''),
                image_url=data.get('image_url'),
                store=data['store'],
                created_by_member=data['created_by_member'],
                scanned_by_device_id=data.get('device_id', ''),
            )
        except InvalidEntryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        output_serializer = ProductEntrySerializer(entry)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=ProductEntryUpdateSerializer,
        responses={200: ProductEntrySerializer, 404: ErrorResponseSerializer},
    )
    def update(self, request, *args, **kwargs):
        """PUT and PATCH both merge only the supplied fields."""
        serializer = ProductEntryUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            entry = update_entry(entry_id=self.kwargs['pk'], **serializer.validated_data)
        except EntryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidEntryError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ProductEntrySerializer(get_entry(entry_id=entry.id)).data)

    @extend_schema(responses={200: OpenApiTypes.OBJECT, 404: ErrorResponseSerializer})
    def destroy(self, request, *args, **kwargs):
        """Delete an entry."""
        try:
            delete_entry(entry_id=self.kwargs['pk'])
        except EntryNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response({'success': True})

    @extend_schema(
        parameters=ENTRY_FILTER_PARAMETERS,
        responses={200: EntryStatsSerializer},
    )
    @action(detail=False, methods=['get'])
    def stats(self, request):
        """Counts of entries per current status."""
        filters = EntryFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        stats = get_entry_stats(
            store_id=filters.validated_data.get('store_id'),
            device_id=filters.validated_data.get('device_id'),
        )
        return Response(EntryStatsSerializer(stats).data)


def _rejected_upload(upload):
    """Error response for a missing or oversized upload, or None when it is acceptable."""
    if upload is None:
        return Response({'error': 'No file uploaded'}, status=status.HTTP_400_BAD_REQUEST)

    if upload.size > settings.PRODUCT_IMAGE_MAX_BYTES:
        logger.warning("Rejected upload %s (%d bytes)", upload.name, upload.size)
        return Response(
            {'error': f'File too large (max {settings.PRODUCT_IMAGE_MAX_BYTES} bytes)'},
            status=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        )

    return None


def _save_upload(request, upload, folder):
    """Write the upload to default storage; returns (stored name, absolute URL)."""
    timestamp = int(timezone.now().timestamp() * 1000)
    filename = f"{timestamp}-{get_valid_filename(upload.name)}"
    stored_name = default_storage.save(f"{folder}/{filename}", upload)
    url = request.build_absolute_uri(default_storage.url(stored_name))

    logger.info("Stored product image %s", stored_name)
    return stored_name, url


@extend_schema(
    request={'multipart/form-data': ProductImageUploadSerializer},
    responses={
        201: ProductImageResponseSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        413: ErrorResponseSerializer,
    },
    description="Upload a product photo. With a barcode the photo is added to that product's gallery.",
    tags=['upload'],
)
@api_view(['POST'])
@parser_classes([MultiPartParser, FormParser])
def upload_product_image(request):
    """Store an uploaded product image and return its public URL."""
    upload = request.FILES.get('file')
    rejected = _rejected_upload(upload)
    if rejected is not None:
        return rejected

    barcode = request.data.get('barcode')
    if barcode:
        try:
            get_product_by_barcode(barcode=barcode)
        except ProductNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    stored_name, url = _save_upload(request, upload, 'product-images')

    if barcode:
        try:
            add_product_image(barcode=barcode, image_url=url)
        except ProductNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(
        {'url': url, 'filename': stored_name.rsplit('/', 1)[-1]},
        status=status.HTTP_201_CREATED
    )


@extend_schema(
    methods=['GET'],
    responses={200: ProductImageSerializer(many=True), 404: ErrorResponseSerializer},
    description="List a product's gallery, primary image first.",
    tags=['products'],
)
@extend_schema(
    methods=['POST'],
    request={'multipart/form-data': ProductGalleryUploadSerializer},
    responses={
        201: ProductImageSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        413: ErrorResponseSerializer,
    },
    description="Add a photo to a product's gallery. The first photo becomes the primary image.",
    tags=['products'],
)
@api_view(['GET', 'POST'])
@parser_classes([MultiPartParser, FormParser])
def product_images(request, barcode):
    """Gallery of a product."""
    if request.method == 'GET':
        try:
            images = list_product_images(barcode=barcode)
        except ProductNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(ProductImageSerializer(images, many=True).data)

    upload = request.FILES.get('file')
    rejected = _rejected_upload(upload)
    if rejected is not None:
        return rejected

    serializer = ProductGalleryUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        get_product_by_barcode(barcode=barcode)
    except ProductNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    _, url = _save_upload(request, upload, f"product-images/{get_valid_filename(barcode)}")

    try:
        image = add_product_image(
            barcode=barcode,
            image_url=url,
            store=serializer.validated_data['store'],
            member=serializer.validated_data['member'],
        )
    except ProductNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(ProductImageSerializer(image).data, status=status.HTTP_201_CREATED)
