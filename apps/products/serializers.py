from rest_framework import serializers

from .models import Product, ProductEntry, ProductImage, EntryStatus
from .services.expiry_status import classify, days_until_expiry


class ProductSerializer(serializers.ModelSerializer):
    """Catalog record."""

    class Meta:
        model = Product
        fields = ['id', 'barcode', 'name', 'category', 'image_url', 'created_at', 'updated_at']
        read_only_fields = fields


class ProductUpsertSerializer(serializers.Serializer):
    """Input for creating or updating a catalog record."""

    barcode = serializers.CharField(max_length=128)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, allow_null=True)
    category = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    image_url = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)


class ProductEntrySerializer(serializers.ModelSerializer):
    """
    Entry output.

    ``status`` and ``days_until_expiry`` are computed for today, not read
    from the cached column.
    """

    status = serializers.SerializerMethodField()
    days_until_expiry = serializers.SerializerMethodField()
    store_id = serializers.UUIDField(read_only=True, allow_null=True)
    created_by_member_id = serializers.UUIDField(read_only=True, allow_null=True)
    created_by_nickname = serializers.SerializerMethodField()

    class Meta:
        model = ProductEntry
        fields = [
            'id',
            'product',
            'barcode',
            'product_name',
            'category',
            'expiration_date',
            'quantity',
            'location',
            'notes',
            'image_url',
            'status',
            'days_until_expiry',
            'store_id',
            'created_by_member_id',
            'created_by_nickname',
            'scanned_by_device_id',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_status(self, obj):
        return classify(obj.expiration_date)

    def get_days_until_expiry(self, obj):
        return days_until_expiry(obj.expiration_date)

    def get_created_by_nickname(self, obj):
        if obj.created_by_member_id and obj.created_by_member:
            return obj.created_by_member.nickname
        return None


class ProductEntryCreateSerializer(serializers.Serializer):
    """Input for recording a scanned product."""

    barcode = serializers.CharField(max_length=128)
    product_name = serializers.CharField(max_length=255)
    expiration_date = serializers.DateField()
    quantity = serializers.IntegerField(min_value=1, default=1)
    category = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    image_url = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    store_id = serializers.UUIDField(required=False, allow_null=True)
    device_id = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')

    def validate(self, attrs):
        """Resolve the device's membership when the entry belongs to a store."""
        from apps.stores.models import Store

        store_id = attrs.pop('store_id', None)
        attrs['store'] = None
        attrs['created_by_member'] = None

        if store_id:
            try:
                store = Store.objects.get(id=store_id)
            except Store.DoesNotExist:
                raise serializers.ValidationError({'store_id': f'Store with ID {store_id} not found'})
            attrs['store'] = store
            if attrs.get('device_id'):
                attrs['created_by_member'] = store.get_membership(attrs['device_id'])

        return attrs


class ProductEntryUpdateSerializer(serializers.Serializer):
    """Partial entry update; only the supplied fields are changed."""

    product_name = serializers.CharField(max_length=255, required=False)
    category = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    expiration_date = serializers.DateField(required=False)
    quantity = serializers.IntegerField(min_value=1, required=False)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    image_url = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)


class EntryFilterSerializer(serializers.Serializer):
    """Query parameters for entry listings and stats."""

    store_id = serializers.UUIDField(required=False)
    device_id = serializers.CharField(max_length=255, required=False)
    status = serializers.ChoiceField(choices=EntryStatus.choices, required=False)


class EntryStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    fresh = serializers.IntegerField()
    expiring_soon = serializers.IntegerField()
    expired = serializers.IntegerField()


class ProductImageUploadSerializer(serializers.Serializer):
    """Multipart upload of a product photo."""

    file = serializers.FileField(required=False)
    barcode = serializers.CharField(max_length=128, required=False, allow_blank=True)


class ProductImageResponseSerializer(serializers.Serializer):
    url = serializers.CharField()
    filename = serializers.CharField()


class ProductImageSerializer(serializers.ModelSerializer):
    """Gallery image of a product."""

    barcode = serializers.CharField(source='product.barcode', read_only=True)
    uploaded_by_store_id = serializers.UUIDField(read_only=True)
    uploaded_by_member_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = ProductImage
        fields = [
            'id',
            'barcode',
            'image_url',
            'uploaded_by_store_id',
            'uploaded_by_member_id',
            'is_primary',
            'created_at',
        ]
        read_only_fields = fields


class ProductGalleryUploadSerializer(serializers.Serializer):
    """Multipart upload into a product's gallery, attributed to a store member."""

    file = serializers.FileField(required=False)
    store_id = serializers.UUIDField(required=False, allow_null=True)
    member_id = serializers.UUIDField(required=False, allow_null=True)

    def validate(self, attrs):
        """Resolve the uploading store and member; the member must belong to the store."""
        from apps.stores.models import Store

        store_id = attrs.pop('store_id', None)
        member_id = attrs.pop('member_id', None)
        attrs['store'] = None
        attrs['member'] = None

        if member_id and not store_id:
            raise serializers.ValidationError({'store_id': 'Required when member_id is given'})

        if store_id:
            try:
                attrs['store'] = Store.objects.get(id=store_id)
            except Store.DoesNotExist:
                raise serializers.ValidationError({'store_id': f'Store with ID {store_id} not found'})

        if member_id:
            member = attrs['store'].members.filter(id=member_id).first()
            if member is None:
                raise serializers.ValidationError({'member_id': 'Member does not belong to this store'})
            attrs['member'] = member

        return attrs


class ErrorResponseSerializer(serializers.Serializer):
    """Error response shape."""
    error = serializers.CharField()
