from rest_framework import serializers
from .models import BatchScan, BatchScanItem


class BatchScanSerializer(serializers.ModelSerializer):
    """Batch scan session."""

    store_id = serializers.UUIDField(read_only=True, allow_null=True)
    created_by_member_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = BatchScan
        fields = [
            'id',
            'device_id',
            'name',
            'status',
            'item_count',
            'store_id',
            'created_by_member_id',
            'created_at',
            'completed_at',
        ]
        read_only_fields = fields


class BatchScanCreateSerializer(serializers.Serializer):
    """Input for starting a batch scan."""

    device_id = serializers.CharField(max_length=255)
    name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    store_id = serializers.UUIDField(required=False, allow_null=True)

    def validate(self, attrs):
        """Resolve the store and the device's membership in it."""
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
            attrs['created_by_member'] = store.get_membership(attrs['device_id'])

        return attrs


class BatchScanItemSerializer(serializers.ModelSerializer):
    """Item staged in a batch."""

    batch_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = BatchScanItem
        fields = [
            'id',
            'batch_id',
            'position',
            'barcode',
            'product_name',
            'expiration_date',
            'category',
            'quantity',
            'location',
            'notes',
            'image_url',
            'created_at',
        ]
        read_only_fields = fields


class BatchScanItemCreateSerializer(serializers.Serializer):
    """Input for staging a scanned product."""

    barcode = serializers.CharField(max_length=128)
    product_name = serializers.CharField(max_length=255)
    expiration_date = serializers.DateField()
    category = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    quantity = serializers.IntegerField(min_value=1, default=1)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')
    image_url = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)


class AddItemResponseSerializer(serializers.Serializer):
    item = BatchScanItemSerializer()
    item_count = serializers.IntegerField()


class BatchCompletionSerializer(serializers.Serializer):
    """Outcome of completing a batch."""

    batch = BatchScanSerializer()
    entries_created = serializers.IntegerField()
    failed_item_ids = serializers.ListField(child=serializers.UUIDField())


class ErrorResponseSerializer(serializers.Serializer):
    """Error response shape."""
    error = serializers.CharField()
