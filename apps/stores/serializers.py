from rest_framework import serializers
from .models import Store, StoreMember


class StoreMemberSerializer(serializers.ModelSerializer):
    """Member of a store."""

    store_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = StoreMember
        fields = ['id', 'store_id', 'device_id', 'nickname', 'role', 'joined_at']
        read_only_fields = fields


class StoreSerializer(serializers.ModelSerializer):
    """Main serializer for stores."""

    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Store
        fields = [
            'id',
            'name',
            'code',
            'created_by_device_id',
            'member_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_member_count(self, obj):
        """Get number of members in the store."""
        return obj.members.count()


class StoreCreateSerializer(serializers.Serializer):
    """Input for creating a store; the creator becomes its owner."""

    name = serializers.CharField(max_length=200)
    nickname = serializers.CharField(max_length=100)
    device_id = serializers.CharField(max_length=255)


class JoinStoreSerializer(serializers.Serializer):
    """Input for joining a store with its code."""

    code = serializers.CharField(max_length=16)
    nickname = serializers.CharField(max_length=100)
    device_id = serializers.CharField(max_length=255)


class DeviceSerializer(serializers.Serializer):
    """Identifies the calling device."""

    device_id = serializers.CharField(max_length=255)


class StoreMembershipSerializer(serializers.Serializer):
    """A store as seen by one of its member devices."""

    id = serializers.UUIDField()
    name = serializers.CharField()
    code = serializers.CharField()
    role = serializers.CharField()
    member_id = serializers.UUIDField()
    nickname = serializers.CharField()
    member_count = serializers.IntegerField()
    created_at = serializers.DateTimeField()


class CurrentStoreSerializer(StoreMembershipSerializer):
    """The device's current store with its member list."""

    members = StoreMemberSerializer(many=True)


class StoreCodeSerializer(serializers.Serializer):
    code = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    """Error response shape."""
    error = serializers.CharField()
