from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Public profile. Never exposes the password hash."""
    role = serializers.CharField(source="effective_role", read_only=True)
    createdAt = serializers.DateTimeField(source="date_joined", read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'name',
            'email',
            'role',
            'phone',
            'createdAt',
        ]
