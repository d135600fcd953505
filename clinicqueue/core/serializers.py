"""Serializers for the core app: the current user and the JWT login payload."""

from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from clinicqueue.core.models import Role, User
from clinicqueue.core.permissions import role_name
from clinicqueue.waitlist.permissions import queue_capabilities


class RoleSerializer(serializers.ModelSerializer):
    class Meta:
        model = Role
        fields = ['id', 'name', 'label']
        read_only_fields = fields


class QueueUserSerializer(serializers.ModelSerializer):
    """Staff member as seen by the queue frontend, with their queue rights."""

    role = RoleSerializer(read_only=True)
    queue = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'first_name', 'last_name', 'role', 'queue']
        read_only_fields = fields

    def get_queue(self, obj) -> dict:
        return queue_capabilities(obj)


class RoleTokenObtainPairSerializer(TokenObtainPairSerializer):
    """SimpleJWT login that puts the role into the token and the user into the body.

    Response: {"refresh": "...", "access": "...", "user": {...}}
    """

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['role'] = role_name(user)
        return token

    def validate(self, attrs):
        data = super().validate(attrs)
        data['user'] = QueueUserSerializer(self.user).data
        return data
