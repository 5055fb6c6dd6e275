from django.conf import settings
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from .models import User


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'first_name', 'last_name', 'date_of_birth', 'date_joined']
        read_only_fields = ['id', 'username', 'date_joined']


class RegisterSerializer(serializers.ModelSerializer):
    """Регистрация: email и username уникальны, пароль не короче MIN_PASSWORD_LENGTH."""

    email = serializers.EmailField(
        validators=[UniqueValidator(User.objects.all(), message='Пользователь с таким email уже существует')],
    )
    password = serializers.CharField(
        write_only=True,
        min_length=settings.MIN_PASSWORD_LENGTH,
        style={'input_type': 'password'},
    )

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'password', 'first_name', 'last_name', 'date_of_birth']
        read_only_fields = ['id']

    def create(self, validated_data):
        return User.objects.create_user(**validated_data)


class LoginSerializer(serializers.Serializer):
    login = serializers.CharField(help_text='Email или username')
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()
