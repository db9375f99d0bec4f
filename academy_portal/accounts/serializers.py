from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

User = get_user_model()


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """Добавляет роль пользователя в JWT токен"""

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        # Роль берём только из БД
        token['role'] = user.role
        token['email'] = user.email
        return token


class SignInSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class SignUpSerializer(serializers.Serializer):
    """Регистрация академии."""
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8, trim_whitespace=False)
    academy_name = serializers.CharField(max_length=255)
    phone_number = serializers.CharField(max_length=32, required=False, allow_blank=True)

    def validate_password(self, value):
        validate_password(value)
        return value


class UserSerializer(serializers.ModelSerializer):
    """Сериализатор для профиля текущего пользователя"""
    academy_id = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'name', 'phone_number', 'role', 'academy_id', 'created_at']
        read_only_fields = ['email', 'role', 'created_at']
        extra_kwargs = {
            'name': {'allow_blank': True, 'required': False},
            'phone_number': {'required': False},
        }

    def get_academy_id(self, obj):
        academy = getattr(obj, 'academy', None) if obj.is_academic else None
        return academy.pk if academy else None
