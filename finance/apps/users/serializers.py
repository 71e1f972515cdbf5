from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from rates.serializers import CurrencyCodeField
from users.models import User


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = (
            "uuid",
            "username",
            "email",
            "balance",
            "base_currency",
            "first_name",
            "last_name",
            "date_joined",
        )


class UserLoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField()


class ChangeBaseCurrencySerializer(serializers.Serializer):
    currency = CurrencyCodeField()


class RegisterSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(
        required=False, validators=[UniqueValidator(queryset=User.objects.all())]
    )
    password = serializers.CharField(
        write_only=True, required=True, validators=[validate_password]
    )
    repeat_password = serializers.CharField(write_only=True, required=True)
    base_currency = CurrencyCodeField(required=False)

    class Meta:
        model = User
        fields = (
            "username",
            "password",
            "repeat_password",
            "email",
            "base_currency",
            "first_name",
            "last_name",
        )

    def validate(self, attrs):
        if attrs["password"] != attrs["repeat_password"]:
            raise serializers.ValidationError(
                {"password": "Password fields didn't match."}
            )

        return attrs

    def create(self, validated_data):
        validated_data.pop("repeat_password")
        password = validated_data.pop("password")
        user = User(**validated_data)
        user.set_password(password)
        user.save()
        return user


class UpdateProfileSerializer(serializers.Serializer):
    username = serializers.CharField(
        min_length=3, max_length=150, required=False, allow_null=True
    )
    email = serializers.EmailField(required=False, allow_null=True)
    first_name = serializers.CharField(
        max_length=150, required=False, allow_null=True, allow_blank=True
    )
    last_name = serializers.CharField(
        max_length=150, required=False, allow_null=True, allow_blank=True
    )
    base_currency = CurrencyCodeField(required=False, allow_null=True)

    def _taken(self, **lookup):
        user = self.context["request"].user
        return User.objects.filter(**lookup).exclude(pk=user.pk).exists()

    def validate_username(self, value):
        if value and self._taken(username=value):
            raise serializers.ValidationError("A user with that username already exists.")
        return value

    def validate_email(self, value):
        if value and self._taken(email=value):
            raise serializers.ValidationError("This field must be unique.")
        return value


class ChangePasswordSerializer(serializers.Serializer):
    old_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True)
    repeat_password = serializers.CharField(write_only=True)

    def validate_old_password(self, value):
        if not self.context["request"].user.check_password(value):
            raise serializers.ValidationError("Old password is not correct.")
        return value

    def validate(self, attrs):
        if attrs["new_password"] != attrs["repeat_password"]:
            raise serializers.ValidationError(
                {"new_password": "Password fields didn't match."}
            )
        validate_password(attrs["new_password"], self.context["request"].user)
        return attrs
