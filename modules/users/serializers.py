from django.contrib.auth import authenticate
from rest_framework import serializers

from shared.utils import is_valid_phone_number

from .exceptions import InvalidCredentialsError
from .models import UserModel, VendorModel


def _validate_phone(value):
    if value and not is_valid_phone_number(value):
        raise serializers.ValidationError("Please enter a valid Nepali phone number")
    return value


class UserSignupSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=6)

    class Meta:
        model = UserModel
        fields = ['id', 'email', 'password', 'name', 'phone', 'created_at']
        extra_kwargs = {
            'id': {'read_only': True},
            'created_at': {'read_only': True},
            # Duplicate e-mails are reported by the service as a conflict
            'email': {'validators': []},
        }

    def validate_phone(self, value):
        return _validate_phone(value)


class VendorRegistrationSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    name = serializers.CharField(max_length=100)
    primary_phone = serializers.CharField(max_length=20)
    secondary_phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    city = serializers.CharField(max_length=50)
    address = serializers.CharField(max_length=200, required=False, allow_blank=True)
    vat_number = serializers.RegexField(r'^[0-9]{9}$', error_messages={
        'invalid': 'Please enter a valid 9-digit VAT number',
    })
    business_type = serializers.ChoiceField(
        choices=VendorModel.BusinessType.choices,
        default=VendorModel.BusinessType.OTHER,
    )

    def validate_primary_phone(self, value):
        return _validate_phone(value)

    def validate_secondary_phone(self, value):
        return _validate_phone(value)


class UserLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(style={'input_type': 'password'})

    def validate(self, data):
        user = authenticate(username=data['email'].lower(), password=data['password'])
        if user is None:
            raise InvalidCredentialsError()
        data['user'] = user
        return data


class VendorProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = VendorModel
        fields = [
            'id', 'name', 'email', 'primary_phone', 'secondary_phone',
            'city', 'address', 'vat_number', 'business_type', 'status',
        ]
        read_only_fields = fields


class UserProfileSerializer(serializers.ModelSerializer):
    vendor = VendorProfileSerializer(source='vendor_profile', read_only=True)

    class Meta:
        model = UserModel
        fields = ['id', 'name', 'email', 'phone', 'role', 'address', 'city', 'total_orders', 'vendor']
        read_only_fields = ['id', 'email', 'role', 'total_orders', 'vendor']

    def validate_phone(self, value):
        return _validate_phone(value)


class VendorAdminSerializer(VendorProfileSerializer):
    class Meta(VendorProfileSerializer.Meta):
        fields = VendorProfileSerializer.Meta.fields + ['user', 'created_at', 'updated_at']
        read_only_fields = fields


class VendorAdminUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    primary_phone = serializers.CharField(max_length=20, required=False)
    secondary_phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    city = serializers.CharField(max_length=50, required=False)
    address = serializers.CharField(max_length=200, required=False, allow_blank=True)
    vat_number = serializers.RegexField(r'^[0-9]{9}$', required=False, error_messages={
        'invalid': 'Please enter a valid 9-digit VAT number',
    })
    business_type = serializers.ChoiceField(choices=VendorModel.BusinessType.choices, required=False)
    status = serializers.ChoiceField(choices=VendorModel.Status.choices, required=False)

    def validate_primary_phone(self, value):
        return _validate_phone(value)

    def validate_secondary_phone(self, value):
        return _validate_phone(value)
