from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from account.models import Profile, User


# model serializers for users
class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for User model
    """
    is_onboarded = serializers.BooleanField(read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'first_name', 'last_name', 'is_onboarded']
        read_only_fields = ['id']


# user registration serializer
class UserRegistrationSerializer(serializers.Serializer):
    """
    Serializer for user registration
    Email will be used as the username
    """
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    password_confirm = serializers.CharField(write_only=True)
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)

    def validate_email(self, value):
        """Validate that email is unique (will be used as username)"""
        value = value.lower().strip()
        if User.objects.filter(email=value).exists():
            raise serializers.ValidationError("Email already registered.")
        if User.objects.filter(username=value).exists():
            raise serializers.ValidationError("Email already registered.")
        return value

    def validate(self, data):
        """Validate that passwords match"""
        if data['password'] != data['password_confirm']:
            raise serializers.ValidationError({"password": "Passwords do not match."})
        return data


# profile serializer, used for onboarding and profile updates
class ProfileSerializer(serializers.ModelSerializer):
    """
    The account type decides which tax policy applies.
    Business accounts must have a business name.
    """
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = Profile
        fields = [
            'user_type', 'full_name', 'business_name', 'phone_number',
            'display_name', 'created_at', 'updated_at'
        ]
        read_only_fields = ['created_at', 'updated_at']
        extra_kwargs = {
            'business_name': {'required': False},
            'phone_number': {'required': False},
        }

    def validate_full_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Full name is required.")
        return value.strip()

    def validate(self, data):
        instance = getattr(self, 'instance', None)
        user_type = data.get('user_type', getattr(instance, 'user_type', None))
        business_name = data.get('business_name', getattr(instance, 'business_name', None))

        if user_type == Profile.BUSINESS:
            if not business_name or not business_name.strip():
                raise serializers.ValidationError({"business_name": "Business name is required."})
            data['business_name'] = business_name.strip()
        else:
            # Individuals don't carry a business name
            data['business_name'] = None
        return data


# change password serializer
class ChangePasswordSerializer(serializers.Serializer):
    old_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True, min_length=8)
    new_password_confirm = serializers.CharField(write_only=True, min_length=8)

    def validate_old_password(self, value):
        user = self.context['request'].user
        if not user.check_password(value):
            raise serializers.ValidationError("Old password is incorrect.")
        return value

    def validate(self, data):
        if data["new_password"] != data["new_password_confirm"]:
            raise serializers.ValidationError("New passwords do not match.")
        validate_password(data["new_password"], user=self.context['request'].user)
        return data

    def save(self):
        user = self.context['request'].user
        user.set_password(self.validated_data["new_password"])
        user.save(update_fields=["password"])
        return user
