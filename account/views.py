import logging
from django.db import transaction

from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiExample

from .models import User
from .serializers import (
    ChangePasswordSerializer,
    ProfileSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)
from .services.emails import EmailService

# prepare logging handler for this file
logger = logging.getLogger(__name__)


def first_error_message(errors):
    """
    Flatten serializer errors into a single readable message
    """
    if 'non_field_errors' in errors:
        return ' '.join(errors['non_field_errors'])
    if errors:
        first_key = next(iter(errors))
        return ' '.join(errors[first_key])
    return 'Invalid input.'


@extend_schema(
    summary="Register new user",
    description="Register a new user account. Returns user details and JWT tokens. The account type is chosen afterwards during onboarding.",
    tags=["auth"],
    request=UserRegistrationSerializer,
    examples=[
        OpenApiExample(
            'User Registration',
            value={
                'email': 'ada@example.com',
                'password': 'SecurePass123',
                'password_confirm': 'SecurePass123',
                'first_name': 'Ada',
                'last_name': 'Obi',
            },
            request_only=True
        )
    ],
    responses={
        201: {
            'type': 'object',
            'properties': {
                'status': {'type': 'string'},
                'user': {'type': 'object'},
                'tokens': {
                    'type': 'object',
                    'properties': {
                        'access': {'type': 'string'},
                        'refresh': {'type': 'string'}
                    }
                }
            }
        },
        400: {'description': 'Validation error'}
    }
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """
    Register a new user

    POST /api/auth/register/
    {
        "email": "ada@example.com",
        "password": "SecurePass123",
        "password_confirm": "SecurePass123",
        "first_name": "Ada",
        "last_name": "Obi"
    }
    """
    serializer = UserRegistrationSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    with transaction.atomic():
        # Create user (use email as username)
        user = User.objects.create_user(
            username=serializer.validated_data['email'],
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
            first_name=serializer.validated_data.get('first_name', ''),
            last_name=serializer.validated_data.get('last_name', '')
        )

    # Generate JWT tokens
    refresh = RefreshToken.for_user(user)

    EmailService.send_welcome(user)

    logger.info(f"Account for {user.email} has been created successfully")
    return Response({
        'status': 'success',
        'user': UserSerializer(user).data,
        'tokens': {
            'access': str(refresh.access_token),
            'refresh': str(refresh)
        }
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    summary="Complete onboarding",
    description="Declare the account type (individual or small business) and profile details. Business accounts require a business name.",
    tags=["profile"],
    request=ProfileSerializer,
    examples=[
        OpenApiExample(
            'Individual',
            value={'user_type': 'individual', 'full_name': 'Ada Obi', 'phone_number': '+2348012345678'},
            request_only=True
        ),
        OpenApiExample(
            'Small Business',
            value={'user_type': 'business', 'full_name': 'Ada Obi', 'business_name': 'Ada Fabrics'},
            request_only=True
        ),
    ],
    responses={201: ProfileSerializer, 400: {'description': 'Validation error or already onboarded'}}
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def onboarding(request):
    """
    Create the profile for the authenticated user

    POST /api/auth/onboarding/
    """
    if request.user.is_onboarded:
        return Response({
            "status": "error",
            "message": "Profile already exists. Update it instead."
        }, status=status.HTTP_400_BAD_REQUEST)

    serializer = ProfileSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    profile = serializer.save(user=request.user)
    logger.info(f"Onboarding completed for {request.user.email} as {profile.user_type}")
    return Response(ProfileSerializer(profile).data, status=status.HTTP_201_CREATED)


@extend_schema(
    summary="Get or update profile",
    description="GET returns the profile. PATCH partially updates it. Returns 404 with onboarding_required when no profile exists yet.",
    tags=["profile"],
    request=ProfileSerializer,
    responses={200: ProfileSerializer}
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def profile_view(request):
    """
    GET /api/auth/profile/
    PATCH /api/auth/profile/
    """
    if not request.user.is_onboarded:
        return Response({
            'error': 'No profile found. Complete onboarding first.',
            'onboarding_required': True,
        }, status=status.HTTP_404_NOT_FOUND)

    profile = request.user.profile
    if request.method == 'GET':
        return Response(ProfileSerializer(profile).data)

    serializer = ProfileSerializer(profile, data=request.data, partial=True)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    serializer.save()
    return Response(serializer.data)


@extend_schema(
    summary="Get current user",
    description="Get the authenticated user's account details.",
    tags=["auth"],
    responses={200: UserSerializer}
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def me(request):
    return Response(UserSerializer(request.user).data)


@extend_schema(
    summary="Change password",
    description="Change password for the authenticated user. Requires old password verification.",
    tags=["auth"],
    request=ChangePasswordSerializer,
    examples=[
        OpenApiExample(
            'Change Password',
            value={
                'old_password': 'currentPassword',
                'new_password': 'newSecurePassword123',
                'new_password_confirm': 'newSecurePassword123'
            },
            request_only=True
        )
    ],
    responses={
        200: {'description': 'Password changed successfully'},
        400: {'description': 'Invalid old password or passwords do not match'},
        401: {'description': 'Authentication required'}
    }
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password(request):
    """
    Change password for authenticated user

    POST /api/auth/change-password/
    {
        "old_password": "oldpassword",
        "new_password": "newpassword123",
        "new_password_confirm": "newpassword123"
    }
    """
    serializer = ChangePasswordSerializer(
        data=request.data,
        context={'request': request}
    )

    if serializer.is_valid():
        serializer.save()
        return Response({
            'message': 'Password changed successfully.'
        }, status=status.HTTP_200_OK)

    return Response({
        "status": "error",
        "message": first_error_message(serializer.errors)
    }, status=status.HTTP_400_BAD_REQUEST)
