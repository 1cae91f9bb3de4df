"""HTTP handlers (views) for registration, login, profile and KYC.

Domain errors raised by the services are mapped to responses by
config.exception_handler.
"""

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken

from accounts.domain import Profile
from accounts.handlers.serializers import (
    KycSerializer,
    LoginSerializer,
    ProfileSerializer,
    RegisterSerializer,
)
from accounts.services.factory import get_account_service


def session_body(profile: Profile) -> dict:
    """Tokens for a freshly authenticated account plus its profile."""
    refresh = RefreshToken.for_user(get_user_model().objects.get(pk=profile.user_id))
    return {
        "token": str(refresh.access_token),
        "refresh": str(refresh),
        "user": ProfileSerializer(profile).data,
    }


class RegisterView(APIView):
    """Handler for POST /api/users/register"""

    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        fields = serializer.validated_data
        profile = get_account_service().register(
            fields["name"],
            fields["email"],
            fields["password"],
            fields["role"],
        )
        return Response(session_body(profile), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """Handler for POST /api/users/login"""

    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = get_account_service().authenticate(
            serializer.validated_data["email"],
            serializer.validated_data["password"],
        )
        return Response(session_body(profile))


class ProfileView(APIView):
    """Handler for GET /api/users/profile"""

    def get(self, request: Request) -> Response:
        profile = get_account_service().get_profile(request.user.id)
        return Response(ProfileSerializer(profile).data)


class SubmitKycView(APIView):
    """Handler for POST /api/users/submit-kyc"""

    def post(self, request: Request) -> Response:
        serializer = KycSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        fields = serializer.validated_data
        profile = get_account_service().submit_kyc(
            request.user.id,
            fields["fullName"],
            fields["address"],
            fields["governmentId"],
        )
        return Response(ProfileSerializer(profile).data)
