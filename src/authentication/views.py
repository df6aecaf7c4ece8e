"""Authentication endpoints: register, login, logout, and current user."""

from typing import Any

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.response import BaseAPIView, api_response
from .serializers import LoginSerializer, RegisterSerializer, UserDetailSerializer
from .services import AuthService


class RegisterView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    @extend_schema(request=RegisterSerializer, auth=[])
    def post(self, request):
        """Register a new user and return their profile with a token."""
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, token = AuthService.register(**serializer.validated_data)
        return api_response(
            {"user": UserDetailSerializer(user).data, "token": token},
            status=status.HTTP_201_CREATED,
            message="User created successfully",
        )


class LoginView(BaseAPIView):
    permission_classes: list[Any] = []

    # noinspection PyMethodMayBeStatic
    @extend_schema(request=LoginSerializer, auth=[])
    def post(self, request):
        """Authenticate and issue a bearer token."""
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user, token = AuthService.login(request, **serializer.validated_data)
        return api_response(
            {"token": token, "user": UserDetailSerializer(user).data},
            message="Login successful",
        )


class LogoutView(BaseAPIView):
    """Invalidate the current token by blocklisting its jti."""

    permission_classes = [IsAuthenticated]

    # noinspection PyMethodMayBeStatic
    @extend_schema(request=None, responses={204: None})
    def post(self, request):
        """Blocklist the bearer token and return 204 No Content."""
        AuthService.logout(request.auth)
        # 204 responses must not include a body.
        return Response(status=status.HTTP_204_NO_CONTENT)


class MeView(BaseAPIView):
    permission_classes = [IsAuthenticated]

    # noinspection PyMethodMayBeStatic
    @extend_schema(responses=UserDetailSerializer)
    def get(self, request):
        """Return the current user's profile."""
        return api_response(UserDetailSerializer(request.user).data)
