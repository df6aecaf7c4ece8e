"""User ViewSet: public profiles, self-service updates and account deletion."""

from django.conf import settings
from drf_spectacular.utils import extend_schema
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny

from access_control.permissions import IsAdmin, IsOwnerOrAdmin
from articles.serializers import ArticleListSerializer
from core.errors import NotFound
from core.response import BaseViewSet, api_response
from core.utils import parse_uuid
from .serializers import ProfileUpdateSerializer, UserSummarySerializer
from .services import ProfileService


class UserViewSet(BaseViewSet):
    """Profiles are readable by anyone; only the owner may change or delete one.

    Administrators get no override here: an admin cannot edit or delete
    another user's account.
    """

    permission_classes = [IsOwnerOrAdmin]
    owner_field = "id"
    admin_bypass_actions: tuple[str, ...] = ()
    lookup_url_kwarg = "user_id"
    serializer_class = UserSummarySerializer

    def get_permissions(self):
        if self.action == "list":
            if getattr(settings, "USER_LIST_REQUIRES_ADMIN", False):
                return [IsAdmin()]
            return [AllowAny()]
        if self.action in ("retrieve", "articles"):
            return [AllowAny()]
        return super().get_permissions()

    def get_queryset(self):
        return ProfileService.active_users()

    def get_object(self):
        """Resolve an active user by id; 404 before 403."""
        user_id = parse_uuid(self.kwargs[self.lookup_url_kwarg])
        user = self.get_queryset().filter(pk=user_id).first() if user_id else None
        if user is None:
            raise NotFound("User not found.")
        self.check_object_permissions(self.request, user)
        return user

    def list(self, request, *args, **kwargs):
        """Active users with their published article counts, newest first."""
        return api_response(UserSummarySerializer(self.get_queryset(), many=True).data)

    def retrieve(self, request, *args, **kwargs):
        return api_response(UserSummarySerializer(self.get_object()).data)

    @extend_schema(request=ProfileUpdateSerializer, responses=UserSummarySerializer)
    def partial_update(self, request, *args, **kwargs):
        user = self.get_object()
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        ProfileService.update(user, serializer.validated_data)
        user = self.get_queryset().get(pk=user.pk)
        return api_response(UserSummarySerializer(user).data, message="Profile updated successfully")

    def destroy(self, request, *args, **kwargs):
        """Soft-delete the account and every article it authored."""
        ProfileService.soft_delete(self.get_object())
        return api_response(None, message="User account deleted successfully")

    @extend_schema(responses=ArticleListSerializer(many=True))
    @action(detail=True, methods=["get"])
    def articles(self, request, *args, **kwargs):
        """The user's articles; the author and admins also see drafts."""
        author = self.get_object()
        return api_response(
            ArticleListSerializer(ProfileService.articles_visible_to(author, request.user), many=True).data
        )


__all__ = ["UserViewSet"]
