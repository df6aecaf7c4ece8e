"""Article ViewSet: public reads, author writes, admin moderation."""

from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated

from access_control.permissions import IsAdmin, IsOwnerOrAdmin
from core.errors import BadRequest, NotFound
from core.response import BaseViewSet, api_response
from core.utils import parse_uuid
from .models import Article
from .serializers import ArticleDetailSerializer, ArticleListSerializer, ArticleWriteSerializer
from .services import ArticleService

PUBLIC_ACTIONS = ("list", "retrieve", "search", "by_category")
ADMIN_ACTIONS = ("admin_list", "admin_detail")
UUID_PATTERN = r"[0-9a-fA-F-]{36}"


class ArticleViewSet(BaseViewSet):
    """CRUD endpoints for articles.

    The public detail route is addressed by slug; every mutating route is
    addressed by id and guarded by ``IsOwnerOrAdmin``. Admins may delete any
    article but cannot edit or (un)publish articles they did not write.
    """

    permission_classes = [IsOwnerOrAdmin]
    owner_field = "author_id"
    admin_bypass_actions = ("destroy",)
    lookup_url_kwarg = "id_or_slug"

    def get_permissions(self):
        if self.action in PUBLIC_ACTIONS:
            return [AllowAny()]
        if self.action == "create":
            return [IsAuthenticated()]
        if self.action in ADMIN_ACTIONS:
            return [IsAdmin()]
        return super().get_permissions()

    def get_queryset(self):
        articles = Article.objects.select_related("author")
        if self.action in PUBLIC_ACTIONS:
            return articles.published()
        return articles.active()

    def get_serializer_class(self):
        if self.action in ("create", "update", "partial_update"):
            return ArticleWriteSerializer
        if self.action in ("list", "search", "by_category", "admin_list"):
            return ArticleListSerializer
        return ArticleDetailSerializer

    def get_object(self):
        """Resolve by slug for public detail, by id otherwise; 404 before 403."""
        lookup = self.kwargs[self.lookup_url_kwarg]
        queryset = self.get_queryset()
        if self.action == "retrieve":
            article = queryset.filter(slug=lookup).first()
        else:
            article_id = parse_uuid(lookup)
            article = queryset.filter(pk=article_id).first() if article_id else None
        if article is None:
            raise NotFound("Article not found.")
        self.check_object_permissions(self.request, article)
        return article

    def _list_response(self, queryset):
        return api_response(ArticleListSerializer(queryset, many=True).data)

    def list(self, request, *args, **kwargs):
        """Published articles, newest first."""
        return self._list_response(self.get_queryset().order_by("-created_at"))

    def retrieve(self, request, *args, **kwargs):
        return api_response(ArticleDetailSerializer(self.get_object()).data)

    def create(self, request, *args, **kwargs):
        serializer = ArticleWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        article = ArticleService.create(request.user, serializer.validated_data)
        return api_response(
            ArticleDetailSerializer(article).data,
            status=status.HTTP_201_CREATED,
            message="Article created successfully",
        )

    def update(self, request, *args, **kwargs):
        article = self.get_object()
        # PUT and PATCH both accept any subset of the editable fields.
        serializer = ArticleWriteSerializer(article, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        article = ArticleService.update(article, serializer.validated_data)
        return api_response(ArticleDetailSerializer(article).data, message="Article updated successfully")

    def partial_update(self, request, *args, **kwargs):
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        article = self.get_object()
        ArticleService.soft_delete(article, request.user)
        return api_response(None, message="Article deleted successfully")

    @action(detail=True, methods=["patch"], url_path="publish")
    def publish(self, request, *args, **kwargs):
        """Toggle Draft <-> Published."""
        article = ArticleService.toggle_publish(self.get_object())
        state = "published" if article.published else "unpublished"
        return api_response(ArticleDetailSerializer(article).data, message=f"Article {state} successfully")

    @action(detail=False, methods=["get"])
    def search(self, request):
        query = request.query_params.get("q", "").strip()
        if not query:
            raise BadRequest("Search query 'q' is required.")
        return self._list_response(self.get_queryset().search(query).order_by("-created_at"))

    @action(detail=False, methods=["get"], url_path=r"category/(?P<category>[^/]+)")
    def by_category(self, request, category=None):
        return self._list_response(self.get_queryset().by_category(category).order_by("-created_at"))

    @action(detail=False, methods=["get"], url_path="admin/all")
    def admin_list(self, request):
        """Every active article, drafts included, most recently updated first."""
        return self._list_response(self.get_queryset().order_by("-updated_at"))

    @action(detail=False, methods=["get"], url_path=rf"admin/(?P<article_id>{UUID_PATTERN})")
    def admin_detail(self, request, article_id=None):
        article = self.get_queryset().filter(pk=parse_uuid(article_id)).first()
        if article is None:
            raise NotFound("Article not found.")
        return api_response(ArticleDetailSerializer(article).data)


__all__ = ["ArticleViewSet"]
