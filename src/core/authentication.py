"""Authentication helpers that bridge JWT middleware into DRF.

DRF's ``Request.user`` normally relies on its own authentication classes.
Since this project verifies bearer tokens in ``JWTAuthMiddleware``, this
module provides a lightweight authenticator that surfaces the user and token
claims already attached to the underlying Django request.
"""

from typing import Any, Optional, Tuple

from rest_framework.authentication import BaseAuthentication


class MiddlewareUserAuthentication(BaseAuthentication):
    """Expose ``request._request.user`` (set by middleware) to DRF.

    No credential parsing happens here. ``request.auth`` becomes the decoded
    token payload so views can revoke the presented token on logout.
    """

    def authenticate(self, request) -> Optional[Tuple[Any, Any]]:
        # DRF's Request wraps the original Django HttpRequest as ``._request``.
        django_request = getattr(request, "_request", None)
        if django_request is None:
            return None

        user = getattr(django_request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return None

        return user, getattr(django_request, "token_payload", None)

    def authenticate_header(self, request) -> str:
        """Advertise the bearer scheme so DRF answers 401 instead of 403."""
        return 'Bearer realm="api"'


__all__ = ["MiddlewareUserAuthentication"]
