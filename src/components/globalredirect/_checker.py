"""
RedirectChecker - default redirect policy.

A routed redirect is allowed only when:
- the request method is GET or HEAD
- the site is not in maintenance mode
- the target is not an admin route (when ignore_admin_path is set)
- the current user can access the target route (when access_check is set)
"""

from __future__ import annotations

import logging

from ._impl import DEFAULT_CONFIG, GlobalRedirectConfig
from .models import RequestContext
from .ports import AccessCheckerPort, RouteProviderPort, StatePort

logger = logging.getLogger(__name__)

SAFE_METHODS = frozenset({"GET", "HEAD"})


class RedirectChecker:
    """Redirect policy backed by route metadata and site state."""

    def __init__(
        self,
        route_provider: RouteProviderPort | None = None,
        state: StatePort | None = None,
        access: AccessCheckerPort | None = None,
        config: GlobalRedirectConfig | None = None,
    ) -> None:
        self._route_provider = route_provider
        self._state = state
        self._access = access
        self._config = config or DEFAULT_CONFIG

    def can_redirect(self, route_name: str, request: RequestContext) -> bool:
        """Check if a redirect to route_name is allowed for this request."""
        if request.method.upper() not in SAFE_METHODS:
            return False

        if self._state is not None and self._state.maintenance_mode():
            return False

        if (
            self._config.ignore_admin_path
            and self._route_provider is not None
            and self._route_provider.is_admin_route(route_name)
        ):
            return False

        if self._config.access_check and self._access is not None:
            if not self._access.check(route_name, request):
                logger.debug("Access denied to route %s", route_name)
                return False

        return True
