"""
Global redirect middleware.

Runs the global redirect component on every request before routing and
short-circuits with a redirect when a rule fires.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp

from src.adapters.host_memory import HostServices
from src.components.globalredirect import (
    ConfigPort,
    DecideRedirectInput,
    PolicyPorts,
    RequestContext,
    run_decide,
)

logger = logging.getLogger(__name__)


def build_request_context(request: Request, host: HostServices) -> RequestContext:
    """Build the read-only request view the rules work on."""
    path_info = request.url.path
    query_string = request.url.query
    uri = f"{path_info}?{query_string}" if query_string else path_info

    langcode, current_path = host.languages.negotiate(path_info)

    return RequestContext(
        uri=uri,
        path_info=path_info,
        current_path=current_path,
        query_string=query_string,
        method=request.method,
        langcode=langcode,
        is_front_page=host.is_front_page(current_path, langcode),
        is_exception=bool(getattr(request.state, "exception", False)),
    )


class GlobalRedirectMiddleware(BaseHTTPMiddleware):
    """
    Redirects non-canonical request URLs before they reach a route.

    On a redirect, request.state.page_cacheable carries the decision's
    cacheability for outer middleware (page caches) to honor. It is left
    unset on pass-through.
    """

    def __init__(
        self,
        app: ASGIApp,
        host_provider: Callable[[], HostServices],
        settings_provider: Callable[[], ConfigPort],
    ) -> None:
        super().__init__(app)
        self._host_provider = host_provider
        self._settings_provider = settings_provider

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        host = self._host_provider()
        ctx = build_request_context(request, host)

        result = run_decide(
            DecideRedirectInput(request=ctx),
            aliases=host.aliases,
            routes=host.routes,
            urls=host.url_generator(ctx.langcode),
            policy_ports=PolicyPorts(
                route_provider=host.routes,
                state=host.state,
                access=host.access,
            ),
            modules=host.modules,
            terms=host.terms,
            settings=self._settings_provider(),
        )

        decision = result.decision
        if decision is None:
            return await call_next(request)

        request.state.page_cacheable = decision.page_cacheable
        logger.debug("Redirecting %s %s to %s", request.method, ctx.uri, decision.url)
        return RedirectResponse(
            url=decision.url,
            status_code=decision.status_code,
            headers=decision.headers or None,
        )
