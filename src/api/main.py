import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from src.adapters.host_memory import RulesConfig, create_host_services
from src.api.deps import get_host_services, get_redirect_settings, get_rules, get_settings
from src.api.middleware import GlobalRedirectMiddleware
from src.app_shell.config import validate_host_rules
from src.rules.models import Rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Load rules and validate on startup (fail-fast)
    try:
        rules = get_rules()
        validate_host_rules(rules)
        logger.info("Rules loaded from %s", settings.rules_path)
    except Exception as e:
        logger.critical("Rules load failed: %s", e)
        sys.exit(1)

    yield


def create_app(rules: Rules | None = None) -> FastAPI:
    """
    Build the app.

    With explicit rules the host services are built from them and the
    startup rules check is skipped; otherwise rules.yaml is loaded lazily.
    """
    if rules is None:
        app = FastAPI(title="Global Redirect", version="0.1.0", lifespan=lifespan)
        app.add_middleware(
            GlobalRedirectMiddleware,
            host_provider=get_host_services,
            settings_provider=get_redirect_settings,
        )
    else:
        host = create_host_services(rules.host)
        app = FastAPI(title="Global Redirect", version="0.1.0")
        app.add_middleware(
            GlobalRedirectMiddleware,
            host_provider=lambda: host,
            settings_provider=lambda: RulesConfig(rules.globalredirect),
        )

    @app.get("/health")
    def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "service": "api"}

    @app.get("/{path:path}")
    def page(path: str) -> dict[str, Any]:
        """Stand-in for the site's page router."""
        return {"path": "/" + path}

    return app


app = create_app()
