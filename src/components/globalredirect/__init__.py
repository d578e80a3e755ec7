"""
Global redirect component - canonical URL redirects before routing.
"""

from ._checker import RedirectChecker
from ._impl import (
    DEFAULT_RULES,
    FRONT,
    NO_CACHE_HEADERS,
    GlobalRedirectConfig,
    GlobalRedirectService,
    RedirectRule,
    RouteNotFoundError,
    clean_urls,
    create_global_redirect_service,
    deslash,
    forum_term,
    front_page,
    normalize_aliases,
)
from .component import PolicyPorts, build_config, run, run_decide
from .models import (
    DecideRedirectInput,
    DecideRedirectOutput,
    RedirectDecision,
    RedirectTarget,
    RequestContext,
    RouteMatch,
    RuleName,
    Term,
)
from .ports import (
    AccessCheckerPort,
    AliasManagerPort,
    ConfigPort,
    ModuleRegistryPort,
    RedirectPolicyPort,
    RouteMatcherPort,
    RouteProviderPort,
    StatePort,
    TermStoragePort,
    UrlGeneratorPort,
)

__all__ = [
    # Entry points
    "run",
    "run_decide",
    "PolicyPorts",
    "build_config",
    # Input / output models
    "DecideRedirectInput",
    "DecideRedirectOutput",
    "RedirectDecision",
    "RedirectTarget",
    "RequestContext",
    "RouteMatch",
    "RuleName",
    "Term",
    # Ports
    "AccessCheckerPort",
    "AliasManagerPort",
    "ConfigPort",
    "ModuleRegistryPort",
    "RedirectPolicyPort",
    "RouteMatcherPort",
    "RouteProviderPort",
    "StatePort",
    "TermStoragePort",
    "UrlGeneratorPort",
    # _impl re-exports
    "DEFAULT_RULES",
    "FRONT",
    "NO_CACHE_HEADERS",
    "GlobalRedirectConfig",
    "GlobalRedirectService",
    "RedirectChecker",
    "RedirectRule",
    "RouteNotFoundError",
    "clean_urls",
    "create_global_redirect_service",
    "deslash",
    "forum_term",
    "front_page",
    "normalize_aliases",
]
