"""
GlobalRedirectService - canonical URL redirects before routing.

Runs an ordered list of independent rules against the inbound request.
The first rule that produces a decision wins.

Key behaviors:
- Rule order is fixed: clean URLs, deslash, front page, alias normalization,
  forum terms
- Each rule is toggled by its own config flag
- Routed redirects go through the redirect policy and carry no-cache headers
- Missing routes and policy denials decline silently
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from .models import (
    RedirectDecision,
    RedirectTarget,
    RequestContext,
    RuleName,
)
from .ports import (
    AliasManagerPort,
    ModuleRegistryPort,
    RedirectPolicyPort,
    RouteMatcherPort,
    TermStoragePort,
    UrlGeneratorPort,
)

logger = logging.getLogger(__name__)

FRONT = "<front>"

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, must-revalidate, post-check=0, pre-check=0",
}

TERM_PATH_PATTERN = re.compile(r"taxonomy/term/([0-9]+)$")

# --- Configuration ---


@dataclass(frozen=True)
class GlobalRedirectConfig:
    """Global redirect settings."""

    nonclean_to_clean: bool = True
    deslash: bool = True
    frontpage_redirect: bool = True
    normalize_aliases: bool = True
    term_path_handler: bool = True

    # Redirect policy
    ignore_admin_path: bool = True
    access_check: bool = False


DEFAULT_CONFIG = GlobalRedirectConfig()


# --- Errors ---


class RouteNotFoundError(LookupError):
    """No route matches a path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"No route found for '{path}'")
        self.path = path


# --- Rules ---


def clean_urls(service: GlobalRedirectService, ctx: RequestContext) -> RedirectDecision | None:
    """
    Strip index.php from the request URI.

    Matches the substring anywhere in the URI, so "/foo/index.phpxyz"
    becomes "/fooxyz". Not routed and not policy checked.

    Leading slashes and backslashes collapse to one "/", so the result is
    always a path on this host and never "//other.host".
    """
    if "index.php" not in ctx.uri:
        return None

    url = ctx.uri.replace("/index.php", "", 1)
    url = "/" + url.lstrip("/\\")

    if url == ctx.uri:
        return None

    return RedirectDecision(rule=RuleName.CLEAN_URLS, url=url, status_code=301)


def deslash(service: GlobalRedirectService, ctx: RequestContext) -> RedirectDecision | None:
    """Remove trailing slashes."""
    if ctx.path_info == "/" or not ctx.path_info.endswith("/"):
        return None

    path = ctx.current_path.strip("/")
    system_path = service.aliases.get_system_path(path, ctx.langcode)
    return service.set_response(RuleName.DESLASH, ctx, system_path)


def front_page(service: GlobalRedirectService, ctx: RequestContext) -> RedirectDecision | None:
    """Send any path configured as front page to the site root."""
    if not ctx.is_front_page:
        return None

    # Includes the language prefix
    front_uri = service.urls.url(FRONT)
    if front_uri == ctx.path_info:
        return None

    return service.set_response(RuleName.FRONT_PAGE, ctx, FRONT)


def normalize_aliases(
    service: GlobalRedirectService, ctx: RequestContext
) -> RedirectDecision | None:
    """Redirect system paths and stale aliases to the canonical alias."""
    # Front page and error pages are left alone
    if (
        ctx.is_front_page
        or ctx.is_exception
        or ctx.has_query_param("_exception_statuscode")
    ):
        return None

    system_path = service.aliases.get_system_path(ctx.current_path, ctx.langcode)
    alias = service.aliases.get_path_alias(system_path, ctx.langcode)
    alias_with_prefix = service.urls.url(alias)

    if alias_with_prefix == ctx.path_info:
        return None

    # URL generation adds the language prefix back
    return service.set_response(RuleName.NORMALIZE_ALIASES, ctx, system_path)


def forum_term(service: GlobalRedirectService, ctx: RequestContext) -> RedirectDecision | None:
    """Redirect taxonomy term paths to the term's own URL (e.g., forums)."""
    if service.modules is None or service.terms is None:
        return None
    if not service.modules.module_exists("taxonomy"):
        return None

    match = TERM_PATH_PATTERN.search(ctx.uri)
    if match is None:
        return None

    term = service.terms.load(int(match.group(1)))
    if term is None or term.url == ctx.path_info:
        return None

    system_path = service.aliases.get_system_path(term.url.lstrip("/"), ctx.langcode)
    return service.set_response(RuleName.FORUM_TERM, ctx, system_path)


RuleCheck = Callable[..., RedirectDecision | None]


@dataclass(frozen=True)
class RedirectRule:
    """A named check toggled by a config flag."""

    name: RuleName
    flag: str
    check: RuleCheck

    def is_enabled(self, config: GlobalRedirectConfig) -> bool:
        return bool(getattr(config, self.flag))


DEFAULT_RULES: tuple[RedirectRule, ...] = (
    RedirectRule(RuleName.CLEAN_URLS, "nonclean_to_clean", clean_urls),
    RedirectRule(RuleName.DESLASH, "deslash", deslash),
    RedirectRule(RuleName.FRONT_PAGE, "frontpage_redirect", front_page),
    RedirectRule(RuleName.NORMALIZE_ALIASES, "normalize_aliases", normalize_aliases),
    RedirectRule(RuleName.FORUM_TERM, "term_path_handler", forum_term),
)


# --- Global Redirect Service ---


class GlobalRedirectService:
    """
    Redirect decider.

    Host services are injected as ports; nothing is looked up globally.
    """

    def __init__(
        self,
        aliases: AliasManagerPort,
        routes: RouteMatcherPort,
        urls: UrlGeneratorPort,
        policy: RedirectPolicyPort,
        modules: ModuleRegistryPort | None = None,
        terms: TermStoragePort | None = None,
        config: GlobalRedirectConfig | None = None,
        rules: tuple[RedirectRule, ...] = DEFAULT_RULES,
    ) -> None:
        """Initialize service."""
        self.aliases = aliases
        self.routes = routes
        self.urls = urls
        self.policy = policy
        self.modules = modules
        self.terms = terms
        self._config = config or DEFAULT_CONFIG
        self._rules = rules

    @property
    def config(self) -> GlobalRedirectConfig:
        return self._config

    def decide(self, ctx: RequestContext) -> RedirectDecision | None:
        """
        Run enabled rules in order.

        Returns:
            The first decision produced, or None if no rule fired.
        """
        for rule in self._rules:
            if not rule.is_enabled(self._config):
                continue

            decision = rule.check(self, ctx)
            if decision is not None:
                logger.info(
                    "Global redirect %s: %s -> %s",
                    rule.name.value,
                    ctx.uri,
                    decision.url,
                )
                return decision

        return None

    def set_response(
        self,
        rule: RuleName,
        ctx: RequestContext,
        path: str,
    ) -> RedirectDecision | None:
        """
        Build a routed redirect to path if the policy allows it.

        Paths without a route (e.g., files) decline silently.
        """
        try:
            match = self.routes.match(path)
        except RouteNotFoundError:
            logger.debug("Global redirect %s: no route for %r", rule.value, path)
            return None

        target = RedirectTarget(
            path=match.path,
            route_name=match.route_name,
            query=ctx.query,
        )
        url = self.urls.url(target.path, target.query)

        if url == ctx.uri:
            return None

        if not self.policy.can_redirect(target.route_name, ctx):
            logger.debug(
                "Global redirect %s: policy denied route %s",
                rule.value,
                target.route_name,
            )
            return None

        return RedirectDecision(
            rule=rule,
            url=url,
            status_code=301,
            headers=dict(NO_CACHE_HEADERS),
            target=target,
            page_cacheable=False,
        )


# --- Factory ---


def create_global_redirect_service(
    aliases: AliasManagerPort,
    routes: RouteMatcherPort,
    urls: UrlGeneratorPort,
    policy: RedirectPolicyPort,
    modules: ModuleRegistryPort | None = None,
    terms: TermStoragePort | None = None,
    config: GlobalRedirectConfig | None = None,
) -> GlobalRedirectService:
    """Create a GlobalRedirectService."""
    return GlobalRedirectService(
        aliases=aliases,
        routes=routes,
        urls=urls,
        policy=policy,
        modules=modules,
        terms=terms,
        config=config,
    )
