"""
Global redirect component - canonical URL redirects.

Decides whether an inbound request should be redirected to its canonical
URL before routing.

Invariants:
- I1: Rules run in fixed order and the first decision wins
- I2: At most one decision per request
- I3: Routed redirects are 301, uncacheable and policy approved
- I4: Missing routes never raise; the rule declines
"""

from __future__ import annotations

from dataclasses import dataclass

from ._checker import RedirectChecker
from ._impl import GlobalRedirectConfig, GlobalRedirectService
from .models import DecideRedirectInput, DecideRedirectOutput
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

CONFIG_KEYS = (
    "nonclean_to_clean",
    "deslash",
    "frontpage_redirect",
    "normalize_aliases",
    "term_path_handler",
    "ignore_admin_path",
    "access_check",
)


@dataclass(frozen=True)
class PolicyPorts:
    """Ports for the default RedirectChecker policy."""

    route_provider: RouteProviderPort | None = None
    state: StatePort | None = None
    access: AccessCheckerPort | None = None


def build_config(settings: ConfigPort | None) -> GlobalRedirectConfig:
    """Build config from the settings port. Missing keys keep defaults."""
    if settings is None:
        return GlobalRedirectConfig()

    values = {}
    for key in CONFIG_KEYS:
        value = settings.get(key)
        if value is not None:
            values[key] = bool(value)

    return GlobalRedirectConfig(**values)


def _create_service(
    aliases: AliasManagerPort,
    routes: RouteMatcherPort,
    urls: UrlGeneratorPort,
    policy: RedirectPolicyPort | None,
    policy_ports: PolicyPorts | None,
    modules: ModuleRegistryPort | None,
    terms: TermStoragePort | None,
    settings: ConfigPort | None,
) -> GlobalRedirectService:
    """Create redirect service from ports."""
    config = build_config(settings)

    if policy is None:
        ports = policy_ports or PolicyPorts()
        policy = RedirectChecker(
            route_provider=ports.route_provider,
            state=ports.state,
            access=ports.access,
            config=config,
        )

    return GlobalRedirectService(
        aliases=aliases,
        routes=routes,
        urls=urls,
        policy=policy,
        modules=modules,
        terms=terms,
        config=config,
    )


# --- Component Entry Points ---


def run_decide(
    inp: DecideRedirectInput,
    *,
    aliases: AliasManagerPort,
    routes: RouteMatcherPort,
    urls: UrlGeneratorPort,
    policy: RedirectPolicyPort | None = None,
    policy_ports: PolicyPorts | None = None,
    modules: ModuleRegistryPort | None = None,
    terms: TermStoragePort | None = None,
    settings: ConfigPort | None = None,
) -> DecideRedirectOutput:
    """
    Decide whether the request should be redirected.

    Config is read from the settings port on every call.

    Args:
        inp: Input containing the request context.
        aliases: Path alias resolver.
        routes: Route matcher.
        urls: URL generator for the request's language.
        policy: Optional redirect policy. Defaults to a RedirectChecker.
        policy_ports: Ports for the default RedirectChecker.
        modules: Optional module registry (forum term rule needs it).
        terms: Optional taxonomy term storage (forum term rule needs it).
        settings: Optional settings port.

    Returns:
        DecideRedirectOutput with the decision, or None when nothing fired.
    """
    service = _create_service(
        aliases, routes, urls, policy, policy_ports, modules, terms, settings
    )
    decision = service.decide(inp.request)
    return DecideRedirectOutput(decision=decision, success=True)


def run(
    inp: DecideRedirectInput,
    **ports: object,
) -> DecideRedirectOutput:
    """
    Main entry point for the global redirect component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, DecideRedirectInput):
        return run_decide(inp, **ports)  # type: ignore[arg-type]
    raise ValueError(f"Unknown input type: {type(inp)}")
