"""
Global redirect component port definitions.

Every host service the rules consult is injected through one of these.
"""

from __future__ import annotations

from typing import Any, Protocol

from .models import RequestContext, RouteMatch, Term


class ConfigPort(Protocol):
    """Read access to the module's settings namespace."""

    def get(self, key: str) -> Any:
        """Get a setting value by key."""
        ...


class AliasManagerPort(Protocol):
    """Path alias resolver (system path <-> alias)."""

    def get_system_path(self, path: str, langcode: str | None = None) -> str:
        """Resolve an alias to its system path. Unknown paths come back unchanged."""
        ...

    def get_path_alias(self, system_path: str, langcode: str | None = None) -> str:
        """Get the alias for a system path. Unaliased paths come back unchanged."""
        ...


class ModuleRegistryPort(Protocol):
    """Enabled module lookup."""

    def module_exists(self, name: str) -> bool:
        """Check if a module is enabled."""
        ...


class TermStoragePort(Protocol):
    """Taxonomy term storage."""

    def load(self, term_id: int) -> Term | None:
        """Load a term by ID."""
        ...


class RouteMatcherPort(Protocol):
    """Route matching for paths."""

    def match(self, path: str) -> RouteMatch:
        """
        Match a system path to a route.

        Raises RouteNotFoundError when no route matches.
        """
        ...


class UrlGeneratorPort(Protocol):
    """URL generation (alias lookup plus language prefix)."""

    def url(self, path: str, query: dict[str, list[str]] | None = None) -> str:
        """Build the outbound URL for a system path or "<front>"."""
        ...


class RedirectPolicyPort(Protocol):
    """Gate deciding whether a routed redirect may be emitted."""

    def can_redirect(self, route_name: str, request: RequestContext) -> bool:
        """Check if redirecting to route_name is allowed for this request."""
        ...


# --- Ports used by the default policy ---


class RouteProviderPort(Protocol):
    """Route metadata lookup."""

    def is_admin_route(self, route_name: str) -> bool:
        """Check if a route is flagged as an admin route."""
        ...


class AccessCheckerPort(Protocol):
    """Route access checking for the current user."""

    def check(self, route_name: str, request: RequestContext) -> bool:
        """Check if the current user may access the route."""
        ...


class StatePort(Protocol):
    """Site state flags."""

    def maintenance_mode(self) -> bool:
        """Check if the site is in maintenance mode."""
        ...
