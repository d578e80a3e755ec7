"""
In-Memory Host Adapters.

Reference implementations of the host services the global redirect
component consults: path aliases, route table, URL language prefixes,
enabled modules, taxonomy terms and site state. Built from the `host`
section of rules.yaml for development and tests.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import urlencode

from src.components.globalredirect import (
    FRONT,
    RequestContext,
    RouteMatch,
    RouteNotFoundError,
    Term,
)
from src.rules.models import GlobalRedirectRules, HostRules

_PARAM = re.compile(r"\{[^/{}]+\}")


class InMemoryAliasManager:
    """Alias table keyed by language. Aliases without a language apply to all."""

    def __init__(self, aliases: list[tuple[str, str, str | None]] | None = None) -> None:
        self._by_alias: dict[tuple[str, str | None], str] = {}
        self._by_path: dict[tuple[str, str | None], str] = {}
        for system_path, alias, langcode in aliases or []:
            self.add(system_path, alias, langcode)

    def add(self, system_path: str, alias: str, langcode: str | None = None) -> None:
        system_path, alias = system_path.strip("/"), alias.strip("/")
        self._by_alias[(alias, langcode)] = system_path
        self._by_path.setdefault((system_path, langcode), alias)

    def get_system_path(self, path: str, langcode: str | None = None) -> str:
        for key in ((path, langcode), (path, None)):
            if key in self._by_alias:
                return self._by_alias[key]
        return path

    def get_path_alias(self, system_path: str, langcode: str | None = None) -> str:
        for key in ((system_path, langcode), (system_path, None)):
            if key in self._by_path:
                return self._by_path[key]
        return system_path


class RouteTable:
    """Route patterns such as "node/{node}" matched against system paths."""

    def __init__(self, routes: list[tuple[str, str, bool]] | None = None) -> None:
        self._routes: list[tuple[str, re.Pattern[str], bool]] = []
        self._admin: dict[str, bool] = {}
        for name, pattern, admin in routes or []:
            self.add(name, pattern, admin)

    def add(self, name: str, pattern: str, admin: bool = False) -> None:
        parts = _PARAM.split(pattern.strip("/"))
        regex = "[^/]+".join(re.escape(p) for p in parts)
        self._routes.append((name, re.compile(f"^{regex}$"), admin))
        self._admin[name] = admin

    def match(self, path: str) -> RouteMatch:
        path = path.strip("/") or FRONT
        for name, regex, admin in self._routes:
            if regex.match(path):
                return RouteMatch(route_name=name, path=path, admin=admin)
        raise RouteNotFoundError(path)

    def is_admin_route(self, route_name: str) -> bool:
        return self._admin.get(route_name, False)


class LanguageNegotiator:
    """URL prefix language negotiation."""

    def __init__(self, prefixes: dict[str, str], default_langcode: str = "en") -> None:
        self._prefixes = prefixes  # langcode -> prefix
        self._default = default_langcode

    def prefix_for(self, langcode: str) -> str:
        return self._prefixes.get(langcode, "")

    def negotiate(self, path_info: str) -> tuple[str, str]:
        """
        Split a request path into (langcode, path without prefix).

        The returned path carries no leading slash.
        """
        path = path_info.lstrip("/")
        first, _, rest = path.partition("/")
        for langcode, prefix in self._prefixes.items():
            if prefix and first == prefix:
                return langcode, rest
        return self._default, path


class PrefixUrlGenerator:
    """Builds "/<prefix>/<alias>?<query>" URLs for one language."""

    def __init__(
        self,
        aliases: InMemoryAliasManager,
        langcode: str = "en",
        prefix: str = "",
    ) -> None:
        self._aliases = aliases
        self._langcode = langcode
        self._prefix = prefix

    def url(self, path: str, query: dict[str, list[str]] | None = None) -> str:
        if path == FRONT:
            path = ""
        else:
            path = self._aliases.get_path_alias(path.strip("/"), self._langcode)

        url = "/" + "/".join(p for p in (self._prefix, path) if p)
        if query:
            url = f"{url}?{urlencode(query, doseq=True)}"
        return url


class StaticModuleRegistry:
    def __init__(self, modules: list[str] | None = None) -> None:
        self._modules = frozenset(modules or [])

    def module_exists(self, name: str) -> bool:
        return name in self._modules


class InMemoryTermStorage:
    def __init__(self, terms: list[Term] | None = None) -> None:
        self._terms = {t.id: t for t in terms or []}

    def load(self, term_id: int) -> Term | None:
        return self._terms.get(term_id)


class SiteState:
    def __init__(self, maintenance: bool = False) -> None:
        self._maintenance = maintenance

    def maintenance_mode(self) -> bool:
        return self._maintenance


class RouteAccessList:
    """Access checker that denies a fixed set of routes."""

    def __init__(self, denied_routes: list[str] | None = None) -> None:
        self._denied = frozenset(denied_routes or [])

    def check(self, route_name: str, request: RequestContext) -> bool:
        return route_name not in self._denied


class RulesConfig:
    """ConfigPort over the globalredirect rules section."""

    def __init__(self, rules: GlobalRedirectRules) -> None:
        self._rules = rules

    def get(self, key: str) -> object | None:
        return getattr(self._rules, key, None)


# --- Host Bundle ---


@dataclass
class HostServices:
    """All host adapters for one site."""

    aliases: InMemoryAliasManager
    routes: RouteTable
    languages: LanguageNegotiator
    modules: StaticModuleRegistry
    terms: InMemoryTermStorage
    state: SiteState
    access: RouteAccessList = field(default_factory=RouteAccessList)
    front_page: str = "node"

    def url_generator(self, langcode: str) -> PrefixUrlGenerator:
        return PrefixUrlGenerator(
            self.aliases,
            langcode=langcode,
            prefix=self.languages.prefix_for(langcode),
        )

    def is_front_page(self, current_path: str, langcode: str) -> bool:
        path = current_path.strip("/")
        if not path:
            return True
        return self.aliases.get_system_path(path, langcode) == self.front_page.strip("/")


def create_host_services(host: HostRules) -> HostServices:
    """Create in-memory host services from rules."""
    return HostServices(
        aliases=InMemoryAliasManager(
            [(a.system_path, a.alias, a.langcode) for a in host.aliases]
        ),
        routes=RouteTable([(r.name, r.path, r.admin) for r in host.routes]),
        languages=LanguageNegotiator(
            {lang.langcode: lang.prefix for lang in host.languages},
            default_langcode=host.default_language,
        ),
        modules=StaticModuleRegistry(host.modules),
        terms=InMemoryTermStorage(
            [Term(id=t.id, url=t.url, vocabulary=t.vocabulary) for t in host.terms]
        ),
        state=SiteState(host.maintenance_mode),
        access=RouteAccessList(host.denied_routes),
        front_page=host.front_page,
    )
