"""
Global redirect component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import parse_qs

# --- Rule Names ---


class RuleName(str, Enum):
    """Redirect rules, in evaluation order."""

    CLEAN_URLS = "clean_urls"
    DESLASH = "deslash"
    FRONT_PAGE = "front_page"
    NORMALIZE_ALIASES = "normalize_aliases"
    FORUM_TERM = "forum_term"


# --- Host Models ---


@dataclass(frozen=True)
class RouteMatch:
    """A path matched to a named route."""

    route_name: str
    path: str
    admin: bool = False


@dataclass(frozen=True)
class Term:
    """Taxonomy term as seen by the redirect rules."""

    id: int
    url: str  # e.g., "/forum/3"
    vocabulary: str = "tags"


# --- Request Context ---


@dataclass(frozen=True)
class RequestContext:
    """
    Read-only view of the inbound request.

    path_info keeps the language prefix; current_path has it removed and
    carries no leading slash (e.g., "about" for "/fr/about").
    """

    uri: str  # request target: path plus "?query"
    path_info: str
    current_path: str
    query_string: str = ""
    method: str = "GET"
    langcode: str = "en"
    is_front_page: bool = False
    is_exception: bool = False

    @property
    def query(self) -> dict[str, list[str]]:
        """Parsed query string."""
        return parse_qs(self.query_string, keep_blank_values=True)

    def has_query_param(self, name: str) -> bool:
        return name in self.query


# --- Decision Models ---


@dataclass(frozen=True)
class RedirectTarget:
    """Routed redirect target."""

    path: str
    route_name: str
    query: dict[str, list[str]] = field(default_factory=dict)


@dataclass(frozen=True)
class RedirectDecision:
    """Redirect produced by a rule."""

    rule: RuleName
    url: str
    status_code: int = 301
    headers: dict[str, str] = field(default_factory=dict)
    target: RedirectTarget | None = None
    page_cacheable: bool = True


# --- Input / Output Models ---


@dataclass(frozen=True)
class DecideRedirectInput:
    """Input for deciding whether a request should be redirected."""

    request: RequestContext


@dataclass(frozen=True)
class DecideRedirectOutput:
    """Output of a redirect decision. decision is None when nothing fired."""

    decision: RedirectDecision | None
    success: bool = True

    @property
    def should_redirect(self) -> bool:
        return self.decision is not None
