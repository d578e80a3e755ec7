import logging

from src.adapters.host_memory import create_host_services
from src.components.globalredirect import RouteNotFoundError
from src.rules.models import Rules

logger = logging.getLogger(__name__)


def validate_host_rules(rules: Rules) -> None:
    """
    Validate host configuration before startup.
    Raises ValueError listing every problem found.
    """
    host = create_host_services(rules.host)
    problems = []

    # 1. Front page must be routable
    try:
        host.routes.match(rules.host.front_page)
    except RouteNotFoundError:
        problems.append(f"front page '{rules.host.front_page}' has no route")

    # 2. Every alias must point at a routable system path
    for alias in rules.host.aliases:
        try:
            host.routes.match(alias.system_path)
        except RouteNotFoundError:
            problems.append(f"alias '{alias.alias}' targets unrouted path '{alias.system_path}'")

    # 3. Language prefixes must be unique
    prefixes = [lang.prefix for lang in rules.host.languages]
    if len(prefixes) != len(set(prefixes)):
        problems.append("language prefixes must be unique")

    if problems:
        raise ValueError("Host rules invalid: " + "; ".join(problems))

    logger.info("Configuration Validated.")
