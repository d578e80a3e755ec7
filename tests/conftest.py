from pathlib import Path

import pytest

from src.adapters.host_memory import HostServices, create_host_services
from src.rules.loader import load_rules
from src.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def rules() -> Rules:
    """Rules loaded from the shipped rules.yaml."""
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def host(rules: Rules) -> HostServices:
    return create_host_services(rules.host)
