import os
from functools import lru_cache
from pathlib import Path

from src.adapters.host_memory import HostServices, RulesConfig, create_host_services
from src.rules.loader import load_rules
from src.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(os.environ.get("GR_RULES_PATH", self.base_dir / "rules.yaml"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


# --- Host Services ---
@lru_cache
def get_host_services() -> HostServices:
    return create_host_services(get_rules().host)


def get_redirect_settings() -> RulesConfig:
    """Settings port for the globalredirect section, read per request."""
    return RulesConfig(get_rules().globalredirect)
