import os
from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from src.greenmarket.runtime.config.config_data import ConfigData
from src.greenmarket.runtime.config.config_template import load_templated_yaml

CONFIG_PATH_ENV = "GREENMARKET_CONFIG"


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def load_default_config() -> ConfigData:
    """Load config.yaml (or the file named by GREENMARKET_CONFIG).

    Missing files fall back to the built-in defaults so tooling and tests can
    import the package without a deployment configuration.
    """
    path = Path(os.getenv(CONFIG_PATH_ENV, "config.yaml"))
    if not path.exists():
        logger.warning("Configuration file {} not found; using defaults", path)
        return ConfigData()
    return load_templated_yaml(path)


# Populated on first use by the entry points (server, CLI); importing the
# package never reads the configuration file.
_app_context: ContextVar[AppContext | None] = ContextVar("app_context", default=None)


def get_context() -> AppContext:
    """Get the current application context, loading it on first access."""
    context = _app_context.get()
    if context is None:
        context = AppContext(config=load_default_config())
        _app_context.set(context)
    return context


def get_config() -> ConfigData:
    """Convenience function to get the current configuration.

    Returns:
        ConfigData: The current configuration from the app context.
    """
    return get_context().config
