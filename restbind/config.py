"""
Config system - Typed binding configuration with layered sources.

Merge precedence (later overrides earlier):
defaults < config file < .env file < environment variables < overrides
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass, fields
from pathlib import Path
import json
import logging
import os

from dotenv import dotenv_values

from .faults import ConfigInvalidFault

logger = logging.getLogger("restbind.config")


DEFAULT_LINK_TEMPLATE = "{{ path }}{% if query_params %}{{ '{?' ~ query_params ~ '}' }}{% endif %}"


@dataclass
class BindingConfig:
    """
    Configuration for transition template derivation and link rendering.

    Attributes:
        missing_namespace: Value written to ``<state>.namespace`` when the
            binding has no namespace
        link_template: Jinja2 template used to render transition links
        strict_namespaces: Raise when definitions sharing a path declare
            different namespaces
    """
    missing_namespace: str = ""
    link_template: str = DEFAULT_LINK_TEMPLATE
    strict_namespaces: bool = True


class ConfigLoader:
    """
    Loads and merges BindingConfig values from multiple sources.

    Example:
        config = ConfigLoader.load("restbind.yaml", env_file=".env")
    """

    def __init__(self, env_prefix: str = "RESTBIND_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        path: Optional[str] = None,
        env_file: Optional[str] = None,
        env_prefix: str = "RESTBIND_",
        overrides: Optional[Dict[str, Any]] = None,
    ) -> BindingConfig:
        """
        Load configuration from all sources and build a BindingConfig.

        Args:
            path: JSON or YAML config file
            env_file: Path to .env file
            env_prefix: Prefix for environment variables
            overrides: Manual overrides (highest precedence)

        Returns:
            Validated BindingConfig instance
        """
        loader = cls(env_prefix=env_prefix)

        if path:
            loader._load_file(Path(path))
        if env_file:
            loader._load_env_file(env_file)
        loader._load_from_env(os.environ)
        if overrides:
            loader.config_data.update(overrides)

        return loader.build()

    def _load_file(self, path: Path):
        """Load config from a JSON or YAML file."""
        if not path.exists():
            logger.debug("Config file %s not found, skipping", path)
            return

        with open(path) as f:
            if path.suffix in (".yaml", ".yml"):
                import yaml
                data = yaml.safe_load(f)
            else:
                data = json.load(f)

        if data:
            if not isinstance(data, dict):
                raise ConfigInvalidFault(str(path), "top-level value must be a mapping")
            self.config_data.update(data)

    def _load_env_file(self, path: str):
        """Load config from .env file."""
        if not Path(path).exists():
            logger.debug("Env file %s not found, skipping", path)
            return
        self._load_from_env(dotenv_values(path))

    def _load_from_env(self, environ):
        """Load prefixed variables, e.g. RESTBIND_MISSING_NAMESPACE."""
        for key, value in environ.items():
            if key.startswith(self.env_prefix) and value is not None:
                self.config_data[key[len(self.env_prefix):].lower()] = value

    def build(self) -> BindingConfig:
        """Instantiate BindingConfig from the merged data."""
        kwargs = {}

        for field_info in fields(BindingConfig):
            if field_info.name not in self.config_data:
                continue

            value = self.config_data[field_info.name]
            if field_info.type in (bool, "bool"):
                value = self._parse_bool(field_info.name, value)
            elif not isinstance(value, str):
                raise ConfigInvalidFault(
                    field_info.name,
                    f"expected str, got {type(value).__name__}",
                )
            kwargs[field_info.name] = value

        return BindingConfig(**kwargs)

    @staticmethod
    def _parse_bool(key: str, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            if value.lower() in ("true", "yes", "1"):
                return True
            if value.lower() in ("false", "no", "0"):
                return False
        raise ConfigInvalidFault(key, f"expected a boolean, got {value!r}")
