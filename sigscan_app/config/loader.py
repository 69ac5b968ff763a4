"""Configuration loader with layered parameter precedence."""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import DefaultConfig, SessionWindow, get_default_config


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with layered precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_settings(self) -> dict[str, Any]:
        """Load repository-level overrides from settings.yaml."""
        return self._read_yaml("settings.yaml")

    def load_symbol_config(self, symbol: str) -> dict[str, Any]:
        """Load symbol-specific configuration overrides."""
        symbols_config = self._read_yaml("symbols.yaml")
        return symbols_config.get("symbols", {}).get(symbol, {}) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        symbol: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with layered precedence.

        Priority order:
        1. Call-site overrides (highest priority)
        2. Symbol-specific overrides
        3. settings.yaml
        4. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_settings())

        if symbol:
            config = self._deep_merge(config, self.load_symbol_config(symbol))

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(
        self,
        symbol: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """Merge configuration and rebuild the typed parameter groups."""
        return config_from_dict(self.merge_config(symbol, overrides))

    def _read_yaml(self, filename: str) -> dict[str, Any]:
        path = self.config_dir / filename

        if not path.exists():
            return {}

        with open(path) as f:
            loaded = yaml.safe_load(f)

        return loaded if isinstance(loaded, dict) else {}

    def _dataclass_to_dict(self, obj: Any) -> Any:
        """Convert nested dataclasses to plain dicts and lists."""
        if hasattr(obj, '__dataclass_fields__'):
            return {
                field_name: self._dataclass_to_dict(getattr(obj, field_name))
                for field_name in obj.__dataclass_fields__
            }
        if isinstance(obj, tuple):
            return [self._dataclass_to_dict(item) for item in obj]
        return obj

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def config_from_dict(config: dict[str, Any]) -> DefaultConfig:
    """
    Rebuild a DefaultConfig from a merged configuration dict.

    Unknown keys are ignored; groups or keys that are absent keep their
    defaults. YAML lists become tuples so the result stays hashable.
    """
    defaults = get_default_config()
    groups = {}

    for group_field in fields(DefaultConfig):
        default_group = getattr(defaults, group_field.name)
        group_values = config.get(group_field.name) or {}
        kwargs = {}

        for param in fields(default_group):
            if param.name not in group_values:
                continue
            value = group_values[param.name]
            if param.name == "windows":
                value = tuple(
                    w if isinstance(w, SessionWindow) else SessionWindow(**w)
                    for w in value
                )
            elif isinstance(value, list):
                value = tuple(value)
            kwargs[param.name] = value

        groups[group_field.name] = replace(default_group, **kwargs)

    return DefaultConfig(**groups)
