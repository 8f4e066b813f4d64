"""Configuration Management Package"""

import json
import sys
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Optional

from prdesc.analysis import AnalyzerConfig
from prdesc.git import UNRESOLVED_HEAD, UNRESOLVED_FAIL

VALID_UNRESOLVED = {UNRESOLVED_HEAD, UNRESOLVED_FAIL}

BASE_ENV_VAR = "PRDESC_BASE"


@dataclass
class Config:
    """User configuration with sensible defaults."""
    base_branch: str = "main"
    fallback_branches: list[str] = field(
        default_factory=lambda: ["origin/main", "origin/master", "master", "HEAD~1"]
    )
    unresolved_base: str = UNRESOLVED_HEAD  # "head" compares against HEAD, "fail" exits 1
    max_reviewers: int = 3
    reviewer_history_depth: int = 5  # Commits per file scanned for authors
    breaking_log_depth: int = 20  # Recent commits scanned for breaking markers
    max_removed_exports: int = 5
    suggest_reviewers: bool = True

    def to_dict(self) -> dict:
        return asdict(self)

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if not isinstance(self.base_branch, str) or not self.base_branch.strip():
            warnings.append(f"Invalid base_branch '{self.base_branch}', using '{defaults.base_branch}'")
            self.base_branch = defaults.base_branch

        if not isinstance(self.fallback_branches, list) or not all(isinstance(b, str) for b in self.fallback_branches):
            warnings.append(f"Invalid fallback_branches '{self.fallback_branches}', using defaults")
            self.fallback_branches = defaults.fallback_branches

        if self.unresolved_base not in VALID_UNRESOLVED:
            warnings.append(f"Invalid unresolved_base '{self.unresolved_base}', using '{defaults.unresolved_base}'")
            self.unresolved_base = defaults.unresolved_base

        for name in ('max_reviewers', 'reviewer_history_depth', 'breaking_log_depth', 'max_removed_exports'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                default = getattr(defaults, name)
                warnings.append(f"Invalid {name} '{value}', using {default}")
                setattr(self, name, default)

        if not isinstance(self.suggest_reviewers, bool):
            warnings.append(f"Invalid suggest_reviewers '{self.suggest_reviewers}', using {defaults.suggest_reviewers}")
            self.suggest_reviewers = defaults.suggest_reviewers

        return warnings

    def analyzer_config(self) -> AnalyzerConfig:
        return AnalyzerConfig(
            max_reviewers=self.max_reviewers,
            reviewer_history_depth=self.reviewer_history_depth,
            breaking_log_depth=self.breaking_log_depth,
            max_removed_exports=self.max_removed_exports,
            suggest_reviewers=self.suggest_reviewers,
        )

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        # Validate and print warnings to stderr
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_FILENAME = ".prdescrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        local_path = Path.cwd() / self.CONFIG_FILENAME
        if local_path.exists():
            self._config = self._load_from_file(local_path)
            self._config_path = local_path
            return self._config

        home_path = Path.home() / self.CONFIG_FILENAME
        if home_path.exists():
            self._config = self._load_from_file(home_path)
            self._config_path = home_path
            return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level value must be an object")
            return Config.from_dict(data)
        except (ValueError, IOError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def save(self, config: Config, global_config: bool = True) -> Path:
        path = Path.home() / self.CONFIG_FILENAME if global_config else Path.cwd() / self.CONFIG_FILENAME
        with open(path, 'w') as f:
            json.dump(config.to_dict(), f, indent=2)
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def save_config(config: Config, global_config: bool = True) -> Path:
    return _manager.save(config, global_config)


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "save_config",
    "get_config_path",
    "VALID_UNRESOLVED",
    "BASE_ENV_VAR",
]
