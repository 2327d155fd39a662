import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet

from utils.globals import Globals
from utils.logging_setup import get_logger

logger = get_logger("config")


@dataclass(frozen=True)
class DiscoverySettings:
    """Settings that control how strings files are found and grouped."""
    ignored_directories: FrozenSet[str] = field(default=Globals.DEFAULT_IGNORED_DIRECTORIES)
    extension: str = Globals.STRINGS_EXTENSION
    language_directory_suffix: str = Globals.LANGUAGE_DIRECTORY_SUFFIX
    max_workers: int = Globals.DEFAULT_MAX_WORKERS

    @classmethod
    def from_dict(cls, values: dict) -> 'DiscoverySettings':
        """Build settings from the "discovery" config section.

        Values of the wrong type are logged and replaced by the defaults.
        """
        defaults = cls()
        ignored = values.get("ignored_directories", defaults.ignored_directories)
        if not isinstance(ignored, (list, tuple, set, frozenset)) or not all(isinstance(n, str) for n in ignored):
            logger.warning(f"Invalid discovery.ignored_directories {ignored!r}, using defaults")
            ignored = defaults.ignored_directories

        extension = values.get("extension", defaults.extension)
        if not isinstance(extension, str) or not extension.startswith("."):
            logger.warning(f"Invalid discovery.extension {extension!r}, using {defaults.extension}")
            extension = defaults.extension

        suffix = values.get("language_directory_suffix", defaults.language_directory_suffix)
        if not isinstance(suffix, str) or suffix == "":
            logger.warning(f"Invalid discovery.language_directory_suffix {suffix!r}, "
                           f"using {defaults.language_directory_suffix}")
            suffix = defaults.language_directory_suffix

        max_workers = values.get("max_workers", defaults.max_workers)
        if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
            logger.warning(f"Invalid discovery.max_workers {max_workers!r}, using {defaults.max_workers}")
            max_workers = defaults.max_workers

        return cls(frozenset(ignored), extension, suffix, max_workers)


def merge_configs(default: dict, user: dict) -> dict:
    """Recursively merge two config dicts, values from user win."""
    merged = dict(default)
    for key, value in user.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """JSON configuration: shipped defaults overlaid with the user's overrides.

    Only the user file is ever written, so resetting a setting is a matter of
    deleting it from user_config.json.
    """
    CONFIGS_DIR_LOC = Path(__file__).parent.parent / "configs"

    def __init__(self, config_dir=None):
        self.config_dir = Path(config_dir) if config_dir else ConfigManager.CONFIGS_DIR_LOC
        self.default_config_path = self.config_dir / "default_config.json"
        self.user_config_path = self.config_dir / "user_config.json"
        self.user_config = {}
        self.config = self.load_config()

    def load_config(self) -> dict:
        default_config = self._load_json(self.default_config_path, "default")
        self.user_config = self._load_json(self.user_config_path, "user")
        return merge_configs(default_config, self.user_config)

    def _load_json(self, path: Path, label: str) -> dict:
        if not path.exists():
            return {}
        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not load {label} config {path}: {e}")
            return {}
        if not isinstance(loaded, dict):
            logger.warning(f"Ignoring {label} config {path}: top level is not an object")
            return {}
        return loaded

    def get(self, key: str, default=None):
        """Get a configuration value using dot notation, e.g. "discovery.max_workers"."""
        value = self.config
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return value

    def set(self, key: str, value) -> bool:
        """Store a value in the user config using dot notation.

        Returns:
            bool: True if the user config file was written
        """
        *parents, name = key.split('.')
        section = self.user_config
        for part in parents:
            if not isinstance(section.get(part), dict):
                section[part] = {}
            section = section[part]
        section[name] = value

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.user_config_path, 'w', encoding='utf-8') as f:
                json.dump(self.user_config, f, indent=4)
        except OSError as e:
            logger.error(f"Error saving user config {self.user_config_path}: {e}")
            return False
        self.config = self.load_config()
        return True

    def get_discovery_settings(self) -> DiscoverySettings:
        section = self.get("discovery", {})
        if not isinstance(section, dict):
            logger.warning(f"Ignoring discovery config {section!r}: not an object")
            section = {}
        return DiscoverySettings.from_dict(section)
