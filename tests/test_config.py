import json

from catalog.provider import LocalizationProvider
from utils.config import ConfigManager, DiscoverySettings


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


def test_user_config_overrides_defaults(tmp_path):
    write_json(tmp_path / "default_config.json",
               {"discovery": {"ignored_directories": ["Pods"], "max_workers": 1}})
    write_json(tmp_path / "user_config.json", {"discovery": {"max_workers": 4}})

    config = ConfigManager(tmp_path)

    assert config.get("discovery.ignored_directories") == ["Pods"]
    assert config.get("discovery.max_workers") == 4
    assert config.get("discovery.missing", "default") == "default"


def test_set_persists_user_config(tmp_path):
    config = ConfigManager(tmp_path)

    assert config.set("discovery.ignored_directories", ["Vendor"])

    saved = json.loads((tmp_path / "user_config.json").read_text(encoding="utf-8"))
    assert saved == {"discovery": {"ignored_directories": ["Vendor"]}}
    assert ConfigManager(tmp_path).get("discovery.ignored_directories") == ["Vendor"]


def test_broken_config_falls_back_to_empty(tmp_path):
    (tmp_path / "default_config.json").write_text("{not json", encoding="utf-8")
    assert ConfigManager(tmp_path).config == {}


def test_shipped_defaults():
    config = ConfigManager()
    assert set(config.get("discovery.ignored_directories")) == {"Pods", "Carthage", "build", ".framework"}
    assert config.get("discovery.extension") == ".strings"
    assert config.get("discovery.language_directory_suffix") == ".lproj"


def test_provider_reads_discovery_settings(tmp_path, write_file):
    config_dir = tmp_path / "configs"
    write_json(config_dir / "default_config.json",
               {"discovery": {"ignored_directories": ["Vendor"], "max_workers": 3}})
    write_file("project/Vendor/en.lproj/Localizable.strings", '"v" = "Vendor";')
    write_file("project/App/en.lproj/Localizable.strings", '"a" = "App";')

    provider = LocalizationProvider(config_manager=ConfigManager(config_dir))

    assert provider.ignored_directories == frozenset({"Vendor"})
    assert provider.max_workers == 3
    groups = provider.get_localizations(str(tmp_path / "project"))
    assert [group.path for group in groups] == [str(tmp_path / "project" / "App" / "Localizable.strings")]


def test_explicit_arguments_override_config(tmp_path):
    write_json(tmp_path / "default_config.json", {"discovery": {"ignored_directories": ["Vendor"]}})
    provider = LocalizationProvider(ignored_directories=["Other"], max_workers=2,
                                    config_manager=ConfigManager(tmp_path))
    assert provider.ignored_directories == frozenset({"Other"})
    assert provider.max_workers == 2


def test_invalid_discovery_values_fall_back_to_defaults(tmp_path):
    write_json(tmp_path / "default_config.json", {"discovery": {
        "ignored_directories": "Pods",
        "extension": "strings",
        "language_directory_suffix": "",
        "max_workers": 0,
    }})

    settings = ConfigManager(tmp_path).get_discovery_settings()

    assert settings == DiscoverySettings()


def test_set_writes_only_user_overrides(tmp_path):
    write_json(tmp_path / "default_config.json", {"discovery": {"extension": ".strings"}})
    config = ConfigManager(tmp_path)

    config.set("discovery.max_workers", 2)

    saved = json.loads((tmp_path / "user_config.json").read_text(encoding="utf-8"))
    assert saved == {"discovery": {"max_workers": 2}}
    assert config.get_discovery_settings().max_workers == 2
    assert config.get("discovery.extension") == ".strings"
