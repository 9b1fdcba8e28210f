"""
Testy dla ConfigLoader i NavigationConfig.

Testuje:
- Wczytanie defaults.yaml i mapy demo
- Nadpisania z sekcji `overrides` mapy (deep merge)
- Brakujące pliki
- Walidacja pasma warstw (z_index < row_sort_multiplier)
"""

import sys
from pathlib import Path

import pytest
import yaml

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hexnav.core.config_loader import ConfigLoader, NavigationConfig


DATA_PATH = Path(__file__).parent.parent / "data"


@pytest.fixture
def loader():
    return ConfigLoader(str(DATA_PATH))


@pytest.fixture
def custom_data(tmp_path):
    """Folder danych z mapą nadpisującą prędkość."""
    (tmp_path / "maps").mkdir()
    with open(tmp_path / "defaults.yaml", "w", encoding="utf-8") as f:
        yaml.safe_dump({
            "navigation": {"move_speed": 3.0, "arrival_epsilon": 0.01},
            "layout": {"cell_width": 1.0},
        }, f)
    with open(tmp_path / "maps" / "swamp.yaml", "w", encoding="utf-8") as f:
        yaml.safe_dump({
            "overrides": {"navigation": {"move_speed": 1.5}},
            "tiles": [{"position": [0, 0]}, {"position": [1, 0], "type": "blocked"}],
        }, f)
    return tmp_path


# ═══════════════════════════════════════════════════════════════════════════
# TEST: DEFAULTS
# ═══════════════════════════════════════════════════════════════════════════

def test_load_project_defaults(loader):
    config = loader.load_config()

    assert config.move_speed == 3.0
    assert config.arrival_epsilon == 0.001
    assert config.character_z_index == 10
    assert config.row_sort_multiplier == 100
    assert config.character_offset_y == 2.25
    assert config.storage_key == "WorldPosition"


def test_from_empty_dict_uses_class_defaults():
    assert NavigationConfig.from_dict({}) == NavigationConfig()


def test_missing_defaults_file(tmp_path):
    config = ConfigLoader(str(tmp_path)).load_config()

    assert config == NavigationConfig()


@pytest.mark.parametrize("multiplier, z_index", [(10, 10), (5, 10), (100, -1)])
def test_character_z_index_must_fit_below_row_multiplier(multiplier, z_index):
    with pytest.raises(ValueError):
        NavigationConfig(row_sort_multiplier=multiplier, character_z_index=z_index)


def test_map_override_breaking_row_band_raises(custom_data):
    with open(custom_data / "maps" / "flat.yaml", "w", encoding="utf-8") as f:
        yaml.safe_dump({
            "overrides": {"navigation": {"row_sort_multiplier": 5}},
            "tiles": [{"position": [0, 0]}],
        }, f)
    loader = ConfigLoader(str(custom_data))

    with pytest.raises(ValueError):
        loader.load_config("flat")
    assert loader.load_config("swamp").row_sort_multiplier == 100


# ═══════════════════════════════════════════════════════════════════════════
# TEST: MAPY
# ═══════════════════════════════════════════════════════════════════════════

def test_demo_map_available(loader):
    assert "demo" in loader.get_map_ids()
    assert len(loader.load_map("demo")) == 25


def test_load_map_returns_copies(loader):
    tiles = loader.load_map("demo")
    tiles[0]["type"] = "blocked"

    assert loader.load_map("demo")[0]["type"] == "walkable"


def test_missing_map_raises_key_error(loader):
    with pytest.raises(KeyError):
        loader.load_map("atlantis")
    with pytest.raises(KeyError):
        loader.load_config("atlantis")


def test_map_overrides_are_merged(custom_data):
    loader = ConfigLoader(str(custom_data))
    config = loader.load_config("swamp")

    assert config.move_speed == 1.5
    assert config.arrival_epsilon == 0.01  # z defaults, nie nadpisane
    assert loader.load_config().move_speed == 3.0


def test_deep_merge_keeps_nested_keys():
    merged = ConfigLoader._deep_merge(
        {"navigation": {"move_speed": 3.0, "arrival_epsilon": 0.001}},
        {"navigation": {"move_speed": 1.0}},
    )

    assert merged == {"navigation": {"move_speed": 1.0, "arrival_epsilon": 0.001}}


def test_reload_picks_up_changes(custom_data):
    loader = ConfigLoader(str(custom_data))
    assert loader.get_map_ids() == ["swamp"]

    with open(custom_data / "maps" / "forest.yaml", "w", encoding="utf-8") as f:
        yaml.safe_dump({"tiles": []}, f)
    loader.reload()

    assert loader.get_map_ids() == ["forest", "swamp"]
    assert loader.load_map("forest") == []
