"""
Pytest configuration and shared fixtures.
"""

import pytest
from pathlib import Path
from typing import Any, Dict, List, Tuple


@pytest.fixture
def kyiv_names() -> List[Tuple[str, str]]:
    """Name tags of a city feature in the `name`/`name_<code>` scheme."""
    return [
        ("name", "Київ"),
        ("name_en", "Kyiv"),
        ("name_ru", "Киев"),
        ("name_he", "קייב"),
        ("name_pl", "Kijów"),
    ]


@pytest.fixture
def place_properties() -> List[Dict[str, Any]]:
    """Feature properties as read from an OSM-derived layer."""
    return [
        {"osm_id": 1, "name": "Київ", "name:en": "Kyiv", "name:ru": "Киев", "population": 2952301},
        {"osm_id": 2, "name": "ירושלים", "name:en": "Jerusalem", "name:ar": "القدس"},
        {"osm_id": 3, "population": 12},
    ]


@pytest.fixture
def config_file(tmp_path) -> Path:
    """A complete labelpick config with a separate language map file."""
    map_file = tmp_path / "language_map.yaml"
    map_file.write_text("yi: he\nlad: [es, he]\n", encoding="utf-8")
    cfg = tmp_path / "labelpick.yaml"
    cfg.write_text(
        "\n".join(
            [
                "picker:",
                "  default_language: fr",
                "  name_tag: name",
                "  language_map_file: language_map.yaml",
                "  language_map:",
                "    gan: [gan-hant, zh-hant, zh-hans]",
                "    lad: es",
                "labels:",
                "  output_tag: label",
                "  keep_source_tags: false",
                "logging:",
                "  level: debug",
                "",
            ]
        ),
        encoding="utf-8",
    )
    return cfg
