"""Typed configuration loader for `labelpick.yaml`."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, cast

import yaml

LOGGER = logging.getLogger("labelpick.config")

DEFAULT_LANGUAGE = "en"

# Option spellings accepted by `PickerConfig.from_options`, snake_case first.
_OPTION_ALIASES: dict[str, tuple[str, ...]] = {
    "default_language": ("default_language", "defaultLanguage"),
    "language_map": ("language_map", "languageMap"),
    "name_tag": ("name_tag", "nameTag"),
    "multi_tag": ("multi_tag", "multiTag"),
    "force_local": ("force_local", "forceLocal"),
}

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _mapping(value: Any, field_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"Expected mapping for '{field_name}'")
    return cast(Mapping[str, Any], value)


def _str(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Expected non-empty string for '{field_name}'")
    return value.strip()


def _optional_str(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    return _str(value, field_name)


def _bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Expected bool for '{field_name}'")
    return value


def _path_from_cfg(value: Any, field_name: str, root_dir: Path) -> Path:
    raw = _str(value, field_name)
    p = Path(raw)
    return p if p.is_absolute() else root_dir / p


def _fallback_codes(value: Any, field_name: str) -> tuple[str, ...]:
    if isinstance(value, str):
        return (_str(value, field_name),)
    if not isinstance(value, list):
        raise ValueError(f"Expected string or list for '{field_name}'")
    return tuple(_str(item, f"{field_name}[{idx}]") for idx, item in enumerate(value))


def parse_language_map(raw: Any, field_name: str = "language_map") -> dict[str, tuple[str, ...]]:
    """Strictly validate a language map: code -> code or list of codes."""
    if raw is None:
        return {}
    mapping = _mapping(raw, field_name)
    out: dict[str, tuple[str, ...]] = {}
    for code, value in mapping.items():
        key = _str(code, f"{field_name} key")
        out[key] = _fallback_codes(value, f"{field_name}.{key}")
    return out


def normalize_language_map(raw: Any) -> dict[str, tuple[str, ...]]:
    """Leniently normalize a language map, dropping entries it cannot use."""
    if not isinstance(raw, Mapping):
        if raw is not None:
            LOGGER.warning("Ignoring language map of type %s", type(raw).__name__)
        return {}
    out: dict[str, tuple[str, ...]] = {}
    for code, value in raw.items():
        if not isinstance(code, str):
            LOGGER.warning("Ignoring non-string language map key %r", code)
            continue
        if isinstance(value, str):
            out[code] = (value,)
        elif isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
            out[code] = tuple(value)
        else:
            LOGGER.warning("Ignoring language map entry for '%s': %r", code, value)
    return out


def load_language_map(path: Path) -> dict[str, tuple[str, ...]]:
    """Load a standalone language map file (YAML or JSON)."""
    if not path.exists():
        raise FileNotFoundError(f"Language map file not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    if raw is None:
        return {}
    return parse_language_map(raw, field_name=str(path))


@dataclass(frozen=True, slots=True)
class PickerConfig:
    default_language: str = DEFAULT_LANGUAGE
    name_tag: str | None = None
    multi_tag: str | None = None
    force_local: bool = False
    language_map: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "language_map", MappingProxyType(normalize_language_map(self.language_map))
        )

    def fallbacks_for(self, code: str) -> tuple[str, ...]:
        return self.language_map.get(code, ())

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], root_dir: Path) -> PickerConfig:
        language_map: dict[str, tuple[str, ...]] = {}
        map_file = raw.get("language_map_file")
        if map_file is not None:
            language_map.update(
                load_language_map(_path_from_cfg(map_file, "picker.language_map_file", root_dir))
            )
        language_map.update(parse_language_map(raw.get("language_map"), "picker.language_map"))

        default_language = raw.get("default_language", DEFAULT_LANGUAGE)
        force_local = raw.get("force_local", False)
        return cls(
            default_language=_str(default_language, "picker.default_language"),
            name_tag=_optional_str(raw.get("name_tag"), "picker.name_tag"),
            multi_tag=_optional_str(raw.get("multi_tag"), "picker.multi_tag"),
            force_local=_bool(force_local, "picker.force_local"),
            language_map=language_map,
        )

    @classmethod
    def from_options(cls, raw: Mapping[str, Any] | None = None, **overrides: Any) -> PickerConfig:
        """Build a config from loose options without raising.

        Accepts snake_case or camelCase keys (`nameTag`, `languageMap`...).
        Values of the wrong type fall back to the defaults.
        """
        if raw is not None and not isinstance(raw, Mapping):
            LOGGER.warning("Ignoring picker options of type %s", type(raw).__name__)
            raw = None
        merged: dict[str, Any] = {}
        for name, aliases in _OPTION_ALIASES.items():
            for alias in aliases:
                if raw is not None and alias in raw:
                    merged[name] = raw[alias]
                    break
        merged.update({k: v for k, v in overrides.items() if v is not None})

        def _loose_str(name: str) -> str | None:
            value = merged.get(name)
            return value if isinstance(value, str) and value else None

        return cls(
            default_language=_loose_str("default_language") or DEFAULT_LANGUAGE,
            name_tag=_loose_str("name_tag"),
            multi_tag=_loose_str("multi_tag"),
            force_local=merged.get("force_local") is True,
            language_map=normalize_language_map(merged.get("language_map")),
        )


@dataclass(frozen=True, slots=True)
class LabelsConfig:
    output_tag: str = "label"
    keep_source_tags: bool = True

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> LabelsConfig:
        return cls(
            output_tag=_str(raw.get("output_tag", "label"), "labels.output_tag"),
            keep_source_tags=_bool(raw.get("keep_source_tags", True), "labels.keep_source_tags"),
        )


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level: str = "INFO"
    file: Path | None = None

    @property
    def verbose(self) -> bool:
        return self.level == "DEBUG"

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], root_dir: Path) -> LoggingConfig:
        level = _str(raw.get("level", "INFO"), "logging.level").upper()
        if level not in _LOG_LEVELS:
            raise ValueError("logging.level must be one of: " + ", ".join(sorted(_LOG_LEVELS)))
        file_raw = raw.get("file")
        return cls(
            level=level,
            file=_path_from_cfg(file_raw, "logging.file", root_dir) if file_raw is not None else None,
        )


@dataclass(frozen=True, slots=True)
class AppConfig:
    source_path: Path | None
    picker: PickerConfig
    labels: LabelsConfig
    logging: LoggingConfig

    @classmethod
    def default(cls) -> AppConfig:
        return cls(
            source_path=None,
            picker=PickerConfig(),
            labels=LabelsConfig(),
            logging=LoggingConfig(),
        )

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any], source_path: Path) -> AppConfig:
        root_dir = source_path.parent.resolve()

        def _section(name: str) -> Mapping[str, Any]:
            value = raw.get(name)
            return {} if value is None else _mapping(value, name)

        picker = PickerConfig.from_mapping(_section("picker"), root_dir)
        labels = LabelsConfig.from_mapping(_section("labels"))
        check_output_tag(labels, picker)
        return cls(
            source_path=source_path.resolve(),
            picker=picker,
            labels=labels,
            logging=LoggingConfig.from_mapping(_section("logging"), root_dir),
        )


def check_output_tag(labels: LabelsConfig, picker: PickerConfig) -> None:
    """The label property must not overwrite the local name it is picked from."""
    if picker.name_tag is not None and labels.output_tag == picker.name_tag:
        raise ValueError(
            f"labels.output_tag cannot equal picker.name_tag ('{picker.name_tag}')"
        )


def load_config(path: str | Path) -> AppConfig:
    """Load and validate the YAML config file into typed settings."""
    cfg_path = Path(path).resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ValueError("Top-level config must be a YAML mapping")
    return AppConfig.from_mapping(cast(Mapping[str, Any], raw), cfg_path)
