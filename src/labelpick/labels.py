"""Apply the picker to feature properties and keep an audit of the outcome."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence

from .config import LabelsConfig
from .models import Resolution, TagScheme, Tier
from .picker import LanguagePicker

LOGGER = logging.getLogger("labelpick.labels")


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def name_candidates(
    properties: Mapping[str, Any],
    scheme: TagScheme,
    *,
    exclude: Iterable[str] = (),
) -> list[tuple[str, str]]:
    """Collect (tag, value) name pairs from a feature, in property order.

    OSM colon keys (`name:en`) are reported in the underscore form the picker
    matches (`name_en`). Without a name tag or prefix every text property is
    treated as a bare language code.
    """
    skip = set(exclude)
    pairs: list[tuple[str, str]] = []
    for key, value in properties.items():
        if not isinstance(key, str) or key in skip or not _is_text(value):
            continue
        tag = _candidate_tag(key, scheme)
        if tag is not None:
            pairs.append((tag, value))
    return pairs


def _candidate_tag(key: str, scheme: TagScheme) -> str | None:
    if not scheme.name_tag and not scheme.multi_tag:
        return key
    if scheme.name_tag:
        if key == scheme.name_tag or key.startswith(f"{scheme.name_tag}_"):
            return key
        colon = f"{scheme.name_tag}:"
        if key.startswith(colon) and len(key) > len(colon):
            return f"{scheme.name_tag}_{key[len(colon):]}"
    if scheme.multi_tag and key.startswith(scheme.multi_tag):
        return key
    return None


def label_feature(
    properties: Mapping[str, Any],
    picker: LanguagePicker,
    labels_cfg: LabelsConfig,
) -> tuple[dict[str, Any], Resolution]:
    """Return a labeled copy of the properties and the resolution behind it."""
    output_tag = labels_cfg.output_tag
    candidates = name_candidates(properties, picker.scheme, exclude=(output_tag,))
    resolution = picker.new_resolver().add_values(candidates).resolve()

    if labels_cfg.keep_source_tags:
        labeled = dict(properties)
    else:
        source_keys = {key for key in properties if key != output_tag and _is_source_key(key, picker.scheme)}
        labeled = {key: value for key, value in properties.items() if key not in source_keys}
    labeled[output_tag] = resolution.value
    return labeled, resolution


def _is_source_key(key: Any, scheme: TagScheme) -> bool:
    if not isinstance(key, str):
        return False
    if not scheme.name_tag and not scheme.multi_tag:
        return False
    return _candidate_tag(key, scheme) is not None


@dataclass(slots=True)
class LabelReport:
    """Outcome of labeling a batch of features."""

    target_language: str
    records: list[dict[str, Any]] = field(default_factory=list)
    resolutions: list[Resolution] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    infos: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def tier_counts(self) -> dict[str, int]:
        counts = Counter(res.tier.value for res in self.resolutions)
        return {tier.value: counts.get(tier.value, 0) for tier in Tier}

    @property
    def unlabeled(self) -> int:
        return sum(1 for res in self.resolutions if not res.found)

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)

    def add_info(self, msg: str) -> None:
        self.infos.append(msg)

    def to_dict(self) -> dict[str, Any]:
        return {
            "target_language": self.target_language,
            "features_total": len(self.resolutions),
            "unlabeled": self.unlabeled,
            "tier_counts": self.tier_counts,
            "features": [res.to_dict() for res in self.resolutions],
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def label_records(
    records: Iterable[Mapping[str, Any]],
    picker: LanguagePicker,
    labels_cfg: LabelsConfig,
) -> LabelReport:
    """Label every record with the value picked for the picker's language."""
    report = LabelReport(target_language=picker.target_language)
    for idx, properties in enumerate(records):
        labeled, resolution = label_feature(properties, picker, labels_cfg)
        report.records.append(labeled)
        report.resolutions.append(resolution)
        if not resolution.found:
            LOGGER.debug("Feature %d has no name values; left unlabeled", idx)

    report.add_info(f"Labeled {len(report.records)} features for '{picker.target_language}'")
    if report.records and report.unlabeled == len(report.records):
        report.add_warning(
            "No feature carried a name value. Check the name_tag/multi_tag settings "
            f"(name_tag={picker.scheme.name_tag!r}, multi_tag={picker.scheme.multi_tag!r})."
        )
    return report


def format_label_lines(report: LabelReport) -> Sequence[str]:
    lines: list[str] = []
    lines.extend(f"[INFO] {msg}" for msg in report.infos)
    lines.extend(f"[WARN] {msg}" for msg in report.warnings)
    lines.extend(f"[ERROR] {msg}" for msg in report.errors)
    if report.resolutions:
        counts = report.tier_counts
        lines.append(
            "[INFO] Label summary: "
            + ", ".join(f"{tier}={count}" for tier, count in counts.items())
        )
    if report.ok:
        lines.append("[OK] Labeling completed with no errors.")
    return lines
