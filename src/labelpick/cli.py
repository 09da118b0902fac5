"""CLI entrypoint for labelpick."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from .config import AppConfig, PickerConfig, check_output_tag, load_config
from .io_features import FeatureRepository
from .labels import format_label_lines, label_records
from .picker import LanguagePicker
from .scripts import script_of, script_subtag, siblings_of
from .util import setup_logging, write_json

LOGGER = logging.getLogger("labelpick.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="labelpick",
        description="Pick the display name of map features for a target language.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--config", default=None, help="Path to YAML config.")
        p.add_argument("--verbose", action="store_true", help="Enable debug logs.")

    def add_picker_options(p: argparse.ArgumentParser) -> None:
        p.add_argument("--name-tag", default=None, help="Local name tag, e.g. 'name'.")
        p.add_argument("--multi-tag", default=None, help="Prefix of namespaced tags, e.g. 'name:'.")
        p.add_argument(
            "--force-local",
            action="store_true",
            help="Ignore the target language and use the local name.",
        )
        p.add_argument(
            "--map",
            action="append",
            default=[],
            metavar="CODE=FALLBACK[,FALLBACK]",
            help="Fallback chain for a language. Can be repeated.",
        )

    pick_p = subparsers.add_parser("pick", help="Pick one value from TAG=VALUE pairs.")
    add_common(pick_p)
    add_picker_options(pick_p)
    pick_p.add_argument("lang", help="Target language code.")
    pick_p.add_argument("values", nargs="*", metavar="TAG=VALUE", help="Candidate names in order.")
    pick_p.add_argument("--explain", action="store_true", help="Also print the tier and tag used.")

    label_p = subparsers.add_parser("label", help="Label every feature of a vector dataset.")
    add_common(label_p)
    add_picker_options(label_p)
    label_p.add_argument("input", help="Input dataset (GeoJSON, GeoPackage, Shapefile...).")
    label_p.add_argument("output", help="Output dataset path.")
    label_p.add_argument("--lang", default=None, help="Target language code.")
    label_p.add_argument("--layer", default=None, help="Layer name for multi-layer inputs.")
    label_p.add_argument("--output-tag", default=None, help="Property receiving the label.")
    label_p.add_argument("--report", default=None, help="Write a JSON audit of the labeling.")

    scripts_p = subparsers.add_parser("scripts", help="Show the script classification of a code.")
    add_common(scripts_p)
    scripts_p.add_argument("code", help="Language code.")

    validate_p = subparsers.add_parser("validate", help="Validate a config file.")
    add_common(validate_p)

    return parser


def _parse_pairs(raw: Sequence[str]) -> list[tuple[str, str]]:
    pairs: list[tuple[str, str]] = []
    for item in raw:
        tag, sep, value = item.partition("=")
        if not sep or not tag:
            raise ValueError(f"Expected TAG=VALUE, got '{item}'")
        pairs.append((tag, value))
    return pairs


def _parse_map_args(raw: Sequence[str]) -> dict[str, tuple[str, ...]]:
    out: dict[str, tuple[str, ...]] = {}
    for item in raw:
        code, sep, fallbacks = item.partition("=")
        codes = tuple(part.strip() for part in fallbacks.split(",") if part.strip())
        if not sep or not code.strip() or not codes:
            raise ValueError(f"Expected CODE=FALLBACK[,FALLBACK], got '{item}'")
        out[code.strip()] = codes
    return out


def _load_app_config(args: argparse.Namespace) -> AppConfig:
    if args.config is None:
        return AppConfig.default()
    return load_config(args.config)


def _picker_config(base: PickerConfig, args: argparse.Namespace) -> PickerConfig:
    language_map = dict(base.language_map)
    language_map.update(_parse_map_args(args.map))
    return replace(
        base,
        name_tag=args.name_tag if args.name_tag is not None else base.name_tag,
        multi_tag=args.multi_tag if args.multi_tag is not None else base.multi_tag,
        force_local=bool(args.force_local) or base.force_local,
        language_map=language_map,
    )


def _run_pick(cfg: AppConfig, args: argparse.Namespace) -> int:
    picker = LanguagePicker(args.lang, _picker_config(cfg.picker, args))
    resolution = picker.new_resolver().add_values(_parse_pairs(args.values)).resolve()
    if not resolution.found:
        LOGGER.warning("No candidate values given; nothing to pick.")
        return 1
    if args.explain:
        print(f"{resolution.value}\t{resolution.tier.value}\t{resolution.tag}")
    else:
        print(resolution.value)
    return 0


def _run_label(cfg: AppConfig, args: argparse.Namespace) -> int:
    picker = LanguagePicker(args.lang, _picker_config(cfg.picker, args))
    labels_cfg = cfg.labels
    if args.output_tag is not None:
        labels_cfg = replace(labels_cfg, output_tag=args.output_tag)
    check_output_tag(labels_cfg, picker.config)

    repo = FeatureRepository(Path(args.input), layer=args.layer)
    frame = repo.load()
    report = label_records(repo.records(frame), picker, labels_cfg)
    for line in format_label_lines(report):
        LOGGER.info(line)
    if not report.ok:
        return 1

    repo.write(frame, report.records, Path(args.output))
    if args.report is not None:
        report_path = Path(args.report)
        write_json(report_path, report.to_dict())
        LOGGER.info("Label report written to %s", report_path)
    return 0


def _run_scripts(args: argparse.Namespace) -> int:
    script = script_of(args.code)
    if script is None:
        print(f"{args.code}\tLatin\tLatn")
        return 0
    siblings = ",".join(sorted(siblings_of(script)))
    print(f"{args.code}\t{script}\t{script_subtag(script)}\t{siblings}")
    return 0


def _run_validate(cfg: AppConfig) -> int:
    if cfg.source_path is None:
        LOGGER.error("validate requires --config.")
        return 1
    LOGGER.info("[INFO] Loaded config from %s", cfg.source_path)
    LOGGER.info(
        "[INFO] Picker: default_language=%s, name_tag=%s, multi_tag=%s, force_local=%s, "
        "language_map_entries=%d",
        cfg.picker.default_language,
        cfg.picker.name_tag,
        cfg.picker.multi_tag,
        cfg.picker.force_local,
        len(cfg.picker.language_map),
    )
    for code, fallbacks in sorted(cfg.picker.language_map.items()):
        if code in fallbacks:
            LOGGER.warning("[WARN] language_map.%s lists itself as a fallback", code)
    LOGGER.info("[OK] Validation completed with no errors.")
    return 0


def _dispatch(args: argparse.Namespace) -> int:
    try:
        cfg = _load_app_config(args)
    except (FileNotFoundError, ValueError) as exc:
        setup_logging(verbose=args.verbose)
        LOGGER.error("Config error: %s", exc)
        return 1
    setup_logging(cfg.logging.file, verbose=args.verbose, level=cfg.logging.level)

    command = str(args.command)
    try:
        if command == "pick":
            return _run_pick(cfg, args)
        if command == "label":
            return _run_label(cfg, args)
        if command == "scripts":
            return _run_scripts(args)
        if command == "validate":
            return _run_validate(cfg)
    except (FileNotFoundError, ValueError, RuntimeError) as exc:
        LOGGER.error("%s failed: %s", command, exc)
        return 1
    raise ValueError(f"Unknown command: {command}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    return _dispatch(args)


if __name__ == "__main__":
    raise SystemExit(main())
