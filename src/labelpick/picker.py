"""Pick the best name for a target language from a feature's tagged names."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from .config import PickerConfig
from .models import Resolution, TagScheme, Tier
from .scripts import script_of, script_subtag, siblings_of

LOGGER = logging.getLogger("labelpick.picker")

ENGLISH = "en"
ROMANIZED_SUFFIX = "_rm"


class LanguagePicker:
    """Immutable per-request context: target language plus tagging options.

    Create one per requested language and call `new_resolver()` for every
    feature. Pickers hold no per-feature state and can be shared freely.
    """

    __slots__ = ("_config", "_target", "_chain", "_script", "_scheme", "_use_latin_fallback")

    def __init__(
        self,
        target_language: str | None,
        config: PickerConfig | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> None:
        if isinstance(config, PickerConfig):
            cfg = config
            if options:
                cfg = PickerConfig.from_options(
                    {
                        "default_language": cfg.default_language,
                        "name_tag": cfg.name_tag,
                        "multi_tag": cfg.multi_tag,
                        "force_local": cfg.force_local,
                        "language_map": dict(cfg.language_map),
                    },
                    **options,
                )
        else:
            cfg = PickerConfig.from_options(config, **options)

        target = target_language.strip() if isinstance(target_language, str) else ""
        self._config = cfg
        self._target = target or cfg.default_language
        fallbacks = cfg.fallbacks_for(self._target)
        self._chain = (self._target, *fallbacks)
        self._script = script_of(self._target)
        self._scheme = TagScheme(name_tag=cfg.name_tag, multi_tag=cfg.multi_tag)
        # A configured chain is the complete fallback list for its language.
        self._use_latin_fallback = self._script is None and not fallbacks
        LOGGER.debug(
            "Picker for '%s': chain=%s script=%s force_local=%s",
            self._target,
            list(self._chain),
            self._script or "Latin",
            cfg.force_local,
        )

    @property
    def config(self) -> PickerConfig:
        return self._config

    @property
    def target_language(self) -> str:
        return self._target

    @property
    def chain(self) -> tuple[str, ...]:
        return self._chain

    @property
    def script(self) -> str | None:
        return self._script

    @property
    def scheme(self) -> TagScheme:
        return self._scheme

    @property
    def force_local(self) -> bool:
        return self._config.force_local

    @property
    def uses_latin_fallback(self) -> bool:
        return self._use_latin_fallback

    def new_resolver(self) -> NameResolver:
        return NameResolver(self)

    def pick(self, pairs: Iterable[tuple[str, str]]) -> str | None:
        """Resolve one feature's pairs in a single call."""
        return self.new_resolver().add_values(pairs).get_result()

    def __repr__(self) -> str:
        return f"LanguagePicker({self._target!r}, chain={list(self._chain)!r})"


class NameResolver:
    """Single-use accumulator of (tag, value) pairs for one feature."""

    __slots__ = ("_picker", "_entries", "_result")

    def __init__(self, picker: LanguagePicker) -> None:
        self._picker = picker
        self._entries: list[tuple[str, str]] = []
        self._result: Resolution | None = None

    @property
    def entries(self) -> tuple[tuple[str, str], ...]:
        return tuple(self._entries)

    def add_value(self, tag: str, value: str) -> None:
        self._entries.append((tag, value))
        self._result = None

    def add_values(self, pairs: Iterable[tuple[str, str]]) -> NameResolver:
        for tag, value in pairs:
            self.add_value(tag, value)
        return self

    def get_result(self) -> str | None:
        return self.resolve().value

    def resolve(self) -> Resolution:
        if self._result is None:
            self._result = self._resolve()
        return self._result

    def _resolve(self) -> Resolution:
        if not self._entries:
            return Resolution.empty()

        picker = self._picker
        if not picker.force_local:
            found = self._lookup_chain(picker.chain)
            if found is None and picker.script is not None:
                found = self._script_fallback(picker.script)
            elif found is None and picker.uses_latin_fallback:
                found = self._latin_fallback()
            if found is not None:
                return found

        local = self._local()
        if local is not None:
            return local
        tag, value = self._entries[0]
        return Resolution(value=value, tier=Tier.FIRST, tag=tag)

    def _lookup(self, code: str) -> tuple[str, str] | None:
        keys = self._picker.scheme.keys_for(code)
        for tag, value in self._entries:
            if tag in keys:
                return tag, value
        return None

    def _lookup_chain(self, chain: Iterable[str]) -> Resolution | None:
        for code in chain:
            match = self._lookup(code)
            if match is not None:
                return Resolution(value=match[1], tier=Tier.EXACT, tag=match[0])
        return None

    def _script_fallback(self, script: str) -> Resolution | None:
        suffix = f"-{script_subtag(script)}"
        for tag, value in self._entries:
            if tag.endswith(suffix):
                return Resolution(value=value, tier=Tier.SCRIPT_SUFFIX, tag=tag)

        siblings = siblings_of(script)
        scheme = self._picker.scheme
        for tag, value in self._entries:
            if scheme.bare_code(tag).casefold() in siblings:
                return Resolution(value=value, tier=Tier.SCRIPT_SIBLING, tag=tag)
        return None

    def _latin_fallback(self) -> Resolution | None:
        match = self._lookup(ENGLISH)
        if match is not None:
            return Resolution(value=match[1], tier=Tier.ENGLISH, tag=match[0])
        for tag, value in self._entries:
            if tag.endswith(ROMANIZED_SUFFIX):
                return Resolution(value=value, tier=Tier.ROMANIZED, tag=tag)
        return None

    def _local(self) -> Resolution | None:
        scheme = self._picker.scheme
        if not scheme.name_tag:
            return None
        for tag, value in self._entries:
            if scheme.is_local(tag):
                return Resolution(value=value, tier=Tier.LOCAL, tag=tag)
        return None
