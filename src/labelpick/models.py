"""Value types shared by the picker, labeling and CLI modules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Tier(str, Enum):
    """Stage of the resolution that produced a value."""

    EXACT = "exact"
    SCRIPT_SUFFIX = "script_suffix"
    SCRIPT_SIBLING = "script_sibling"
    ENGLISH = "english"
    ROMANIZED = "romanized"
    LOCAL = "local"
    FIRST = "first"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class TagScheme:
    """How language codes are spelled as feature tags.

    `name_tag` is the local name field (`name`), which also namespaces
    translated values as `name_<code>`. `multi_tag` is a raw prefix for
    schemes that only carry namespaced values (`pref_<code>` with `pref_`).
    """

    name_tag: str | None = None
    multi_tag: str | None = None

    def keys_for(self, code: str) -> tuple[str, ...]:
        keys = [code]
        if self.multi_tag:
            keys.append(f"{self.multi_tag}{code}")
        if self.name_tag:
            keys.append(f"{self.name_tag}_{code}")
        return tuple(keys)

    def bare_code(self, tag: str) -> str:
        """Strip the namespace prefix from a tag, if it carries one."""
        if self.name_tag:
            prefix = f"{self.name_tag}_"
            if tag.startswith(prefix) and len(tag) > len(prefix):
                return tag[len(prefix):]
        if self.multi_tag and tag.startswith(self.multi_tag) and len(tag) > len(self.multi_tag):
            return tag[len(self.multi_tag):]
        return tag

    def is_local(self, tag: str) -> bool:
        return bool(self.name_tag) and tag == self.name_tag


@dataclass(frozen=True, slots=True)
class Resolution:
    """Chosen value for one feature, with the tier and tag it came from."""

    value: str | None
    tier: Tier
    tag: str | None = None

    @property
    def found(self) -> bool:
        return self.tier is not Tier.NONE

    @classmethod
    def empty(cls) -> Resolution:
        return cls(value=None, tier=Tier.NONE, tag=None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "tier": self.tier.value,
            "tag": self.tag,
        }
