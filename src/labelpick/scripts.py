"""Static script classification for language codes.

Languages that are not listed here are treated as Latin-script. The tables are
built once at import time and exposed read-only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# Script id -> ISO 15924 subtag, the conventional tag suffix (`name:sr-Cyrl`).
SCRIPT_SUBTAGS: Mapping[str, str] = MappingProxyType(
    {
        "Arabic": "Arab",
        "Armenian": "Armn",
        "Bengali": "Beng",
        "Canadian": "Cans",
        "Cherokee": "Cher",
        "Cyrillic": "Cyrl",
        "Devanagari": "Deva",
        "Ethiopic": "Ethi",
        "Georgian": "Geor",
        "Greek": "Grek",
        "Gujarati": "Gujr",
        "Gurmukhi": "Guru",
        "Hangul": "Kore",
        "HanSimplified": "Hans",
        "HanTraditional": "Hant",
        "Hebrew": "Hebr",
        "Japanese": "Jpan",
        "Kannada": "Knda",
        "Khmer": "Khmr",
        "Lao": "Laoo",
        "Malayalam": "Mlym",
        "Mongolian": "Mong",
        "Myanmar": "Mymr",
        "Nko": "Nkoo",
        "OlChiki": "Olck",
        "Oriya": "Orya",
        "Sinhala": "Sinh",
        "Syriac": "Syrc",
        "Tamil": "Taml",
        "Telugu": "Telu",
        "Thaana": "Thaa",
        "Thai": "Thai",
        "Tibetan": "Tibt",
        "Tifinagh": "Tfng",
    }
)

_SCRIPT_LANGUAGES: dict[str, tuple[str, ...]] = {
    "Arabic": (
        "ar", "arz", "ary", "acm", "apc", "ajp", "aeb", "azb", "bal", "bqi", "ckb",
        "fa", "glk", "ks", "ku-arab", "lrc", "mzn", "pnb", "ps", "sd", "skr", "ug", "ur",
    ),
    "Armenian": ("hy", "hyw"),
    "Bengali": ("as", "bn", "bpy"),
    "Canadian": ("cr", "iu"),
    "Cherokee": ("chr",),
    "Cyrillic": (
        "ab", "ady", "alt", "av", "ba", "be", "be-tarask", "bg", "bxr", "ce", "cu", "cv",
        "inh", "kbd", "kk", "koi", "krc", "kv", "ky", "lbe", "lez", "mdf", "mhr", "mk",
        "mrj", "myv", "os", "ru", "rue", "sah", "sr", "tg", "tt", "tyv", "udm", "uk", "xal",
    ),
    "Devanagari": ("bh", "bho", "dty", "hi", "kok", "mai", "mr", "ne", "new", "sa"),
    "Ethiopic": ("am", "gez", "ti"),
    "Georgian": ("ka", "xmf"),
    "Greek": ("el", "grc", "pnt"),
    "Gujarati": ("gu",),
    "Gurmukhi": ("pa",),
    "Hangul": ("ko", "ko-kp"),
    "HanSimplified": ("gan", "gan-hans", "wuu", "zh", "zh-cn", "zh-hans", "zh-sg"),
    "HanTraditional": (
        "gan-hant", "lzh", "yue", "zh-classical", "zh-hant", "zh-hk", "zh-mo",
        "zh-tw", "zh-yue",
    ),
    "Hebrew": ("he", "jrb", "lad-hebr", "yi"),
    "Japanese": ("ja",),
    "Kannada": ("kn", "tcy"),
    "Khmer": ("km",),
    "Lao": ("lo",),
    "Malayalam": ("ml",),
    "Mongolian": ("mn-mong",),
    "Myanmar": ("my", "shn"),
    "Nko": ("nqo",),
    "OlChiki": ("sat",),
    "Oriya": ("or",),
    "Sinhala": ("si",),
    "Syriac": ("arc", "syc"),
    "Tamil": ("ta",),
    "Telugu": ("te",),
    "Thaana": ("dv",),
    "Thai": ("th",),
    "Tibetan": ("bo", "dz"),
    "Tifinagh": ("zgh",),
}

LANGUAGE_SCRIPTS: Mapping[str, str] = MappingProxyType(
    {code: script for script, codes in _SCRIPT_LANGUAGES.items() for code in codes}
)

_SIBLINGS: Mapping[str, frozenset[str]] = MappingProxyType(
    {script: frozenset(codes) for script, codes in _SCRIPT_LANGUAGES.items()}
)

_SCRIPTS_BY_SUBTAG: Mapping[str, str] = MappingProxyType(
    {subtag.casefold(): script for script, subtag in SCRIPT_SUBTAGS.items()}
)

LATIN_SUBTAG = "Latn"


def script_of(code: str | None) -> str | None:
    """Return the script id for a language code, or None for Latin-script languages.

    An explicit script subtag wins (`sr-Latn` is Latin, `uz-Cyrl` is Cyrillic);
    otherwise the full code is looked up, then its primary language subtag.
    """
    if not code:
        return None
    normalized = code.strip().casefold()
    if normalized in LANGUAGE_SCRIPTS:
        return LANGUAGE_SCRIPTS[normalized]

    parts = normalized.split("-")
    for part in parts[1:]:
        if len(part) != 4:
            continue
        if part == LATIN_SUBTAG.casefold():
            return None
        if part in _SCRIPTS_BY_SUBTAG:
            return _SCRIPTS_BY_SUBTAG[part]
    return LANGUAGE_SCRIPTS.get(parts[0])


def is_latin(code: str | None) -> bool:
    return script_of(code) is None


def script_subtag(script: str) -> str:
    return SCRIPT_SUBTAGS[script]


def siblings_of(script: str | None) -> frozenset[str]:
    """Language codes known to be written in the given script."""
    if script is None:
        return frozenset()
    return _SIBLINGS.get(script, frozenset())
