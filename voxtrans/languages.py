"""
Language catalog.

The catalog is the fixed, ordered set of languages the application offers.
It is consulted by the orchestrator to validate request codes (unknown codes
fail closed) and by front ends to populate their selectors in display order.

Language tags are locale identifiers such as ``"pt-BR"``. Remote services
that only understand two-letter codes get the primary subtag via
``primary_subtag``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LanguageEntry:
    """A selectable language.

    Attributes:
        code: Language tag (e.g., "pt-BR")
        name: Display name in the language itself
        flag: Flag emoji shown next to the name
    """
    code: str
    name: str
    flag: str

    @property
    def label(self) -> str:
        return f"{self.flag} {self.name}"


LANGUAGES: tuple[LanguageEntry, ...] = (
    LanguageEntry("pt-BR", "Português", "🇧🇷"),
    LanguageEntry("en-US", "English", "🇺🇸"),
    LanguageEntry("es-ES", "Español", "🇪🇸"),
    LanguageEntry("fr-FR", "Français", "🇫🇷"),
    LanguageEntry("de-DE", "Deutsch", "🇩🇪"),
    LanguageEntry("it-IT", "Italiano", "🇮🇹"),
    LanguageEntry("ja-JP", "日本語", "🇯🇵"),
    LanguageEntry("zh-CN", "中文", "🇨🇳"),
)

_BY_CODE = {entry.code: entry for entry in LANGUAGES}

if len(_BY_CODE) != len(LANGUAGES):
    raise RuntimeError("Duplicate language codes in catalog")


def list_languages() -> tuple[LanguageEntry, ...]:
    """Return the catalog in display order."""
    return LANGUAGES


def get_language(code: str) -> LanguageEntry | None:
    """Look up a catalog entry by its exact tag."""
    return _BY_CODE.get(code)


def is_supported(code: str) -> bool:
    return code in _BY_CODE


def primary_subtag(tag: str) -> str:
    """Return the lower-cased primary subtag of a language tag.

    Example:
        >>> primary_subtag("pt-BR")
        'pt'
        >>> primary_subtag("zh_CN")
        'zh'
    """
    return tag.replace("_", "-").split("-", 1)[0].strip().lower()
