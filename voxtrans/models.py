"""
Core data models for VoxTrans.

A translation call produces exactly one of two outcomes:

- ``TranslationResult``: a genuine translation tagged with the method that
  produced it (offline phrasebook or online service)
- ``TranslationFailure``: a named reason why no translation is available

Degraded states are never dressed up as translations. Consumers such as
playback and clipboard check ``outcome.ok`` before acting on any text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class TranslationMethod(Enum):
    """Which path answered a translation request."""
    OFFLINE = "offline"
    ONLINE = "online"

    @property
    def badge(self) -> str:
        return "🔒 Offline" if self is TranslationMethod.OFFLINE else "☁️ Online"


class FailureReason(Enum):
    """Why a translation request produced no translation."""
    EMPTY_INPUT = "empty_input"
    NO_LOCAL_MATCH = "no_local_match"
    OFFLINE_AND_UNREACHABLE = "offline_and_unreachable"
    REMOTE_ERROR = "remote_error"
    UNSUPPORTED_LANGUAGE = "unsupported_language"


FAILURE_MESSAGES: dict[FailureReason, str] = {
    FailureReason.EMPTY_INPUT: "",
    FailureReason.NO_LOCAL_MATCH: "No offline translation available for this phrase",
    FailureReason.OFFLINE_AND_UNREACHABLE: "Offline mode: translation limited to the local dictionary",
    FailureReason.REMOTE_ERROR: "Translation failed. Please try again.",
    FailureReason.UNSUPPORTED_LANGUAGE: "Unsupported language",
}


@dataclass(frozen=True)
class TranslationRequest:
    """A single translation request.

    Attributes:
        text: Text to translate (may be blank; blank text resolves to EMPTY_INPUT)
        source_lang: Source language tag (e.g., "pt-BR")
        target_lang: Target language tag (e.g., "en-US")
    """
    text: str
    source_lang: str
    target_lang: str

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    def swapped(self, text: str) -> TranslationRequest:
        """Return a request for the reverse direction with new input text."""
        return TranslationRequest(text, self.target_lang, self.source_lang)


@dataclass(frozen=True)
class TranslationResult:
    """A successful translation.

    Attributes:
        translated_text: The translation
        method: Whether the offline phrasebook or the online service answered
        source_text: The text as submitted
        source_lang: Source language tag
        target_lang: Target language tag
    """
    translated_text: str
    method: TranslationMethod
    source_text: str = ""
    source_lang: str = ""
    target_lang: str = ""

    @property
    def ok(self) -> bool:
        return True

    @property
    def message(self) -> str:
        return self.translated_text


@dataclass(frozen=True)
class TranslationFailure:
    """A translation request that produced no translation.

    Attributes:
        reason: Named failure kind
        detail: Diagnostic detail for logs (not shown to end users)
    """
    reason: FailureReason
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        """User-facing text for this failure."""
        return FAILURE_MESSAGES[self.reason]


TranslationOutcome = Union[TranslationResult, TranslationFailure]
