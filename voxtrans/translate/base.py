"""
Online translator interface.

This module defines:
- Abstract OnlineTranslator interface that remote backends implement
- EchoTranslator, a local stand-in for tests and demos

Design Philosophy:
- Translators are stateless: they receive the text and language pair in each call
- Translators raise RemoteTranslationError for every failure; they never
  return the source text disguised as a translation
- Translators do not check connectivity; the orchestrator does that first
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from voxtrans.errors import RemoteTranslationError

__all__ = ["OnlineTranslator", "EchoTranslator", "RemoteTranslationError"]


class OnlineTranslator(ABC):
    """Abstract base class for network translation backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the translator name (e.g., 'mymemory')."""
        pass

    @abstractmethod
    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """Translate ``text`` between two language tags.

        Args:
            text: Source text
            source_lang: Source language tag (e.g., "pt-BR")
            target_lang: Target language tag (e.g., "en-US")

        Returns:
            The translated text

        Raises:
            RemoteTranslationError: if no translation could be obtained
        """
        pass


class EchoTranslator(OnlineTranslator):
    """Translator that answers without any network access.

    Modes:
    - 'prefix': prepend the target tag, e.g. "[en-US] texto"
    - 'echo': return the input unchanged
    - 'fail': always raise RemoteTranslationError
    """

    def __init__(self, mode: str = "prefix"):
        self.mode = mode
        self.calls: list[tuple[str, str, str]] = []

    @property
    def name(self) -> str:
        return f"echo-{self.mode}"

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        self.calls.append((text, source_lang, target_lang))
        if self.mode == "fail":
            raise RemoteTranslationError("echo translator configured to fail")
        if self.mode == "echo":
            return text
        return f"[{target_lang}] {text}"
