"""
Interactive translation session.

A session holds what a front end shows: the selected language pair, the
current input and the latest outcome. It applies the caller-level policies
around the orchestrator:

- Last request wins: issuing a request cancels the one still in flight,
  and a superseded outcome is discarded instead of overwriting a newer one
- Swap: exchange the languages and offer the previous translation as input
- Playback and clipboard only ever receive genuine translations
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from voxtrans.capabilities import Clipboard, SpeechCapture, SpeechPlayback, capture_utterance
from voxtrans.models import TranslationOutcome, TranslationRequest, TranslationResult
from voxtrans.pipeline import TranslationOrchestrator

logger = logging.getLogger(__name__)


class TranslationSession:
    """One user's translation state, with last-request-wins ordering.

    Args:
        orchestrator: Resolves requests
        source_lang: Initial source language tag
        target_lang: Initial target language tag
        playback: Optional speech playback capability
        clipboard: Optional clipboard capability
        capture: Optional speech capture capability
    """

    def __init__(
        self,
        orchestrator: TranslationOrchestrator,
        source_lang: str,
        target_lang: str,
        playback: SpeechPlayback | None = None,
        clipboard: Clipboard | None = None,
        capture: SpeechCapture | None = None,
    ):
        self.orchestrator = orchestrator
        self.source_lang = source_lang
        self.target_lang = target_lang
        self.playback = playback
        self.clipboard = clipboard
        self.capture = capture

        self.input_text = ""
        self.latest: Optional[TranslationOutcome] = None
        # shown after a swap until the next outcome lands; never a translation
        self._swapped_output = ""
        self._generation = 0
        self._pending: Optional[asyncio.Task] = None

    @property
    def output_text(self) -> str:
        """Text a front end displays for the latest outcome."""
        if self.latest is not None:
            return self.latest.message
        return self._swapped_output

    @property
    def has_translation(self) -> bool:
        return isinstance(self.latest, TranslationResult)

    def _abandon_pending(self) -> None:
        self._generation += 1
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def translate(self, text: str) -> Optional[TranslationOutcome]:
        """Resolve ``text`` with the current language pair.

        Returns the outcome, or None when a later request (or ``clear``)
        superseded this one before it finished.
        """
        self._abandon_pending()
        generation = self._generation
        self.input_text = text

        request = TranslationRequest(text, self.source_lang, self.target_lang)
        task = asyncio.ensure_future(self.orchestrator.resolve(request))
        self._pending = task

        try:
            outcome = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                logger.debug("Request superseded before completion")
                return None
            raise

        if generation != self._generation:
            logger.debug("Discarding superseded outcome")
            return None

        self._pending = None
        self.latest = outcome
        self._swapped_output = ""
        return outcome

    async def listen(self) -> Optional[TranslationOutcome]:
        """Capture one utterance in the source language and translate it.

        Raises:
            RuntimeError: if the session has no speech capture capability
            SpeechCaptureError: if recognition fails
        """
        if self.capture is None:
            raise RuntimeError("No speech capture capability configured")
        transcript = await capture_utterance(self.capture, self.source_lang)
        return await self.translate(transcript)

    def clear(self) -> None:
        """Reset input and output; an in-flight request is abandoned."""
        self._abandon_pending()
        self.input_text = ""
        self.latest = None
        self._swapped_output = ""

    def set_languages(self, source_lang: str, target_lang: str) -> None:
        self.source_lang = source_lang
        self.target_lang = target_lang

    def swap(self) -> str:
        """Exchange source and target languages.

        The previous translation (if any) becomes the new input text and
        is returned, ready to be passed to ``translate``; the previous input
        is displayed as output until then. That displayed text is not a
        translation, so ``speak`` and ``copy`` ignore it.
        """
        if isinstance(self.latest, TranslationResult):
            new_input, new_output = self.latest.translated_text, self.input_text
        else:
            new_input, new_output = "", ""
        self._abandon_pending()
        self.source_lang, self.target_lang = self.target_lang, self.source_lang
        self.input_text = new_input
        self.latest = None
        self._swapped_output = new_output
        logger.debug("Swapped languages to %s->%s", self.source_lang, self.target_lang)
        return new_input

    def speak(self) -> bool:
        """Speak the latest translation, or stop an utterance in progress.

        Returns True if playback was started or stopped. Failure messages
        are never spoken.
        """
        if self.playback is None or not isinstance(self.latest, TranslationResult):
            return False
        if self.playback.is_speaking:
            self.playback.cancel()
            return True
        self.playback.speak(self.latest.translated_text, self.target_lang)
        return True

    def copy(self) -> bool:
        """Copy the latest translation; failure messages are never copied."""
        if self.clipboard is None or not isinstance(self.latest, TranslationResult):
            return False
        self.clipboard.copy(self.latest.translated_text)
        return True
