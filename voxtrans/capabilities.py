"""
External capabilities consumed by the translation session.

Speech capture, speech playback and the clipboard are delegated to the
platform; this module only defines their interfaces so they can be
injected (and replaced by test doubles), plus thin adapters for the
desktop libraries that implement them.

Interfaces:
    SpeechCapture: one recognized utterance per ``start``; cancellable
    SpeechPlayback: speak text in a language; cancellable
    Clipboard: copy text

Adapters:
    Pyttsx3Playback: playback through the OS speech engine (pyttsx3)
    PyperclipClipboard: system clipboard (pyperclip)
"""

from __future__ import annotations

import abc
import asyncio
import logging
import threading
from typing import Optional

from voxtrans.errors import SpeechCaptureError

logger = logging.getLogger(__name__)


class CaptureListener:
    """Lifecycle callbacks for a speech capture. Override what you need."""

    def on_start(self) -> None:
        pass

    def on_result(self, transcript: str) -> None:
        pass

    def on_error(self, message: str) -> None:
        pass

    def on_end(self) -> None:
        pass


class PlaybackListener:
    """Lifecycle callbacks for a speech playback."""

    def on_start(self) -> None:
        pass

    def on_end(self) -> None:
        pass


class SpeechCapture(abc.ABC):
    """Interface for a speech recognizer producing a single utterance."""

    @abc.abstractmethod
    def start(self, language_tag: str, listener: CaptureListener) -> None:
        """
        Start listening in ``language_tag``.

        The implementation calls ``listener.on_start``, then exactly one of
        ``on_result`` / ``on_error``, then ``on_end``.
        """
        pass

    @abc.abstractmethod
    def cancel(self) -> None:
        """Stop listening; no result is delivered afterwards."""
        pass


class SpeechPlayback(abc.ABC):
    """Interface for a text-to-speech engine."""

    @abc.abstractmethod
    def speak(self, text: str, language_tag: str, listener: Optional[PlaybackListener] = None) -> None:
        pass

    @abc.abstractmethod
    def cancel(self) -> None:
        """Stop the utterance in progress, if any."""
        pass

    @property
    @abc.abstractmethod
    def is_speaking(self) -> bool:
        pass


class Clipboard(abc.ABC):
    """Interface for a write-only clipboard."""

    @abc.abstractmethod
    def copy(self, text: str) -> None:
        pass


class _FutureCaptureListener(CaptureListener):
    """Resolves an asyncio future from capture callbacks (any thread)."""

    def __init__(self, loop: asyncio.AbstractEventLoop, future: asyncio.Future):
        self._loop = loop
        self._future = future

    def _settle(self, setter, value) -> None:
        def apply() -> None:
            if not self._future.done():
                setter(value)
        self._loop.call_soon_threadsafe(apply)

    def on_result(self, transcript: str) -> None:
        self._settle(self._future.set_result, transcript)

    def on_error(self, message: str) -> None:
        self._settle(self._future.set_exception, SpeechCaptureError(message))

    def on_end(self) -> None:
        self._settle(self._future.set_exception, SpeechCaptureError("capture ended without a result"))


async def capture_utterance(capture: SpeechCapture, language_tag: str) -> str:
    """Run one capture and return the transcript.

    Cancelling the awaiting task cancels the capture.

    Raises:
        SpeechCaptureError: if the capability reports an error or ends
            without a transcript
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future = loop.create_future()
    capture.start(language_tag, _FutureCaptureListener(loop, future))
    try:
        return await future
    except asyncio.CancelledError:
        capture.cancel()
        raise


class Pyttsx3Playback(SpeechPlayback):
    """
    Playback through the operating system's speech engine via pyttsx3.

    Each utterance runs in a daemon thread so callers are never blocked.
    """

    def __init__(self, engine=None):
        if engine is None:
            try:
                import pyttsx3
            except ImportError:
                raise ImportError(
                    "Speech playback requires pyttsx3. "
                    "Install with: pip install voxtrans[voice]"
                )
            engine = pyttsx3.init()
        self._engine = engine
        self._thread: Optional[threading.Thread] = None
        self._speaking = threading.Event()

    @property
    def is_speaking(self) -> bool:
        return self._speaking.is_set()

    def _select_voice(self, language_tag: str) -> None:
        primary = language_tag.split("-")[0].lower()
        for voice in self._engine.getProperty("voices") or []:
            languages = [
                lang.decode(errors="ignore") if isinstance(lang, bytes) else str(lang)
                for lang in (getattr(voice, "languages", None) or [])
            ]
            if any(lang.lstrip("\x05").lower().startswith(primary) for lang in languages):
                self._engine.setProperty("voice", voice.id)
                return
        logger.debug("No %s voice installed; using the engine default", language_tag)

    def speak(self, text: str, language_tag: str, listener: Optional[PlaybackListener] = None) -> None:
        self.cancel()
        listener = listener or PlaybackListener()
        self._select_voice(language_tag)

        def _speak_task() -> None:
            listener.on_start()
            try:
                self._engine.say(text)
                self._engine.runAndWait()
            except RuntimeError as e:
                logger.error("Speech playback failed: %s", e)
            finally:
                # a newer utterance owns the flag once it has replaced this thread
                if self._thread is threading.current_thread():
                    self._speaking.clear()
                listener.on_end()

        self._thread = threading.Thread(target=_speak_task, daemon=True)
        self._speaking.set()
        self._thread.start()

    def cancel(self) -> None:
        if self.is_speaking:
            self._engine.stop()

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until the current utterance finishes (used by the CLI)."""
        if self._thread is not None:
            self._thread.join(timeout)


class PyperclipClipboard(Clipboard):
    """System clipboard via pyperclip."""

    def __init__(self):
        try:
            import pyperclip
        except ImportError:
            raise ImportError(
                "Clipboard support requires pyperclip. "
                "Install with: pip install voxtrans[voice]"
            )
        self._pyperclip = pyperclip

    def copy(self, text: str) -> None:
        self._pyperclip.copy(text)
        logger.debug("Copied %d chars to clipboard", len(text))
