"""
Tests for the interactive translation session.

Tests cover:
- Last-request-wins ordering and clear()
- Language swap round-trips
- Speak/copy guards (failure text is never spoken or copied)
- Speech capture via listen()
"""

import asyncio

import pytest

from voxtrans.capabilities import (
    CaptureListener,
    Clipboard,
    SpeechCapture,
    SpeechPlayback,
    capture_utterance,
)
from voxtrans.connectivity import ConnectivityObserver
from voxtrans.errors import SpeechCaptureError
from voxtrans.models import FailureReason, TranslationMethod, TranslationResult
from voxtrans.pipeline import TranslationOrchestrator
from voxtrans.session import TranslationSession
from voxtrans.translate.base import EchoTranslator, OnlineTranslator
from voxtrans.translate.dictionary import get_default_phrasebook


class GatedTranslator(OnlineTranslator):
    """Online translator that blocks each text until its gate is opened."""

    def __init__(self):
        self.gates = {}
        self.started = {}

    @property
    def name(self):
        return "gated"

    def gate(self, text):
        self.gates.setdefault(text, asyncio.Event())
        self.started.setdefault(text, asyncio.Event())
        return self.gates[text]

    async def translate(self, text, source_lang, target_lang):
        gate = self.gate(text)
        self.started[text].set()
        await gate.wait()
        return f"translated {text}"


class FakePlayback(SpeechPlayback):
    def __init__(self):
        self.spoken = []
        self.cancelled = 0
        self._speaking = False

    @property
    def is_speaking(self):
        return self._speaking

    def speak(self, text, language_tag, listener=None):
        self.spoken.append((text, language_tag))
        self._speaking = True

    def cancel(self):
        self.cancelled += 1
        self._speaking = False


class FakeClipboard(Clipboard):
    def __init__(self):
        self.copied = []

    def copy(self, text):
        self.copied.append(text)


class FakeCapture(SpeechCapture):
    """Delivers a scripted transcript (or error) synchronously."""

    def __init__(self, transcript=None, error=None):
        self.transcript = transcript
        self.error = error
        self.languages = []
        self.cancelled = False

    def start(self, language_tag, listener: CaptureListener):
        self.languages.append(language_tag)
        listener.on_start()
        if self.error is not None:
            listener.on_error(self.error)
        elif self.transcript is not None:
            listener.on_result(self.transcript)
        else:
            return
        listener.on_end()

    def cancel(self):
        self.cancelled = True


def make_session(online=None, online_state=True, **kwargs):
    orchestrator = TranslationOrchestrator(
        dictionary=get_default_phrasebook(),
        online=online if online is not None else EchoTranslator(),
        connectivity=ConnectivityObserver(initial=online_state),
    )
    return TranslationSession(orchestrator, "pt-BR", "en-US", **kwargs)


class TestOrdering:
    """Last request wins."""

    @pytest.mark.asyncio
    async def test_later_request_supersedes_earlier(self):
        online = GatedTranslator()
        session = make_session(online=online)
        online.gate("primeiro")
        online.gate("segundo")

        first = asyncio.ensure_future(session.translate("primeiro"))
        await online.started["primeiro"].wait()
        second = asyncio.ensure_future(session.translate("segundo"))
        await online.started["segundo"].wait()

        online.gates["primeiro"].set()
        online.gates["segundo"].set()

        assert await first is None
        outcome = await second
        assert outcome.translated_text == "translated segundo"
        assert session.latest is outcome
        assert session.input_text == "segundo"

    @pytest.mark.asyncio
    async def test_offline_request_supersedes_pending_online(self):
        online = GatedTranslator()
        session = make_session(online=online)
        online.gate("xyzzy-unmatched")

        slow = asyncio.ensure_future(session.translate("xyzzy-unmatched"))
        await online.started["xyzzy-unmatched"].wait()
        fast = await session.translate("bom dia")

        assert fast.method is TranslationMethod.OFFLINE
        assert await slow is None
        assert session.output_text == "good morning"

    @pytest.mark.asyncio
    async def test_clear_abandons_pending(self):
        online = GatedTranslator()
        session = make_session(online=online)
        online.gate("xyzzy-unmatched")

        pending = asyncio.ensure_future(session.translate("xyzzy-unmatched"))
        await online.started["xyzzy-unmatched"].wait()
        session.clear()

        assert await pending is None
        assert session.latest is None
        assert session.input_text == ""
        assert session.output_text == ""


class TestSwap:
    """Swapping languages and text."""

    @pytest.mark.asyncio
    async def test_swap_round_trip(self):
        session = make_session()
        await session.translate("bom dia")

        new_input = session.swap()

        assert new_input == "good morning"
        assert (session.source_lang, session.target_lang) == ("en-US", "pt-BR")
        assert session.latest is None

        outcome = await session.translate(new_input)
        assert outcome.translated_text == "bom dia"
        assert outcome.method is TranslationMethod.OFFLINE
        assert session.output_text == "bom dia"

    @pytest.mark.asyncio
    async def test_swap_displays_previous_input(self):
        playback = FakePlayback()
        clipboard = FakeClipboard()
        session = make_session(playback=playback, clipboard=clipboard)
        await session.translate("bom dia")

        session.swap()

        assert session.input_text == "good morning"
        assert session.output_text == "bom dia"
        assert not session.has_translation
        assert session.speak() is False
        assert session.copy() is False
        assert playback.spoken == []
        assert clipboard.copied == []

    @pytest.mark.asyncio
    async def test_clear_after_swap(self):
        session = make_session()
        await session.translate("bom dia")
        session.swap()

        session.clear()

        assert session.output_text == ""

    @pytest.mark.asyncio
    async def test_swap_after_failure_gives_empty_input(self):
        session = make_session(online=EchoTranslator(mode="fail"))
        outcome = await session.translate("xyzzy-unmatched")
        assert outcome.reason is FailureReason.REMOTE_ERROR

        assert session.swap() == ""
        assert session.input_text == ""
        assert session.output_text == ""

    def test_swap_twice_restores_languages(self):
        session = make_session()
        session.swap()
        session.swap()

        assert (session.source_lang, session.target_lang) == ("pt-BR", "en-US")

    def test_set_languages(self):
        session = make_session()
        session.set_languages("fr-FR", "de-DE")

        assert (session.source_lang, session.target_lang) == ("fr-FR", "de-DE")


class TestPlaybackAndClipboard:
    """Only genuine translations reach playback and the clipboard."""

    @pytest.mark.asyncio
    async def test_speak_translation_in_target_language(self):
        playback = FakePlayback()
        session = make_session(playback=playback)
        await session.translate("bom dia")

        assert session.speak() is True
        assert playback.spoken == [("good morning", "en-US")]

    @pytest.mark.asyncio
    async def test_speak_toggles_cancel(self):
        playback = FakePlayback()
        session = make_session(playback=playback)
        await session.translate("bom dia")

        session.speak()
        assert session.speak() is True

        assert playback.cancelled == 1
        assert len(playback.spoken) == 1

    @pytest.mark.asyncio
    async def test_failure_is_not_spoken_or_copied(self):
        playback = FakePlayback()
        clipboard = FakeClipboard()
        session = make_session(online_state=False, playback=playback, clipboard=clipboard)

        outcome = await session.translate("xyzzy-unmatched")

        assert outcome.reason is FailureReason.OFFLINE_AND_UNREACHABLE
        assert session.output_text.startswith("Offline mode")
        assert session.speak() is False
        assert session.copy() is False
        assert playback.spoken == []
        assert clipboard.copied == []

    @pytest.mark.asyncio
    async def test_copy_translation(self):
        clipboard = FakeClipboard()
        session = make_session(clipboard=clipboard)
        await session.translate("obrigado")

        assert session.copy() is True
        assert clipboard.copied == ["thank you"]

    def test_without_capabilities(self):
        session = make_session()

        assert session.speak() is False
        assert session.copy() is False
        assert not session.has_translation


class TestListen:
    """Speech capture feeding the translator."""

    @pytest.mark.asyncio
    async def test_listen_translates_transcript(self):
        capture = FakeCapture(transcript="bom dia")
        session = make_session(capture=capture)

        outcome = await session.listen()

        assert isinstance(outcome, TranslationResult)
        assert outcome.translated_text == "good morning"
        assert capture.languages == ["pt-BR"]
        assert session.input_text == "bom dia"

    @pytest.mark.asyncio
    async def test_listen_error(self):
        session = make_session(capture=FakeCapture(error="no-speech"))

        with pytest.raises(SpeechCaptureError, match="no-speech"):
            await session.listen()

    @pytest.mark.asyncio
    async def test_listen_without_capture(self):
        session = make_session()

        with pytest.raises(RuntimeError):
            await session.listen()

    @pytest.mark.asyncio
    async def test_cancelling_capture(self):
        capture = FakeCapture()
        task = asyncio.ensure_future(capture_utterance(capture, "en-US"))
        await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert capture.cancelled


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
