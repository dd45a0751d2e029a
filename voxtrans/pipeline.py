"""
Translation orchestrator for VoxTrans.

The orchestrator decides which path answers a request:

1. Blank input        -> EMPTY_INPUT (nothing is consulted)
2. Unknown language   -> UNSUPPORTED_LANGUAGE
3. Phrasebook hit     -> result tagged OFFLINE (never suspends, no network)
4. Phrasebook miss:
   - online fallback disabled -> NO_LOCAL_MATCH
   - observer says offline    -> OFFLINE_AND_UNREACHABLE (client never called)
   - online translator        -> result tagged ONLINE, or REMOTE_ERROR

The phrasebook is tried before connectivity is even read, so covered
phrases answer instantly and the network is only used on a genuine miss.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from voxtrans.config import Settings
from voxtrans.connectivity import ConnectivityObserver
from voxtrans.errors import RemoteTranslationError
from voxtrans.languages import is_supported
from voxtrans.models import (
    FailureReason,
    TranslationFailure,
    TranslationMethod,
    TranslationOutcome,
    TranslationRequest,
    TranslationResult,
)
from voxtrans.translate.base import OnlineTranslator
from voxtrans.translate.dictionary import OfflineDictionary, get_default_phrasebook

logger = logging.getLogger(__name__)


class TranslationOrchestrator:
    """Compose the offline phrasebook and the online translator.

    Args:
        dictionary: Offline phrase tables, consulted first
        online: Network translator used on a phrasebook miss
        connectivity: Reachability flag read on every miss
        online_fallback: Set False to never consult ``online``
        timeout: Optional upper bound in seconds for the online call;
            expiry is reported as REMOTE_ERROR
    """

    def __init__(
        self,
        dictionary: OfflineDictionary,
        online: OnlineTranslator | None,
        connectivity: ConnectivityObserver,
        online_fallback: bool = True,
        timeout: float | None = None,
    ):
        self.dictionary = dictionary
        self.online = online
        self.connectivity = connectivity
        self.online_fallback = online_fallback and online is not None
        self.timeout = timeout

    def resolve_offline(self, request: TranslationRequest) -> Optional[TranslationResult]:
        """Phrasebook-only half of ``resolve``; returns None on a miss."""
        translated = self.dictionary.lookup(request.text, request.source_lang, request.target_lang)
        if translated is None:
            return None
        return TranslationResult(
            translated_text=translated,
            method=TranslationMethod.OFFLINE,
            source_text=request.text,
            source_lang=request.source_lang,
            target_lang=request.target_lang,
        )

    async def resolve(self, request: TranslationRequest) -> TranslationOutcome:
        """Translate a request, reporting which path answered or why none did."""
        if request.is_blank:
            return TranslationFailure(FailureReason.EMPTY_INPUT)

        for tag in (request.source_lang, request.target_lang):
            if not is_supported(tag):
                logger.warning("Rejecting request with unsupported language %r", tag)
                return TranslationFailure(FailureReason.UNSUPPORTED_LANGUAGE, f"unknown language {tag!r}")

        offline = self.resolve_offline(request)
        if offline is not None:
            logger.debug("Offline hit for %s->%s", request.source_lang, request.target_lang)
            return offline

        if not self.online_fallback:
            return TranslationFailure(FailureReason.NO_LOCAL_MATCH)

        if not self.connectivity.is_online:
            logger.info("Offline miss while unreachable; online translator not consulted")
            return TranslationFailure(FailureReason.OFFLINE_AND_UNREACHABLE)

        try:
            call = self.online.translate(request.text, request.source_lang, request.target_lang)
            if self.timeout is not None:
                translated = await asyncio.wait_for(call, self.timeout)
            else:
                translated = await call
        except asyncio.TimeoutError:
            logger.warning("Online translation exceeded %.1fs", self.timeout)
            return TranslationFailure(FailureReason.REMOTE_ERROR, f"timed out after {self.timeout}s")
        except RemoteTranslationError as e:
            logger.warning("Online translation failed: %s", e)
            return TranslationFailure(FailureReason.REMOTE_ERROR, str(e))

        return TranslationResult(
            translated_text=translated,
            method=TranslationMethod.ONLINE,
            source_text=request.text,
            source_lang=request.source_lang,
            target_lang=request.target_lang,
        )


def create_orchestrator(
    settings: Settings | None = None,
    dictionary: OfflineDictionary | None = None,
    online: OnlineTranslator | None = None,
    connectivity: ConnectivityObserver | None = None,
    timeout: float | None = None,
) -> TranslationOrchestrator:
    """Build an orchestrator from settings, filling in the defaults.

    Defaults: the bundled phrasebook, a MyMemory translator and a
    connectivity observer started from ``settings.start_offline``.
    """
    settings = settings or Settings.from_env()
    if online is None:
        from voxtrans.translate.mymemory import MyMemoryTranslator
        online = MyMemoryTranslator(
            api_url=settings.mymemory_url,
            timeout=settings.api_timeout,
            contact_email=settings.contact_email,
        )
    return TranslationOrchestrator(
        dictionary=dictionary if dictionary is not None else get_default_phrasebook(),
        online=online,
        connectivity=connectivity or ConnectivityObserver(initial=not settings.start_offline),
        online_fallback=settings.online_fallback,
        timeout=timeout,
    )


def translate_text(
    text: str,
    source_lang: str,
    target_lang: str,
    orchestrator: TranslationOrchestrator | None = None,
) -> TranslationOutcome:
    """Blocking convenience wrapper around ``resolve`` for scripts."""
    orchestrator = orchestrator or create_orchestrator()
    return asyncio.run(orchestrator.resolve(TranslationRequest(text, source_lang, target_lang)))
