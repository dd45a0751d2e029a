"""
VoxTrans: Offline-first phrase translation with an online fallback

Speak or type a phrase and get a translation. The bundled phrasebook
answers instantly without any network access; phrases it does not cover
are sent to the MyMemory translation service when the device is online.

Core components:
1. Language catalog (languages)
2. Offline phrasebook (translate.dictionary)
3. Online translator (translate.mymemory)
4. Connectivity observer (connectivity)
5. Translation orchestrator (pipeline)

License: MIT
"""

__version__ = "0.1.0"

from voxtrans.models import (
    FailureReason,
    TranslationFailure,
    TranslationMethod,
    TranslationRequest,
    TranslationResult,
)
from voxtrans.pipeline import TranslationOrchestrator, create_orchestrator

__all__ = [
    "FailureReason",
    "TranslationFailure",
    "TranslationMethod",
    "TranslationRequest",
    "TranslationResult",
    "TranslationOrchestrator",
    "create_orchestrator",
]
