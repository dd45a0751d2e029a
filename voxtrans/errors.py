"""
Exception types raised below the translation orchestrator.

Every failure path in the lower layers has a named kind so the
orchestrator can turn it into a ``TranslationFailure`` instead of
surfacing an opaque error.
"""

from __future__ import annotations


class VoxTransError(Exception):
    """Base class for all VoxTrans errors."""


class RemoteTranslationError(VoxTransError):
    """The online translation service could not produce a translation.

    Raised for transport failures, timeouts, non-2xx responses, malformed
    bodies and missing ``translatedText`` fields alike.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SpeechCaptureError(VoxTransError):
    """The speech capture capability reported an error instead of a transcript."""
