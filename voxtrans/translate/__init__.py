"""
Translation backends for VoxTrans.
"""

from .base import EchoTranslator, OnlineTranslator, RemoteTranslationError
from .dictionary import OfflineDictionary, PhraseEntry, get_default_phrasebook, load_phrasebook_csv

__all__ = [
    "EchoTranslator",
    "OnlineTranslator",
    "RemoteTranslationError",
    "OfflineDictionary",
    "PhraseEntry",
    "get_default_phrasebook",
    "load_phrasebook_csv",
]
