"""
Offline phrasebook for instant, network-free translation.

This module handles:
- Normalizing input text (trim, whitespace runs, language-aware case folding)
- Keyed phrase tables per (source tag, target tag) pair
- Lookup with fallback tiers: exact tag pair first, then primary-subtag pair
- Loading phrasebooks from CSV files
- The bundled default phrasebook

Design Philosophy:
- Lookup is exact on the normalized text; there is no fuzzy matching
- Lookup is deterministic and performs no I/O
- A miss returns None: it is an expected outcome, not an error
- Coverage grows by adding tables, never by touching the orchestrator
"""

from __future__ import annotations

import csv
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from voxtrans.languages import primary_subtag

_WHITESPACE = re.compile(r"\s+")

# Languages whose dotted/dotless i do not fold like the default Unicode rules
_TURKIC = {"tr", "az"}


@dataclass(frozen=True)
class PhraseEntry:
    """A single phrasebook entry.

    Attributes:
        source_lang: Source language tag or primary subtag (e.g., "pt-BR" or "pt")
        target_lang: Target language tag or primary subtag
        source: Source phrase as written
        target: Translation returned on a match
    """
    source_lang: str
    target_lang: str
    source: str
    target: str


def normalize_text(text: str, lang: str) -> str:
    """Normalize text into a phrasebook key.

    Trims, collapses whitespace runs to a single space and case-folds
    following the rules of ``lang``.

    Example:
        >>> normalize_text("  Bom   DIA ", "pt-BR")
        'bom dia'
        >>> normalize_text("İstanbul", "tr")
        'istanbul'
    """
    text = _WHITESPACE.sub(" ", text.strip())
    if primary_subtag(lang) in _TURKIC:
        text = text.replace("I", "ı").replace("İ", "i")
    return text.casefold()


class OfflineDictionary:
    """Phrase tables keyed by language pair and normalized text.

    Entries registered under full tags ("pt-BR", "en-US") are consulted
    first; entries registered under primary subtags ("pt", "en") serve
    every regional tag of those languages.
    """

    def __init__(self, entries: Iterable[PhraseEntry] = (), name: str = "default"):
        self.name = name
        self._tables: dict[tuple[str, str], dict[str, str]] = {}
        self.add_entries(entries)

    def __len__(self) -> int:
        return sum(len(table) for table in self._tables.values())

    def __iter__(self) -> Iterator[PhraseEntry]:
        # source is the normalized key, not the phrase as registered
        for (source_lang, target_lang), table in self._tables.items():
            for key, target in table.items():
                yield PhraseEntry(source_lang, target_lang, key, target)

    def pairs(self) -> list[tuple[str, str]]:
        """Language pairs that have a table, in registration order."""
        return list(self._tables)

    def table_size(self, source_lang: str, target_lang: str) -> int:
        return len(self._tables.get((_pair_key(source_lang), _pair_key(target_lang)), {}))

    def add_entry(
        self,
        source_lang: str,
        target_lang: str,
        source: str,
        target: str,
        symmetric: bool = False,
    ) -> None:
        """Register a phrase.

        A later entry for the same normalized source replaces an earlier one.
        With ``symmetric=True`` the inverse entry is registered too, unless
        the inverse direction already has an entry for that phrase.
        """
        source_key = normalize_text(source, source_lang)
        if not source_key or not target.strip():
            raise ValueError("Phrasebook entries need non-empty source and target text")
        table = self._tables.setdefault((_pair_key(source_lang), _pair_key(target_lang)), {})
        table[source_key] = target.strip()

        if symmetric:
            inverse = self._tables.setdefault((_pair_key(target_lang), _pair_key(source_lang)), {})
            inverse.setdefault(normalize_text(target, target_lang), source.strip())

    def add_entries(self, entries: Iterable[PhraseEntry], symmetric: bool = False) -> None:
        for entry in entries:
            self.add_entry(
                entry.source_lang, entry.target_lang, entry.source, entry.target,
                symmetric=symmetric,
            )

    def merge(self, other: OfflineDictionary) -> OfflineDictionary:
        """Return a new dictionary; entries from ``other`` take precedence."""
        merged = OfflineDictionary(name=f"{self.name}+{other.name}")
        for source in (self, other):
            for pair, table in source._tables.items():
                merged._tables.setdefault(pair, {}).update(table)
        return merged

    def lookup(self, text: str, source_lang: str, target_lang: str) -> str | None:
        """Return the stored translation for ``text`` or None on a miss."""
        for pair in _lookup_tiers(source_lang, target_lang):
            table = self._tables.get(pair)
            if table is None:
                continue
            found = table.get(normalize_text(text, source_lang))
            if found is not None:
                return found
        return None


def _pair_key(tag: str) -> str:
    """Canonical spelling of a tag used as a table key ("pt_br" -> "pt-BR")."""
    parts = tag.strip().replace("_", "-").split("-")
    head = parts[0].lower()
    rest = [p.upper() if len(p) == 2 else p for p in parts[1:]]
    return "-".join([head] + rest)


def _lookup_tiers(source_lang: str, target_lang: str) -> list[tuple[str, str]]:
    exact = (_pair_key(source_lang), _pair_key(target_lang))
    primary = (primary_subtag(source_lang), primary_subtag(target_lang))
    return [exact] if exact == primary else [exact, primary]


def load_phrasebook_csv(
    path: str | Path,
    has_header: bool = True,
    symmetric: bool = False,
) -> OfflineDictionary:
    """Load a phrasebook from a CSV file.

    Expected format:
        source_lang,target_lang,source,target

    Rows with fewer than four columns or blank fields are skipped.

    Args:
        path: Path to CSV file
        has_header: Whether file has a header row to skip
        symmetric: Also register every row in the reverse direction

    Returns:
        Loaded OfflineDictionary
    """
    path = Path(path)
    dictionary = OfflineDictionary(name=path.stem)

    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        if has_header:
            next(reader, None)

        for row in reader:
            if len(row) < 4:
                continue
            source_lang, target_lang, source, target = (cell.strip() for cell in row[:4])
            if not (source_lang and target_lang and source and target):
                continue
            dictionary.add_entry(source_lang, target_lang, source, target, symmetric=symmetric)

    return dictionary


# Bundled phrases, all registered symmetrically against English
_DEFAULT_PHRASES: dict[str, list[tuple[str, str]]] = {
    "pt": [
        ("bom dia", "good morning"),
        ("boa tarde", "good afternoon"),
        ("boa noite", "good night"),
        ("olá", "hello"),
        ("tchau", "goodbye"),
        ("obrigado", "thank you"),
        ("obrigada", "thank you"),
        ("por favor", "please"),
        ("de nada", "you're welcome"),
        ("desculpe", "sorry"),
        ("com licença", "excuse me"),
        ("sim", "yes"),
        ("não", "no"),
        ("como vai?", "how are you?"),
        ("tudo bem?", "how are you doing?"),
        ("tudo bem", "all good"),
        ("qual é o seu nome?", "what is your name?"),
        ("meu nome é", "my name is"),
        ("prazer em conhecê-lo", "nice to meet you"),
        ("eu não entendo", "i don't understand"),
        ("você fala inglês?", "do you speak english?"),
        ("fale mais devagar, por favor", "please speak more slowly"),
        ("onde fica o banheiro?", "where is the bathroom?"),
        ("quanto custa?", "how much does it cost?"),
        ("a conta, por favor", "the check, please"),
        ("eu preciso de ajuda", "i need help"),
        ("socorro", "help"),
        ("chame um médico", "call a doctor"),
        ("água", "water"),
        ("comida", "food"),
        ("hotel", "hotel"),
        ("aeroporto", "airport"),
        ("estação de trem", "train station"),
        ("onde fica a estação de metrô?", "where is the subway station?"),
        ("eu te amo", "i love you"),
        ("até logo", "see you later"),
        ("bem-vindo", "welcome"),
    ],
    "es": [
        ("buenos días", "good morning"),
        ("buenas tardes", "good afternoon"),
        ("buenas noches", "good night"),
        ("hola", "hello"),
        ("adiós", "goodbye"),
        ("gracias", "thank you"),
        ("por favor", "please"),
        ("de nada", "you're welcome"),
        ("lo siento", "sorry"),
        ("sí", "yes"),
        ("no", "no"),
        ("¿cómo estás?", "how are you?"),
        ("no entiendo", "i don't understand"),
        ("¿dónde está el baño?", "where is the bathroom?"),
        ("¿cuánto cuesta?", "how much does it cost?"),
        ("necesito ayuda", "i need help"),
        ("agua", "water"),
    ],
    "fr": [
        ("bonjour", "good morning"),
        ("bonsoir", "good evening"),
        ("bonne nuit", "good night"),
        ("salut", "hello"),
        ("au revoir", "goodbye"),
        ("merci", "thank you"),
        ("s'il vous plaît", "please"),
        ("de rien", "you're welcome"),
        ("pardon", "sorry"),
        ("oui", "yes"),
        ("non", "no"),
        ("comment allez-vous ?", "how are you?"),
        ("je ne comprends pas", "i don't understand"),
        ("où sont les toilettes ?", "where is the bathroom?"),
        ("combien ça coûte ?", "how much does it cost?"),
        ("j'ai besoin d'aide", "i need help"),
        ("eau", "water"),
    ],
    "de": [
        ("guten morgen", "good morning"),
        ("guten abend", "good evening"),
        ("gute nacht", "good night"),
        ("hallo", "hello"),
        ("auf wiedersehen", "goodbye"),
        ("danke", "thank you"),
        ("bitte", "please"),
        ("ja", "yes"),
        ("nein", "no"),
        ("ich verstehe nicht", "i don't understand"),
    ],
    "it": [
        ("buongiorno", "good morning"),
        ("buonasera", "good evening"),
        ("buonanotte", "good night"),
        ("ciao", "hello"),
        ("arrivederci", "goodbye"),
        ("grazie", "thank you"),
        ("per favore", "please"),
        ("sì", "yes"),
        ("no", "no"),
        ("non capisco", "i don't understand"),
    ],
}


def get_default_phrasebook() -> OfflineDictionary:
    """Return the bundled phrasebook.

    Covers greetings, courtesy and travel phrases between English and
    Portuguese, Spanish, French, German and Italian in both directions.
    Tables are registered under primary subtags, so they serve every
    regional tag in the language catalog.
    """
    dictionary = OfflineDictionary(name="default")
    for lang, phrases in _DEFAULT_PHRASES.items():
        for source, target in phrases:
            dictionary.add_entry(lang, "en", source, target, symmetric=True)
    return dictionary
