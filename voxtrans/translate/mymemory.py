"""MyMemory API translator - free online translation service."""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any

import requests

from voxtrans.config import API_TIMEOUT, MYMEMORY_URL
from voxtrans.errors import RemoteTranslationError
from voxtrans.languages import primary_subtag
from voxtrans.translate.base import OnlineTranslator

logger = logging.getLogger(__name__)

# Free tier rejects longer queries
MAX_QUERY_CHARS = 500


class MyMemoryTranslator(OnlineTranslator):
    """MyMemory translation API - free, no key required.

    One GET per call with ``q`` and ``langpair=<from>|<to>`` using two-letter
    codes. The blocking request runs in the event loop's default executor.
    No retries are attempted.

    Without ``session`` every call makes its own ``requests.get``, so
    overlapping calls from executor threads share no connection state. A
    caller that passes a ``requests.Session`` must not run calls concurrently.
    """

    def __init__(
        self,
        api_url: str = MYMEMORY_URL,
        timeout: float = API_TIMEOUT,
        contact_email: str | None = None,
        session: requests.Session | None = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.contact_email = contact_email
        self.session = session

    @property
    def name(self) -> str:
        return "mymemory"

    def build_params(self, text: str, source_lang: str, target_lang: str) -> dict[str, str]:
        """Query parameters for a request; tags are reduced to primary subtags."""
        params = {
            "q": text,
            "langpair": f"{primary_subtag(source_lang)}|{primary_subtag(target_lang)}",
        }
        if self.contact_email:
            params["de"] = self.contact_email
        return params

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """Translate text using the MyMemory API."""
        params = self.build_params(text, source_lang, target_lang)
        if len(text) > MAX_QUERY_CHARS:
            logger.warning(
                "Query is %d chars; MyMemory may reject more than %d",
                len(text), MAX_QUERY_CHARS,
            )
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(self._fetch, params))

    def _fetch(self, params: dict[str, str]) -> str:
        logger.debug("MyMemory request langpair=%s", params["langpair"])
        try:
            http = self.session if self.session is not None else requests
            response = http.get(self.api_url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise RemoteTranslationError(f"MyMemory returned HTTP {status}", status_code=status) from e
        except requests.exceptions.Timeout as e:
            raise RemoteTranslationError(f"MyMemory request timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise RemoteTranslationError(f"MyMemory request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteTranslationError("MyMemory response is not valid JSON") from e

        return parse_response(data)


def parse_response(data: Any) -> str:
    """Extract ``responseData.translatedText`` from a MyMemory body.

    Raises:
        RemoteTranslationError: if the body reports an error status or the
            field is missing, empty or not a string
    """
    if not isinstance(data, dict):
        raise RemoteTranslationError("MyMemory response is not a JSON object")

    status = data.get("responseStatus")
    if status is not None and str(status) != "200":
        details = data.get("responseDetails") or "unknown error"
        raise RemoteTranslationError(f"MyMemory error {status}: {details}")

    response_data = data.get("responseData")
    if not isinstance(response_data, dict):
        raise RemoteTranslationError("MyMemory response has no responseData object")

    translated = response_data.get("translatedText")
    if not isinstance(translated, str) or not translated.strip():
        raise RemoteTranslationError("MyMemory response has no translatedText")

    return translated
