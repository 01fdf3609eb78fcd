import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, List, Optional

from google.genai import errors as genai_errors

from app.core.exceptions import ConfigurationError, UpstreamError
from app.core.llm import GEMINI_MODEL, build_search_config, create_genai_client
from app.schemas.interview import GroundingSource

logger = logging.getLogger(__name__)

# Status codes meaning the credential itself was refused
_AUTH_STATUS_CODES = {401, 403}


@dataclass
class GenerationResult:
    """Raw model text plus the web pages Google Search grounded it on."""
    text: str
    sources: List[GroundingSource] = field(default_factory=list)


def _extract_grounding_sources(response: Any) -> List[GroundingSource]:
    """Collect (uri, title) pairs from Gemini grounding metadata, de-duplicated."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    grounding_meta = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(grounding_meta, "grounding_chunks", None) or []

    sources: List[GroundingSource] = []
    seen = set()
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        if not uri or uri in seen:
            continue
        seen.add(uri)
        sources.append(GroundingSource(uri=uri, title=getattr(web, "title", None) or ""))
    return sources


def _is_auth_error(error: genai_errors.APIError) -> bool:
    if getattr(error, "code", None) in _AUTH_STATUS_CODES:
        return True
    return "api key not valid" in str(error).lower()


class GenerationClient:
    """
    Calls Gemini with the Google Search tool and returns the raw text.

    The client knows nothing about the prep guide schema and does not retry;
    every failure surfaces as a ConfigurationError or UpstreamError.
    """

    def __init__(
        self,
        api_key: str,
        model: str = GEMINI_MODEL,
        timeout: Optional[float] = None,
        client: Any = None,
    ):
        """
        Args:
            api_key: Gemini credential, read once from settings at startup.
            model: Gemini model identifier.
            timeout: Seconds to wait for one generation call; None or 0 waits indefinitely.
            client: Pre-built genai client (tests inject a fake here).
        """
        self._api_key = api_key
        self.model = model
        self.timeout = timeout or None
        self._client = client

    def _get_client(self) -> Any:
        if not self._api_key or not self._api_key.strip():
            raise ConfigurationError("GEMINI_API_KEY is not set. Add it to the environment or .env file.")
        if self._client is None:
            self._client = create_genai_client(self._api_key)
        return self._client

    async def generate(self, prompt: str) -> GenerationResult:
        """
        Send one prompt to Gemini.

        Raises:
            ConfigurationError: Missing credential (no network call is made) or credential refused.
            UpstreamError: Network, service or timeout failure, or an empty reply.
        """
        client = self._get_client()
        config = build_search_config()

        logger.info(f"⏱️ Gemini API call started (model={self.model}, prompt={len(prompt)} chars)")
        start_time = time.perf_counter()

        call = asyncio.to_thread(
            client.models.generate_content,
            model=self.model,
            contents=prompt,
            config=config,
        )
        try:
            if self.timeout:
                response = await asyncio.wait_for(call, timeout=self.timeout)
            else:
                response = await call
        except (asyncio.TimeoutError, TimeoutError) as e:
            # Distinct classes before Python 3.11; the SDK transport raises the builtin one
            logger.error(f"Gemini API call timed out (limit: {self.timeout}s)")
            raise UpstreamError(
                "The AI service did not respond in time. Please try again."
            ) from e
        except genai_errors.APIError as e:
            if _is_auth_error(e):
                logger.error(f"Gemini rejected the configured API key (status {e.code})")
                raise ConfigurationError("The configured Gemini API key was rejected.") from e
            logger.error(f"Gemini API error (status {getattr(e, 'code', 'n/a')}): {e}")
            raise UpstreamError(
                "An error occurred while generating the interview prep guide.",
                {"status": getattr(e, "code", None)},
            ) from e
        except Exception as e:
            logger.error(f"Gemini API call failed: {type(e).__name__}: {e}")
            raise UpstreamError("An error occurred while generating the interview prep guide.") from e

        elapsed = time.perf_counter() - start_time
        logger.info(f"⏱️ Gemini API call completed in {elapsed:.2f}s")

        text = getattr(response, "text", None) or ""
        if not text.strip():
            logger.warning("Empty response received from Gemini")
            raise UpstreamError("The AI service returned an empty response. Please try again.")

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Response preview: {text[:300].replace(chr(10), ' ')}...")

        sources = _extract_grounding_sources(response)
        logger.info(f"Gemini response: {len(text)} chars, {len(sources)} grounding source(s)")
        return GenerationResult(text=text, sources=sources)
