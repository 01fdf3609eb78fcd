"""
Language Model (LLM) client configuration.

This module provides:
- The GenAI SDK client factory used by the generation client
- The generation config that attaches the Google Search tool
- The default Gemini model constant
"""
import logging

from google import genai
from google.genai import types

from app.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Model constant for prep guide generation
GEMINI_MODEL = 'gemini-2.5-flash'


def create_genai_client(api_key: str) -> genai.Client:
    """
    Create a GenAI SDK client for the given credential.

    The key is passed in explicitly by the caller (read once from settings at
    startup); this function never looks at the environment.

    Raises:
        ConfigurationError: If the key is missing or the SDK rejects it.
    """
    if not api_key or not api_key.strip():
        raise ConfigurationError("GEMINI_API_KEY is not set. Add it to the environment or .env file.")
    try:
        return genai.Client(api_key=api_key)
    except Exception as e:
        logger.error(f"Failed to initialize GenAI client: {type(e).__name__}")
        raise ConfigurationError("Could not initialize the Gemini client with the configured API key.") from e


def build_search_config() -> types.GenerateContentConfig:
    """Generation config with Google Search grounding enabled."""
    return types.GenerateContentConfig(
        tools=[types.Tool(google_search=types.GoogleSearch())],
    )
