"""
Prep Guide Pipeline Orchestrator.

This module runs one prep guide request end to end:
1. Company name validation and prompt building
2. Gemini generation with Google Search grounding
3. Parsing and schema validation of the reply

Every outcome, success or failure, comes back as a PrepGuideResult; nothing
is retried and nothing is swallowed.
"""
from __future__ import annotations
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from app.core.exceptions import AppError, ConfigurationError, InvalidInputError, UpstreamError
from app.core.logger import log_async_execution_time, set_correlation_id
from app.core.prompts import generate_prep_guide_prompt
from app.schemas.interview import PrepGuideResponse
from app.services.pipeline.llm_parser import parse_prep_guide
from app.services.pipeline.llm_service import GenerationClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrepGuideResult:
    """Either the validated guide (with its grounding sources) or the failure."""
    response: Optional[PrepGuideResponse] = None
    error: Optional[AppError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> PrepGuideResponse:
        if self.error is not None:
            raise self.error
        return self.response


class PrepGuidePipeline:
    """
    Orchestrates one prep guide request.

    The generation client is injected so the pipeline never touches
    configuration or the network on its own.
    """

    def __init__(self, generation_client: GenerationClient, correlation_id: str = None):
        """
        Args:
            generation_client: Client configured once at application startup.
            correlation_id: Optional correlation ID for request tracking (auto-generated if not provided)
        """
        self.generation_client = generation_client
        self.correlation_id = correlation_id or str(uuid.uuid4())
        set_correlation_id(self.correlation_id)

    @log_async_execution_time
    async def run(self, company_name: str) -> PrepGuideResult:
        try:
            prompt = generate_prep_guide_prompt(company_name)
        except InvalidInputError as e:
            logger.warning(f"Rejected company name {company_name!r}: {e.message}")
            return PrepGuideResult(error=e)

        company = company_name.strip()
        logger.info(f"Generating prep guide for '{company}'")

        try:
            generation = await self.generation_client.generate(prompt)
        except (ConfigurationError, UpstreamError) as e:
            logger.error(f"Generation failed for '{company}': {e.error_type}: {e.message}")
            return PrepGuideResult(error=e)

        parsed = parse_prep_guide(generation.text)
        if not parsed.ok:
            logger.error(f"Response for '{company}' rejected: {parsed.error.error_type}")
            return PrepGuideResult(error=parsed.error)

        logger.info(f"Prep guide ready for '{company}'")
        return PrepGuideResult(
            response=PrepGuideResponse(guide=parsed.guide, sources=generation.sources)
        )
