"""
Prep Guide Pipeline Package

Architecture:
- prep_pipeline.py: Request orchestration (validate -> prompt -> generate -> parse)
- llm_service.py: Gemini calls with Google Search grounding
- llm_parser.py: Fence stripping, JSON parsing and schema validation
- request_guard.py: Refuses duplicate in-flight requests per client
"""

from .prep_pipeline import PrepGuidePipeline, PrepGuideResult
from .llm_service import GenerationClient, GenerationResult
from .llm_parser import ParseResult, parse_prep_guide, strip_code_fences
from .request_guard import RequestGuard

__all__ = [
    'PrepGuidePipeline',
    'PrepGuideResult',
    'GenerationClient',
    'GenerationResult',
    'ParseResult',
    'parse_prep_guide',
    'strip_code_fences',
    'RequestGuard',
]
