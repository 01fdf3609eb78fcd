from typing import Callable

from fastapi import Request

from app.services.pipeline.llm_service import GenerationClient
from app.services.pipeline.prep_pipeline import PrepGuidePipeline
from app.services.pipeline.request_guard import RequestGuard


def get_generation_client(request: Request) -> GenerationClient:
    """The generation client built once in the application lifespan."""
    return request.app.state.generation_client


def get_request_guard(request: Request) -> RequestGuard:
    return request.app.state.request_guard


def get_pipeline_factory(request: Request) -> Callable[..., PrepGuidePipeline]:
    """
    Dependency for providing a factory to create PrepGuidePipeline instances.
    A fresh pipeline (and correlation ID) is created per request.
    """
    generation_client = get_generation_client(request)

    def factory(correlation_id: str = None) -> PrepGuidePipeline:
        return PrepGuidePipeline(generation_client, correlation_id=correlation_id)
    return factory
