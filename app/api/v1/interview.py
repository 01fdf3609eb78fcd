import asyncio
import logging
import uuid
from typing import Callable
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from app.api.deps import get_pipeline_factory, get_request_guard
from app.core.exceptions import ExportError
from app.core.logger import set_correlation_id
from app.schemas.interview import ExportRequest, PrepGuideRequest
from app.services.pipeline.prep_pipeline import PrepGuidePipeline
from app.services.pipeline.request_guard import RequestGuard
from app.services.tools.pdf_export import export_filename, render_pdf_bytes
from app.services.tools.report_generator import ReportGenerator

logger = logging.getLogger(__name__)

interview_router = APIRouter()


def _attachment(filename: str) -> dict:
    """Content-Disposition header that survives non-ASCII company names."""
    ascii_name = filename.encode("ascii", "replace").decode("ascii").replace('"', "'")
    return {"Content-Disposition": f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"}


@interview_router.post("/prep-guide")
async def generate_prep_guide(
    body: PrepGuideRequest,
    pipeline_factory: Callable[..., PrepGuidePipeline] = Depends(get_pipeline_factory),
    guard: RequestGuard = Depends(get_request_guard),
):
    """
    Generates an interview prep guide for one company.

    Flow:
    1. Refuse if this client already has a generation in flight
    2. Build prompt, call Gemini with Google Search, validate the JSON
    3. Return the guide and its grounding sources, or raise the typed failure
    """
    async with guard.hold("generate", body.client_id):
        pipeline = pipeline_factory(correlation_id=str(uuid.uuid4()))
        result = await pipeline.run(body.company_name)

    # Error results are rendered by app_error_handler
    response = result.unwrap()
    return JSONResponse(content=response.to_wire())


@interview_router.post("/prep-guide/export/pdf")
async def export_prep_guide_pdf(
    body: ExportRequest,
    guard: RequestGuard = Depends(get_request_guard),
):
    """
    Render the guide and return it as a paginated A4 PDF attachment.
    A failed export leaves the client's guide untouched; it can simply retry.
    """
    set_correlation_id(str(uuid.uuid4()))
    async with guard.hold("export", body.client_id):
        report = ReportGenerator.render(body.guide)
        pdf_bytes = await asyncio.to_thread(render_pdf_bytes, report)

    download_filename = export_filename(body.guide.company_name, "pdf")
    logger.info(f"Generating download PDF file: {download_filename} ({len(pdf_bytes)} bytes)")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers=_attachment(download_filename),
    )


@interview_router.post("/prep-guide/export/txt")
async def export_prep_guide_txt(body: ExportRequest):
    """Generate and download the guide as a TXT file on-demand."""
    set_correlation_id(str(uuid.uuid4()))
    try:
        report = ReportGenerator.render(body.guide)
        text_content = ReportGenerator.generate_txt_report(report)
    except Exception as e:
        logger.error(f"Error generating text download: {e}", exc_info=True)
        raise ExportError("Could not generate the text report. Please try again.") from e

    download_filename = export_filename(body.guide.company_name, "txt")
    logger.info(f"Generating download text file: {download_filename}")
    return Response(
        content=text_content,
        media_type="text/plain; charset=utf-8",
        headers=_attachment(download_filename),
    )
