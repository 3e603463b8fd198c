
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from askqa.api.deps import get_query_service
from askqa.api.models import AskRequest, AskResponse, ErrorResponse, HealthResponse
from askqa.core.exceptions import AskQAError
from askqa.core.logging import get_logger
from askqa.services.query_service import QueryService

logger = get_logger(__name__)
router = APIRouter(tags=["askQA"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness probe; does not touch the database or the LLM."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(timespec="seconds"),
    )


@router.get("/ping", response_class=PlainTextResponse)
async def ping():
    return "pong"


@router.post(
    "/api/askQA",
    response_model=AskResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ask_qa(
    request: AskRequest,
    service: QueryService = Depends(get_query_service),
):
    """
    Natural language question → SQL + analysis + rows.
    Any failure after the request body is accepted is reported as 500.
    """
    logger.info(f"==== /api/askQA was called | question={request.question!r} ====")

    try:
        answer = await service.answer(request.question)
    except AskQAError as e:
        logger.error(f"askQA failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return AskResponse(results=answer.results, sql=answer.sql, analysis=answer.analysis)
