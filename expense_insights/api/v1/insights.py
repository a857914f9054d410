"""GET /v1/insights - Period trends, category comparisons and spending patterns"""

import time
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from expense_insights.api.v1.schemas import InsightsResponseSchema, ValidationErrorResponse
from expense_insights.api.dependencies import get_insights_service, get_request_id
from expense_insights.config import settings
from expense_insights.domain.exceptions import InvalidQueryError, InvalidTransactionDataError
from expense_insights.domain.insights import InsightsService
from expense_insights.domain.query import parse_insights_query
from expense_insights.infrastructure.observability.logging import log_insights
from expense_insights.infrastructure.observability.metrics import (
    ledger_read_failures_counter,
    record_insights,
    record_validation_failure,
)

router = APIRouter()


@router.get(
    "/insights",
    response_model=InsightsResponseSchema,
    responses={400: {"model": ValidationErrorResponse}},
)
def get_insights(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    granularity: Optional[str] = Query(None, description="month | quarter | year"),
    start_date: Optional[str] = Query(None, description="ISO-8601 start of the current window"),
    end_date: Optional[str] = Query(None, description="ISO-8601 end of the current window (inclusive)"),
    service: InsightsService = Depends(get_insights_service),
):
    """
    Compute spending insights for a user.

    Flow:
    1. Validate query parameters (rejected before any aggregation)
    2. Resolve current window (explicit or trailing 6 months) and previous window
    3. Bucket, compare categories, summarize patterns
    4. Return the assembled response
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        query = parse_insights_query(
            granularity=granularity,
            start_date=start_date,
            end_date=end_date,
            timezone=settings.timezone,
            default_granularity=settings.default_granularity,
        )
    except InvalidQueryError as e:
        record_validation_failure(e.field)
        logging.warning(f"Invalid insights query: {e}", extra={"request_id": request_id, "field": e.field})
        raise HTTPException(status_code=400, detail={"message": e.message, "field": e.field})

    try:
        insights = service.compute_insights(user_id, query)

    except InvalidTransactionDataError as e:
        ledger_read_failures_counter.inc()
        logging.error(f"Malformed ledger data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Ledger data is malformed")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_insights(query.granularity.value)
    log_insights(
        request_id,
        user_id,
        query.granularity.value,
        len(insights.period_buckets),
        len(insights.category_trends),
        duration_ms,
    )

    return InsightsResponseSchema.model_validate(insights)
