"""GET /v1/financial-health - Weighted financial health score"""

import time
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from expense_insights.api.v1.schemas import FinancialHealthResponse
from expense_insights.api.dependencies import get_insights_service, get_request_id
from expense_insights.domain.exceptions import InvalidTransactionDataError
from expense_insights.domain.insights import InsightsService
from expense_insights.infrastructure.observability.logging import log_health_score
from expense_insights.infrastructure.observability.metrics import ledger_read_failures_counter, record_health_score

router = APIRouter()


@router.get("/financial-health", response_model=FinancialHealthResponse)
def get_financial_health(
    request: Request,
    user_id: str = Query(..., min_length=1, description="User identifier"),
    service: InsightsService = Depends(get_insights_service),
):
    """
    Score budget adherence, savings progress, spending consistency and bill
    punctuality for the current month.

    Returns:
        Overall 0-100 score, letter grade, sub-scores and insights
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        score = service.compute_financial_health_score(user_id)

    except InvalidTransactionDataError as e:
        ledger_read_failures_counter.inc()
        logging.error(f"Malformed ledger data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Ledger data is malformed")

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_health_score(score.overall, score.grade.value)
    log_health_score(request_id, user_id, score.overall, score.grade.value, duration_ms)

    return FinancialHealthResponse.model_validate(score)
