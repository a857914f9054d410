"""POST /v1/category-rules/match - Suggest a category for a description"""

from fastapi import APIRouter, Depends

from expense_insights.api.v1.schemas import CategoryMatchRequest, CategoryMatchResponse
from expense_insights.api.dependencies import get_insights_service
from expense_insights.domain.insights import InsightsService

router = APIRouter()


@router.post("/category-rules/match", response_model=CategoryMatchResponse)
def match_category_rule(
    request_body: CategoryMatchRequest,
    service: InsightsService = Depends(get_insights_service),
):
    """Apply the user's active rules; category is null when none match"""
    category = service.match_category(request_body.user_id, request_body.description)
    return CategoryMatchResponse(category=category)
