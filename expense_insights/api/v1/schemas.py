"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from expense_insights.domain.models import Grade, Priority, SpendingTrend, Trend


class DomainSchema(BaseModel):
    """Response schema populated from domain dataclasses"""

    model_config = ConfigDict(from_attributes=True)


class DateRangeSchema(DomainSchema):
    start: datetime
    end: datetime


class PeriodBucketSchema(DomainSchema):
    label: str
    range: DateRangeSchema
    total: int


class PeriodTotalSchema(DomainSchema):
    period: str
    total: int


class CategoryTrendSchema(DomainSchema):
    category: str
    current_total: int
    previous_total: int
    change: int
    change_percent: float
    trend: Trend
    period_data: List[PeriodTotalSchema]


class FinancialPatternSchema(DomainSchema):
    avg_monthly_spend: int
    highest_spend_category: str
    highest_spend_amount: int
    lowest_spend_category: str
    lowest_spend_amount: int
    spending_trend: SpendingTrend
    spending_trend_percent: float
    top_growing_category: Optional[str] = None
    top_growing_percent: float
    top_shrinking_category: Optional[str] = None
    top_shrinking_percent: float


class SpendingVelocitySchema(DomainSchema):
    daily_average: int
    weekly_average: int
    current_daily_rate: int
    projected_period_total: int
    days_elapsed: int
    days_remaining: int


class BudgetComparisonSchema(DomainSchema):
    category: str
    budget_amount: int
    spent: int
    remaining: int
    percent_used: int
    is_over_budget: bool


class SpendingAnomalySchema(DomainSchema):
    transaction_id: int
    category: str
    description: str
    occurred_at: datetime
    amount: int
    category_average: int
    deviation_percent: float


class RecommendationSchema(DomainSchema):
    title: str
    message: str
    priority: Priority
    action: Optional[str] = None


class InsightsResponseSchema(DomainSchema):
    """Response for GET /v1/insights"""

    period_buckets: List[PeriodBucketSchema]
    category_trends: List[CategoryTrendSchema]
    total_current_period: int
    total_previous_period: int
    overall_change: int
    overall_change_percent: float
    overall_trend: Trend
    financial_pattern: FinancialPatternSchema
    spending_velocity: SpendingVelocitySchema
    budget_comparisons: List[BudgetComparisonSchema]
    anomalies: List[SpendingAnomalySchema]
    recommendations: List[RecommendationSchema]


class FinancialHealthResponse(DomainSchema):
    """Response for GET /v1/financial-health"""

    overall: int = Field(..., ge=0, le=100)
    budget_adherence: int
    savings_rate: int
    spending_consistency: int
    bill_payment_score: int
    grade: Grade
    insights: List[str]


class CategoryMatchRequest(BaseModel):
    """Request body for POST /v1/category-rules/match"""

    user_id: str = Field(..., min_length=1, description="User identifier")
    description: str = Field(..., description="Expense description to categorize")


class CategoryMatchResponse(BaseModel):
    category: Optional[str] = None


class ValidationErrorDetail(BaseModel):
    message: str
    field: Optional[str] = None


class ValidationErrorResponse(BaseModel):
    """Body of a 400 response, as raised through HTTPException"""

    detail: ValidationErrorDetail
