"""Reporting endpoints."""

from fastapi import APIRouter, Depends

from billventory.api.dependencies import get_business_summary_use_case
from billventory.application.dto.responses import BusinessSummaryResponse
from billventory.application.use_cases.business_summary import BusinessSummaryUseCase

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.get("/summary", response_model=BusinessSummaryResponse)
async def business_summary(
    use_case: BusinessSummaryUseCase = Depends(get_business_summary_use_case),
) -> BusinessSummaryResponse:
    """Revenue, expenses, receivables and stock health."""
    summary = await use_case.execute()
    return use_case.to_response(summary)
