"""
Service factory functions for dependency injection.

Wires settings into core services. Use cases should import from here.
"""

from billventory.config import get_settings
from billventory.core.services import BusinessSummaryService

# Singleton service instances
_business_summary_service: BusinessSummaryService | None = None


def get_business_summary_service() -> BusinessSummaryService:
    """Get or create BusinessSummaryService configured from report settings."""
    global _business_summary_service
    if _business_summary_service is None:
        report = get_settings().report
        _business_summary_service = BusinessSummaryService(
            low_stock_threshold=report.low_stock_threshold,
            well_stocked_threshold=report.well_stocked_threshold,
            top_customers=report.top_customers,
            recent_limit=report.recent_limit,
        )
    return _business_summary_service


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _business_summary_service
    _business_summary_service = None
