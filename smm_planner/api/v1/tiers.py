"""
Service tier catalog endpoint
"""
from fastapi import APIRouter, Query

from smm_planner.domain.schedule import count_tasks_for_month
from smm_planner.domain.tiers import TIER_DEFINITIONS


router = APIRouter(prefix="/api/v1/tiers", tags=["tiers"])


@router.get("")
def list_tiers(
    year: int = Query(2024, ge=1, le=9999),
    month: int = Query(1, ge=1, le=12),
):
    """Tier definitions with the number of tasks generated for a month (default: January, 31 days)"""
    return [
        {
            "tier": tier,
            "name": info["name"],
            "price": info["price"],
            "features": info["features"],
            "tasksPerMonth": count_tasks_for_month(tier, year, month),
        }
        for tier, info in TIER_DEFINITIONS.items()
    ]
