"""
Maintenance Endpoints - Batch jobs for external cron callers and operators
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas import AutoCheckoutResult, ExpirySweepReport, WfhPendingStats, DataResponse
from app.api.deps import require_operator, maintenance_service

router = APIRouter()


@router.post(
    "/expiry-sweep",
    response_model=DataResponse[ExpirySweepReport],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_operator)]
)
async def run_expiry_sweep(db: Session = Depends(get_db)):
    """
    Auto-reject pending WFH logs whose day has passed

    **Authorization:**
    - Requires role level >= 50 (Admin or above), or
    - X-Cron-Key header matching CRON_API_KEY

    **Use case:**
    - Should be run daily shortly after midnight
    - Safe to re-run: already resolved logs are skipped
    """
    report = maintenance_service.run_expiry_sweep(db)

    return DataResponse(
        success=True,
        message=f"WFH expiry sweep completed: {report.results.processed_count} processed",
        data=report
    )


@router.post(
    "/auto-checkout",
    response_model=DataResponse[AutoCheckoutResult],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_operator)]
)
async def run_auto_checkout(db: Session = Depends(get_db)):
    """
    Close today's open attendance rows at the auto check-out time

    **Authorization:**
    - Requires role level >= 50 (Admin or above), or
    - X-Cron-Key header matching CRON_API_KEY

    **Use case:**
    - Should be run daily at AUTO_CHECKOUT_TIME
    - Before the cutoff it returns "Not time yet" and changes nothing
    """
    result = maintenance_service.run_auto_checkout(db)

    return DataResponse(
        success=True,
        message="Auto check-out completed",
        data=result
    )


@router.get(
    "/wfh-stats",
    response_model=DataResponse[WfhPendingStats],
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(require_operator)]
)
async def get_wfh_stats(
    recent_days: int = Query(7, ge=1, le=90, description="Window for recent_count in days"),
    db: Session = Depends(get_db)
):
    """
    Pending WFH statistics for the admin dashboard

    **Authorization:**
    - Requires role level >= 50 (Admin or above), or
    - X-Cron-Key header matching CRON_API_KEY
    """
    stats = maintenance_service.cleanup_service.get_wfh_pending_stats(db, recent_days=recent_days)

    return DataResponse(
        success=True,
        message="WFH statistics retrieved successfully",
        data=stats
    )
