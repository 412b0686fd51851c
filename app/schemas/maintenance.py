"""
Maintenance schemas for batch job results
"""
from typing import List
from pydantic import BaseModel, Field

from app.schemas.remote_work import WfhCleanupResult, WfhPendingStats


class AutoCheckoutResult(BaseModel):
    count: int = 0
    affected_ids: List[int] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    message: str


class ExpirySweepReport(BaseModel):
    results: WfhCleanupResult
    stats_before: WfhPendingStats
    stats_after: WfhPendingStats
