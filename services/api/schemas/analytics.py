"""
Pydantic schemas for the analytics summary.
"""
from typing import List

from pydantic import BaseModel, Field


class Bucket(BaseModel):
    key: str = Field(..., description="Enum value, e.g. 'in-progress'")
    name: str = Field(..., description="Display name, e.g. 'In Progress'")
    count: int = Field(..., ge=0)
    percent: float = Field(..., ge=0.0, le=100.0)


class AnalyticsSummary(BaseModel):
    total: int
    by_severity: List[Bucket]
    by_status: List[Bucket]
