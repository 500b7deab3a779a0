from typing import List, Union

from pydantic import BaseModel, Field


class ReportEntry(BaseModel):
    sum: Union[int, float]
    description: str
    day: int  # day of month, UTC


class ReportCosts(BaseModel):
    """One bucket per category; all five are always present."""

    food: List[ReportEntry] = Field(default_factory=list)
    health: List[ReportEntry] = Field(default_factory=list)
    housing: List[ReportEntry] = Field(default_factory=list)
    sport: List[ReportEntry] = Field(default_factory=list)
    education: List[ReportEntry] = Field(default_factory=list)


class MonthlyReport(BaseModel):
    userid: str
    year: int
    month: int
    costs: ReportCosts = Field(default_factory=ReportCosts)
