"""Project task distribution and AI summary response schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field


class ProjectTaskStats(BaseModel):
    project_id: int
    name: str
    task_count: int = 0
    completed: int = 0
    pending: int = 0
    ongoing: int = 0


class AnalyticsStatistics(BaseModel):
    total_projects: int = 0
    total_tasks: int = 0
    total_completed: int = 0
    total_pending: int = 0
    total_ongoing: int = 0
    overall_completion_rate: float = 0.0


class ProjectAnalyticsOut(BaseModel):
    projects: List[ProjectTaskStats] = Field(default_factory=list)
    statistics: AnalyticsStatistics


class SummarySections(BaseModel):
    executive_summary: str = ""
    priorities: List[str] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class ProjectSummaryOut(ProjectAnalyticsOut):
    summary: Optional[str] = None
    sections: Optional[SummarySections] = None
    model_used: Optional[str] = None
    error: Optional[str] = None
