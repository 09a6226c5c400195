import uuid

from pydantic import BaseModel


class CriteriaResult(BaseModel):
    criteria_id: uuid.UUID
    criteria_name: str
    weight: float
    average: float
    scores: list[float]


class SubmissionResult(BaseModel):
    submission_id: uuid.UUID
    title: str
    participant_id: str
    participant_name: str | None = None
    ganado_id: uuid.UUID | None = None
    media_url: str | None = None
    criteria_scores: list[CriteriaResult]
    total_score: float


class CategoryResult(BaseModel):
    category_id: uuid.UUID
    category_name: str
    submissions: list[SubmissionResult]


class ResultsResponse(BaseModel):
    contest_id: uuid.UUID
    categories: list[CategoryResult]
