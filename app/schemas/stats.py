from pydantic import BaseModel


class ContestStatsResponse(BaseModel):
    total_participants: int
    total_submissions: int
    total_categories: int
    total_judges: int
    submissions_by_category: dict[str, int]
    participations_by_status: dict[str, int]
    submissions_by_status: dict[str, int]
