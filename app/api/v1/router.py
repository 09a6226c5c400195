from fastapi import APIRouter

from app.api.v1.endpoints import (
    auth, categories, companies, contests, criadores, criteria, ganado, judges,
    participants, results, scores, stats, submissions,
)

api_router = APIRouter(prefix="/api/v1")

# Identity
api_router.include_router(auth.router, tags=["Auth"])

# Catalog
api_router.include_router(companies.router, tags=["Companies"])
api_router.include_router(criadores.router, tags=["Criadores"])
api_router.include_router(ganado.router, tags=["Ganado"])

# Contests
api_router.include_router(contests.router, tags=["Contests"])
api_router.include_router(categories.router, tags=["Contests - Categories"])
api_router.include_router(criteria.router, tags=["Contests - Criteria"])
api_router.include_router(judges.router, tags=["Contests - Judges"])
api_router.include_router(participants.router, tags=["Contests - Participants"])
api_router.include_router(submissions.router, tags=["Contests - Submissions"])
api_router.include_router(scores.router, tags=["Contests - Scores"])
api_router.include_router(results.router, tags=["Contests - Results"])
api_router.include_router(stats.router, tags=["Contests - Stats"])
