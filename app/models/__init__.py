from app.models.category import ContestCategory
from app.models.company import Company
from app.models.contest import Contest, ContestStatus, ContestType
from app.models.contest_role import ContestRole, ContestUserRole
from app.models.criador import Criador
from app.models.ganado import Ganado, Sexo
from app.models.judging import JudgingAssignment, JudgingCriteria, JudgingScore
from app.models.participation import ContestParticipation, ParticipationStatus
from app.models.submission import ContestSubmission, SubmissionMedia, SubmissionStatus
from app.models.user import User

__all__ = [
    "Company", "Contest", "ContestCategory", "ContestParticipation", "ContestRole",
    "ContestStatus", "ContestSubmission", "ContestType", "ContestUserRole", "Criador",
    "Ganado", "JudgingAssignment", "JudgingCriteria", "JudgingScore",
    "ParticipationStatus", "Sexo", "SubmissionMedia", "SubmissionStatus", "User",
]
