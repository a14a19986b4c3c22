"""数据模型模块"""

from .base import ContractModel, Percentage, NonEmptyStr
from .document import (
    Document, ResumeDocument, CertificateDocument,
    ResumeMediaType, CertificateMediaType, MAX_DOCUMENT_SIZE,
)
from .resume_rating import ResumeRatingRequest, ResumeRatingResult
from .skill_gap import SkillGapRequest, SkillGapResult, SkillEntry, RecommendationEntry
from .appraisal import AppraisalFeedbackRequest, AppraisalFeedbackResult
from .wellbeing import WellbeingRequest, WellbeingResult
from .user import UserRole, SessionState, AuthUser, Credentials
from .talent import CandidateProfile, TalentSearchParams

__all__ = [
    "ContractModel",
    "Percentage",
    "NonEmptyStr",
    "Document",
    "ResumeDocument",
    "CertificateDocument",
    "ResumeMediaType",
    "CertificateMediaType",
    "MAX_DOCUMENT_SIZE",
    "ResumeRatingRequest",
    "ResumeRatingResult",
    "SkillGapRequest",
    "SkillGapResult",
    "SkillEntry",
    "RecommendationEntry",
    "AppraisalFeedbackRequest",
    "AppraisalFeedbackResult",
    "WellbeingRequest",
    "WellbeingResult",
    "UserRole",
    "SessionState",
    "AuthUser",
    "Credentials",
    "CandidateProfile",
    "TalentSearchParams",
]
