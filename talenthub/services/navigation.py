"""按角色划分的功能导航"""

from dataclasses import dataclass
from typing import Dict, List

from ..models.user import UserRole


@dataclass(frozen=True)
class Tool:
    """侧边栏功能项"""
    key: str
    label: str
    path: str


RESUME_SCREENING = Tool("resume-screening", "Resume Screening", "/api/resume-rating")
SKILL_GAP_ANALYSIS = Tool("skill-gap-analysis", "Skill Gap Analysis", "/api/skill-gap")
WELLNESS = Tool("wellness", "Wellness", "/api/wellbeing")
TALENT_SOURCING = Tool("talent-sourcing", "Talent Sourcing", "/api/talent")
APPRAISAL = Tool("appraisal", "Appraisal", "/api/appraisal")
SETTINGS = Tool("settings", "Settings", "/auth/session")

NAVIGATION: Dict[UserRole, List[Tool]] = {
    UserRole.APPLICANT: [RESUME_SCREENING, SKILL_GAP_ANALYSIS, WELLNESS, SETTINGS],
    UserRole.RECRUITER: [TALENT_SOURCING, APPRAISAL, SETTINGS],
}


def navigation_for(role: UserRole) -> List[Tool]:
    """角色可用的功能列表"""
    return list(NAVIGATION[role])


def is_tool_allowed(role: UserRole, tool: Tool) -> bool:
    return tool in NAVIGATION[role]
