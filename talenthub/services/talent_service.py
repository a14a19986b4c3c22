"""人才搜索服务"""

from typing import Iterable, List, Optional

from ..models.talent import CandidateProfile, TalentSearchParams
from ..utils.logger import app_logger

ALL_ROLES = "all"

# 人才库示例数据
DEFAULT_CANDIDATES = [
    CandidateProfile(
        name="Elena Rodriguez",
        role="Senior Data Scientist",
        skills=["Python", "Machine Learning", "TensorFlow", "SQL"],
        experience=5,
        score=95,
    ),
    CandidateProfile(
        name="Ben Carter",
        role="Lead Frontend Developer",
        skills=["React", "TypeScript", "Next.js", "GraphQL"],
        experience=7,
        score=92,
    ),
    CandidateProfile(
        name="Aisha Khan",
        role="UX/UI Design Lead",
        skills=["Figma", "User Research", "Prototyping", "Design Systems"],
        experience=6,
        score=88,
    ),
    CandidateProfile(
        name="Marcus Chen",
        role="DevOps Engineer",
        skills=["AWS", "Docker", "Kubernetes", "CI/CD"],
        experience=4,
        score=85,
    ),
    CandidateProfile(
        name="Sophia Loren",
        role="Senior Data Scientist",
        skills=["Python", "PyTorch", "Scikit-learn", "BigQuery"],
        experience=6,
        score=98,
    ),
    CandidateProfile(
        name="James Sullivan",
        role="Lead Frontend Developer",
        skills=["Vue.js", "TypeScript", "Nuxt.js", "Jest"],
        experience=8,
        score=90,
    ),
]


class TalentService:
    """人才搜索服务"""

    def __init__(self, candidates: Optional[Iterable[CandidateProfile]] = None):
        self.candidates: List[CandidateProfile] = list(DEFAULT_CANDIDATES if candidates is None else candidates)

    @staticmethod
    def _matches(candidate: CandidateProfile, params: TalentSearchParams) -> bool:
        search = params.search.strip().lower()
        matches_search = (
            not search
            or search in candidate.name.lower()
            or search in candidate.role.lower()
            or any(search in skill.lower() for skill in candidate.skills)
        )
        matches_role = params.role == ALL_ROLES or candidate.role == params.role

        return (
            matches_search
            and matches_role
            and candidate.experience >= params.min_experience
            and candidate.score >= params.min_score
        )

    def search(self, params: Optional[TalentSearchParams] = None) -> List[CandidateProfile]:
        """按条件筛选候选人，保持原有顺序"""
        params = params or TalentSearchParams()
        results = [candidate for candidate in self.candidates if self._matches(candidate, params)]

        app_logger.debug(
            f"人才搜索: search={params.search!r} role={params.role} "
            f"min_experience={params.min_experience} min_score={params.min_score} -> {len(results)}条"
        )

        return results

    def roles(self) -> List[str]:
        """人才库中的全部职位（去重，保持顺序）"""
        return list(dict.fromkeys(candidate.role for candidate in self.candidates))


# 全局服务实例
_talent_service_instance = None


def get_talent_service() -> TalentService:
    """获取人才搜索服务实例"""
    global _talent_service_instance
    if _talent_service_instance is None:
        _talent_service_instance = TalentService()
    return _talent_service_instance
