"""技能差距分析数据模型"""

from typing import Any, List, Literal

from pydantic import Field, model_validator

from .base import ContractModel, NonEmptyStr, Percentage
from .document import ResumeDocument, lift_data_uri_fields

# 提示词中给模型的数量指引，仅作建议不做硬校验
SKILL_COUNT_RANGE = (5, 7)
RECOMMENDATION_COUNT_RANGE = (2, 3)


class SkillGapRequest(ContractModel):
    """技能差距分析请求"""
    resume: ResumeDocument = Field(..., description="The user's resume (.pdf or .docx, max 5MB).")
    target_role: NonEmptyStr = Field(..., description="The target job role for the analysis.")

    @model_validator(mode="before")
    @classmethod
    def _lift_data_uris(cls, data: Any) -> Any:
        return lift_data_uri_fields(data, {"resumeDataUri": "resume"})


class SkillEntry(ContractModel):
    """单项技能评估（雷达图数据点）"""
    subject: NonEmptyStr = Field(..., description="The name of the skill, e.g. 'React' or 'Communication'.")
    your: Percentage = Field(..., description="The user's current skill level (0-100).")
    required: Percentage = Field(..., description="The required skill level for the role (0-100).")
    full_mark: Literal[100] = Field(100, description="Maximum of the radar chart axis. Always 100.")

    @property
    def gap(self) -> float:
        return self.required - self.your


class RecommendationEntry(ContractModel):
    """技能提升建议"""
    skill: NonEmptyStr = Field(..., description="The skill area for the recommendation.")
    recommendation: NonEmptyStr = Field(..., description="A specific, actionable recommendation for improvement.")


class SkillGapResult(ContractModel):
    """技能差距分析结果"""
    analysis: List[SkillEntry] = Field(..., description="An array of skill objects for the radar chart.")
    recommendations: List[RecommendationEntry] = Field(
        ..., description="An array of personalized recommendations to bridge skill gaps."
    )
    score: Percentage = Field(..., description="A score from 0-100 representing the resume's overall fit for the role.")

    def largest_gaps(self, limit: int = 3) -> List[SkillEntry]:
        """差距最大的技能，按差距降序"""
        return sorted(self.analysis, key=lambda entry: entry.gap, reverse=True)[:limit]

    def advisory_warnings(self) -> List[str]:
        """检查建议数量范围，返回偏离说明（不影响结果有效性）"""
        warnings = []
        low, high = SKILL_COUNT_RANGE
        if not low <= len(self.analysis) <= high:
            warnings.append(f"analysis has {len(self.analysis)} skills, expected {low}-{high}")
        low, high = RECOMMENDATION_COUNT_RANGE
        if not low <= len(self.recommendations) <= high:
            warnings.append(f"recommendations has {len(self.recommendations)} entries, expected {low}-{high}")
        return warnings
