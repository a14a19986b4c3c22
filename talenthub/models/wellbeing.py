"""身心健康建议数据模型"""

from typing import Optional

from pydantic import Field

from .base import ContractModel, NonEmptyStr


class WellbeingRequest(ContractModel):
    """健康建议请求"""
    mood: str = Field(..., min_length=2, max_length=50, description="The current mood of the user.")
    recent_activities: Optional[str] = Field(
        None, description="A comma separated list of recent activities the user has participated in."
    )


class WellbeingResult(ContractModel):
    """健康建议结果"""
    suggestion: NonEmptyStr = Field(..., description="A personalized suggestion for improving well-being.")
