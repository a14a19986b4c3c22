"""绩效评估反馈分析数据模型"""

from typing import Annotated

from pydantic import Field

from .base import ContractModel, NonEmptyStr

FeedbackText = Annotated[str, Field(min_length=50, max_length=5000)]


class AppraisalFeedbackRequest(ContractModel):
    """绩效反馈分析请求"""
    employee_name: NonEmptyStr = Field(..., description="The name of the employee being appraised.")
    job_title: str = Field(..., min_length=2, description="The employee's job title.")
    feedback_text: FeedbackText = Field(..., description="Raw performance feedback and comments about the employee.")


class AppraisalFeedbackResult(ContractModel):
    """绩效反馈分析结果"""
    summary: NonEmptyStr = Field(..., description="A concise summary of the feedback.")
    key_insights: NonEmptyStr = Field(..., description="Key strengths and areas for improvement found in the feedback.")
    recommendations: NonEmptyStr = Field(..., description="Actionable recommendations for the employee's development.")
