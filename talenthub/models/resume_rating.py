"""简历评分数据模型"""

from typing import Any, List

from pydantic import Field, field_validator, model_validator

from .base import ContractModel, NonEmptyStr, Percentage
from .document import CertificateDocument, ResumeDocument, lift_data_uri_fields


class ResumeRatingRequest(ContractModel):
    """简历评分请求"""
    job_field: NonEmptyStr = Field(..., description="The job field the applicant is targeting, e.g. 'Web Development'.")
    resume: ResumeDocument = Field(..., description="The applicant's resume (.pdf or .docx, max 5MB).")
    certificates: List[CertificateDocument] = Field(
        default_factory=list,
        description="Optional supporting certificates (.pdf, .png or .jpeg, max 5MB each).",
    )
    work_experience: str = Field(
        ..., min_length=50, max_length=2000,
        description="Free-text description of relevant work experience.",
    )

    @model_validator(mode="before")
    @classmethod
    def _lift_data_uris(cls, data: Any) -> Any:
        return lift_data_uri_fields(data, {
            "resumeDataUri": "resume",
            "certificatesDataUris": "certificates",
        })

    @field_validator("certificates", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return [] if v is None else v


class ResumeRatingResult(ContractModel):
    """简历评分结果"""
    score: Percentage = Field(..., description="How well the resume fits the job field, from 0 to 100.")
    ai_comments: NonEmptyStr = Field(..., description="Commentary explaining the score and how to improve the resume.")
