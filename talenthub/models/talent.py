"""人才库数据模型"""

from typing import List, Optional

from pydantic import BaseModel, Field


class CandidateProfile(BaseModel):
    """人才库候选人档案"""
    name: str = Field(..., description="姓名")
    role: str = Field(..., description="当前职位")
    skills: List[str] = Field(default_factory=list, description="技能")
    experience: int = Field(..., ge=0, description="工作年限")
    score: float = Field(..., ge=0, le=100, description="简历得分")
    avatar: Optional[str] = Field(None, description="头像链接")
    linkedin: Optional[str] = Field(None, description="LinkedIn 主页")
    github: Optional[str] = Field(None, description="GitHub 主页")


class TalentSearchParams(BaseModel):
    """人才搜索参数"""
    search: str = Field("", description="按姓名、职位或技能搜索")
    role: str = Field("all", description="职位筛选，all 表示全部")
    min_experience: int = Field(0, ge=0, description="最低工作年限")
    min_score: float = Field(0, ge=0, le=100, description="最低简历得分")
