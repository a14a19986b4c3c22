"""TalentHub 招聘助手"""

__version__ = "1.0.0"
__author__ = "TalentHub Team"
__description__ = "基于生成式AI的简历评分、技能差距分析与招聘辅助系统"

# 导出主要组件
from .core import (
    rate_resume,
    analyze_skill_gaps,
    analyze_appraisal_feedback,
    get_wellbeing_suggestion,
    validate_payload,
    get_session_manager,
)
from .services import get_talent_service
from .integrations import get_gemini_api
from .utils.config import get_config
from .utils.logger import app_logger

__all__ = [
    "rate_resume",
    "analyze_skill_gaps",
    "analyze_appraisal_feedback",
    "get_wellbeing_suggestion",
    "validate_payload",
    "get_session_manager",
    "get_talent_service",
    "get_gemini_api",
    "get_config",
    "app_logger",
]
