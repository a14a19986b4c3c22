"""核心业务逻辑模块"""

from .exceptions import (
    TalentHubError, FieldViolation, ValidationError, UpstreamError,
    SchemaViolationError, TemplateError, AuthError,
)
from .validation import validate_payload
from .prompt_template import PromptTemplate, RenderedPrompt
from .flows import (
    Flow, rate_resume, analyze_skill_gaps, analyze_appraisal_feedback, get_wellbeing_suggestion,
)
from .session import Session, SessionManager, init_session_manager, get_session_manager, close_session_manager

__all__ = [
    "TalentHubError",
    "FieldViolation",
    "ValidationError",
    "UpstreamError",
    "SchemaViolationError",
    "TemplateError",
    "AuthError",
    "validate_payload",
    "PromptTemplate",
    "RenderedPrompt",
    "Flow",
    "rate_resume",
    "analyze_skill_gaps",
    "analyze_appraisal_feedback",
    "get_wellbeing_suggestion",
    "Session",
    "SessionManager",
    "init_session_manager",
    "get_session_manager",
    "close_session_manager",
]
