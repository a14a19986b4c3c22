"""业务服务层"""

from .talent_service import TalentService, get_talent_service
from .navigation import Tool, navigation_for, is_tool_allowed

__all__ = [
    "TalentService",
    "get_talent_service",
    "Tool",
    "navigation_for",
    "is_tool_allowed",
]
