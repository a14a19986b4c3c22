"""用户与会话数据模型"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """用户角色枚举"""
    APPLICANT = "applicant"  # 求职者
    RECRUITER = "recruiter"  # 招聘者


class SessionState(str, Enum):
    """会话状态枚举"""
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class AuthUser(BaseModel):
    """身份提供方返回的已登录用户"""
    uid: str = Field(..., description="用户ID")
    email: str = Field(..., description="邮箱")
    id_token: str = Field(..., repr=False, description="ID令牌")
    refresh_token: Optional[str] = Field(None, repr=False, description="刷新令牌")
    display_name: Optional[str] = Field(None, description="显示名称")


class Credentials(BaseModel):
    """登录/注册凭证"""
    email: str = Field(..., min_length=3, description="邮箱")
    password: str = Field(..., min_length=6, repr=False, description="密码")
    role: UserRole = Field(UserRole.APPLICANT, description="登录后使用的角色")
    display_name: Optional[str] = Field(None, description="注册时的用户名")
