"""会话管理

认证状态保存在显式的 :class:`Session` 对象中，由进程内唯一的
:class:`SessionManager` 持有。状态流转：

    unauthenticated -> authenticating -> authenticated
                            |                  |
                            +-> unauthenticated <- sign_out

状态变化通过 ``subscribe`` 注册的回调统一通知。
"""

import asyncio
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .exceptions import AuthError
from ..integrations.firebase_auth import FirebaseAuthAPI
from ..models.user import AuthUser, Credentials, SessionState, UserRole
from ..utils.logger import auth_logger

SessionListener = Callable[["Session"], object]


@dataclass
class Session:
    """单个用户会话"""
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    state: SessionState = SessionState.UNAUTHENTICATED
    user: Optional[AuthUser] = None
    role: UserRole = UserRole.APPLICANT

    @property
    def is_authenticated(self) -> bool:
        return self.state == SessionState.AUTHENTICATED

    def to_dict(self) -> Dict[str, object]:
        return {
            "session_id": self.session_id,
            "state": self.state.value,
            "role": self.role.value,
            "is_authenticated": self.is_authenticated,
            "email": self.user.email if self.user else None,
            "display_name": self.user.display_name if self.user else None,
        }


class SessionManager:
    """会话管理器"""

    def __init__(self, auth_api: Optional[FirebaseAuthAPI] = None):
        self.auth_api = auth_api or FirebaseAuthAPI()
        self.sessions: Dict[str, Session] = {}
        self._listeners: List[SessionListener] = []

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """注册状态变化回调，返回取消订阅函数"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _notify(self, session: Session):
        """触发回调函数"""
        for listener in list(self._listeners):
            try:
                result = listener(session)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                auth_logger.error(f"会话回调执行失败: {str(e)}")

    async def _transition(self, session: Session, state: SessionState):
        auth_logger.debug(f"会话 {session.session_id[:8]}: {session.state.value} -> {state.value}")
        session.state = state
        await self._notify(session)

    async def _authenticate(self, credentials: Credentials, create_account: bool) -> Session:
        session = Session(role=credentials.role)
        await self._transition(session, SessionState.AUTHENTICATING)

        try:
            if create_account:
                user = await self.auth_api.sign_up(
                    credentials.email, credentials.password, credentials.display_name
                )
            else:
                user = await self.auth_api.sign_in_with_password(credentials.email, credentials.password)
        except AuthError:
            await self._transition(session, SessionState.UNAUTHENTICATED)
            raise

        session.user = user
        self.sessions[session.session_id] = session
        await self._transition(session, SessionState.AUTHENTICATED)

        auth_logger.info(f"会话已建立: {user.uid} - 角色: {session.role.value}")
        return session

    async def sign_in(self, credentials: Credentials) -> Session:
        """登录并建立会话"""
        return await self._authenticate(credentials, create_account=False)

    async def sign_up(self, credentials: Credentials) -> Session:
        """注册账号并建立会话"""
        return await self._authenticate(credentials, create_account=True)

    def get(self, session_id: Optional[str]) -> Optional[Session]:
        """获取已认证会话"""
        if not session_id:
            return None
        return self.sessions.get(session_id)

    async def set_role(self, session_id: str, role: UserRole) -> Session:
        """切换会话角色"""
        session = self.get(session_id)
        if session is None:
            raise AuthError("Not signed in.", code="NO_SESSION")
        session.role = role
        await self._notify(session)
        return session

    async def sign_out(self, session_id: str) -> bool:
        """退出登录"""
        session = self.sessions.pop(session_id, None)
        if session is None:
            return False
        session.user = None
        await self._transition(session, SessionState.UNAUTHENTICATED)
        auth_logger.info(f"会话已退出: {session_id[:8]}")
        return True

    async def close(self):
        """结束全部会话并释放客户端"""
        for session_id in list(self.sessions):
            await self.sign_out(session_id)
        self._listeners.clear()
        await self.auth_api.close()


# 全局会话管理器
_session_manager: Optional[SessionManager] = None


def init_session_manager(auth_api: Optional[FirebaseAuthAPI] = None) -> SessionManager:
    """启动时初始化会话管理器"""
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager(auth_api)
    return _session_manager


def get_session_manager() -> SessionManager:
    """获取会话管理器实例"""
    if _session_manager is None:
        raise RuntimeError("会话管理器未初始化")
    return _session_manager


async def close_session_manager():
    """关闭会话管理器"""
    global _session_manager
    if _session_manager:
        await _session_manager.close()
        _session_manager = None
