"""Firebase 身份认证集成模块"""

from typing import Any, Dict, Optional

import httpx

from ..core.exceptions import AuthError
from ..models.user import AuthUser
from ..utils.config import get_settings
from ..utils.logger import auth_logger

settings = get_settings()

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password. Please check your credentials or sign up."

# Identity Toolkit 错误码 -> 用户可读信息
ERROR_MESSAGES = {
    "INVALID_LOGIN_CREDENTIALS": INVALID_CREDENTIALS_MESSAGE,
    "INVALID_PASSWORD": INVALID_CREDENTIALS_MESSAGE,
    "EMAIL_NOT_FOUND": INVALID_CREDENTIALS_MESSAGE,
    "INVALID_EMAIL": "Please enter a valid email address.",
    "EMAIL_EXISTS": "An account with this email already exists. Please log in.",
    "WEAK_PASSWORD": "Password should be at least 6 characters.",
    "USER_DISABLED": "This account has been disabled.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts. Please try again later.",
}
DEFAULT_ERROR_MESSAGE = "An unexpected error occurred. Please try again."
INVALID_RESPONSE = "INVALID_RESPONSE"


class FirebaseAuthAPI:
    """Firebase Auth (Identity Toolkit REST) 客户端"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.firebase.api_key
        self.base_url = settings.firebase.auth_url.rstrip("/")

        self.client = httpx.AsyncClient(
            timeout=settings.firebase.timeout,
            transport=transport,
            headers={"Content-Type": "application/json"}
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.aclose()

    async def _make_request(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """发送API请求"""
        try:
            response = await self.client.post(
                f"{self.base_url}/{endpoint}",
                params={"key": self.api_key},
                json=payload
            )
        except httpx.RequestError as e:
            auth_logger.error(f"Firebase Auth请求错误: {str(e)}")
            raise AuthError(DEFAULT_ERROR_MESSAGE, code="NETWORK_REQUEST_FAILED") from e

        if response.is_error:
            code = self._error_code(response)
            auth_logger.warning(f"Firebase Auth {endpoint} 失败: {response.status_code} - {code}")
            raise AuthError(ERROR_MESSAGES.get(code, DEFAULT_ERROR_MESSAGE), code=code)

        try:
            result = response.json()
        except ValueError as e:
            auth_logger.error(f"Firebase Auth {endpoint} 响应不是合法JSON")
            raise AuthError(DEFAULT_ERROR_MESSAGE, code=INVALID_RESPONSE) from e
        if not isinstance(result, dict):
            auth_logger.error(f"Firebase Auth {endpoint} 响应格式错误: {type(result).__name__}")
            raise AuthError(DEFAULT_ERROR_MESSAGE, code=INVALID_RESPONSE)

        return result

    @staticmethod
    def _error_code(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return "UNKNOWN"
        error = body.get("error") if isinstance(body, dict) else None
        message = error.get("message", "") if isinstance(error, dict) else ""
        # 例如 "WEAK_PASSWORD : Password should be at least 6 characters"
        return message.split(":")[0].strip() or "UNKNOWN"

    @staticmethod
    def _to_user(result: Dict[str, Any]) -> AuthUser:
        missing = [key for key in ("localId", "idToken") if not result.get(key)]
        if missing:
            auth_logger.error(f"Firebase Auth 响应缺少字段: {missing}")
            raise AuthError(DEFAULT_ERROR_MESSAGE, code=INVALID_RESPONSE)
        return AuthUser(
            uid=result["localId"],
            email=result.get("email", ""),
            id_token=result["idToken"],
            refresh_token=result.get("refreshToken"),
            display_name=result.get("displayName") or None,
        )

    async def sign_in_with_password(self, email: str, password: str) -> AuthUser:
        """邮箱密码登录"""
        result = await self._make_request("accounts:signInWithPassword", {
            "email": email,
            "password": password,
            "returnSecureToken": True
        })
        user = self._to_user(result)
        auth_logger.info(f"用户登录成功: {user.uid}")
        return user

    async def sign_up(self, email: str, password: str, display_name: Optional[str] = None) -> AuthUser:
        """创建账号"""
        result = await self._make_request("accounts:signUp", {
            "email": email,
            "password": password,
            "returnSecureToken": True
        })

        user = self._to_user(result)

        if display_name:
            await self._make_request("accounts:update", {
                "idToken": user.id_token,
                "displayName": display_name,
                "returnSecureToken": False
            })
            user.display_name = display_name

        auth_logger.info(f"用户注册成功: {user.uid}")
        return user

    async def close(self):
        """关闭客户端"""
        await self.client.aclose()
