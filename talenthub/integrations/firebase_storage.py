"""Firebase Storage 集成模块"""

from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ..core.exceptions import TalentHubError
from ..utils.config import get_settings
from ..utils.logger import api_logger

settings = get_settings()


class StorageError(TalentHubError):
    """文件存储异常"""
    pass


class FirebaseStorageAPI:
    """Firebase Storage REST 客户端，按路径上传与下载文件"""

    def __init__(self, id_token: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.bucket = settings.firebase.storage_bucket
        self.base_url = settings.firebase.storage_url.rstrip("/")

        headers = {}
        if id_token:
            headers["Authorization"] = f"Firebase {id_token}"

        self.client = httpx.AsyncClient(
            timeout=settings.firebase.timeout,
            transport=transport,
            headers=headers
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.aclose()

    def _object_url(self, path: str) -> str:
        return f"{self.base_url}/b/{self.bucket}/o/{quote(path, safe='')}"

    async def _make_request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """发送API请求"""
        try:
            response = await self.client.request(method, url, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            api_logger.error(f"Firebase Storage HTTP错误: {e.response.status_code} - {e.response.text[:200]}")
            raise StorageError(f"HTTP错误: {e.response.status_code}") from e
        except httpx.RequestError as e:
            api_logger.error(f"Firebase Storage请求错误: {str(e)}")
            raise StorageError(f"网络请求失败: {str(e)}") from e

    async def upload(self, path: str, content: bytes, media_type: str) -> Dict[str, Any]:
        """上传文件，返回对象元数据"""
        response = await self._make_request(
            "POST",
            f"{self.base_url}/b/{self.bucket}/o",
            params={"name": path, "uploadType": "media"},
            content=content,
            headers={"Content-Type": media_type}
        )
        api_logger.info(f"文件上传成功: {path} ({len(content)} bytes)")
        return response.json()

    async def fetch(self, path: str) -> bytes:
        """按路径下载文件内容"""
        response = await self._make_request("GET", self._object_url(path), params={"alt": "media"})
        return response.content

    async def close(self):
        """关闭客户端"""
        await self.client.aclose()
