"""Gemini API集成模块"""

import base64
import json
from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..core.exceptions import UpstreamError
from ..core.prompt_template import MediaPart, Part, TextPart
from ..utils.config import get_settings
from ..utils.logger import ai_logger

settings = get_settings()

OUTPUT_INSTRUCTION = (
    "\n\nRespond ONLY with a JSON object that conforms to the following JSON schema. "
    "Do not add keys and do not wrap the JSON in markdown.\n"
)


class GeminiAPI:
    """Gemini generateContent 客户端

    每次调用只发送一次请求，不做重试；网络错误与非成功状态统一抛出
    :class:`UpstreamError`。
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.gemini.api_key
        self.base_url = settings.gemini.base_url.rstrip("/")
        self.model = settings.gemini.model
        self.timeout = settings.gemini.timeout
        self.temperature = settings.gemini.temperature

        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            transport=transport,
            headers={
                "x-goog-api-key": self.api_key,
                "Content-Type": "application/json"
            }
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.aclose()

    @staticmethod
    def _build_parts(parts: Sequence[Part], output_schema: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """构建请求 parts，文档以 inline_data 内联"""
        payload_parts: List[Dict[str, Any]] = []
        for part in parts:
            if isinstance(part, TextPart):
                payload_parts.append({"text": part.text})
            elif isinstance(part, MediaPart):
                payload_parts.append({
                    "inline_data": {
                        "mime_type": part.media_type,
                        "data": base64.b64encode(part.content).decode("ascii"),
                    }
                })

        if output_schema is not None:
            payload_parts.append({"text": OUTPUT_INSTRUCTION + json.dumps(output_schema, ensure_ascii=False)})

        return payload_parts

    async def _make_request(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """发送API请求"""
        url = f"{self.base_url}/models/{self.model}:generateContent"

        try:
            ai_logger.info(f"发送Gemini API请求: {self.model}")

            response = await self.client.post(url, json=payload)
            response.raise_for_status()
            result = response.json()

            ai_logger.info(f"Gemini API响应成功, tokens: {result.get('usageMetadata', {})}")

            return result

        except httpx.HTTPStatusError as e:
            ai_logger.error(f"Gemini API HTTP错误: {e.response.status_code} - {e.response.text[:500]}")
            raise UpstreamError(f"Model service returned status {e.response.status_code}",
                                status_code=e.response.status_code) from e
        except httpx.RequestError as e:
            ai_logger.error(f"Gemini API请求错误: {str(e)}")
            raise UpstreamError(f"Model service unreachable: {e}") from e
        except ValueError as e:
            ai_logger.error(f"Gemini API响应不是合法JSON: {str(e)}")
            raise UpstreamError("Model service returned a malformed response") from e

    async def generate(self, parts: Sequence[Part], output_schema: Optional[Dict[str, Any]] = None,
                       **kwargs) -> str:
        """生成内容，返回模型回复文本

        ``output_schema`` 不为空时要求模型输出 JSON，并把 schema 附在提示词末尾。
        """
        generation_config: Dict[str, Any] = {
            "temperature": kwargs.get("temperature", self.temperature),
        }
        if "max_output_tokens" in kwargs:
            generation_config["maxOutputTokens"] = kwargs["max_output_tokens"]
        if output_schema is not None:
            generation_config["responseMimeType"] = "application/json"

        payload = {
            "contents": [{"role": "user", "parts": self._build_parts(parts, output_schema)}],
            "generationConfig": generation_config,
        }

        result = await self._make_request(payload)
        if not isinstance(result, dict):
            ai_logger.error(f"Gemini API响应格式错误: {type(result).__name__}")
            raise UpstreamError("Model service returned a malformed response")

        candidates = result.get("candidates") or []
        if not candidates:
            block_reason = result.get("promptFeedback", {}).get("blockReason", "unknown")
            ai_logger.error(f"Gemini API未返回候选结果, blockReason: {block_reason}")
            raise UpstreamError(f"Model service returned no candidates (block reason: {block_reason})")

        content_parts = candidates[0].get("content", {}).get("parts", [])
        text = "".join(part.get("text", "") for part in content_parts)

        ai_logger.debug(f"Gemini 回复长度: {len(text)}, finishReason: {candidates[0].get('finishReason')}")

        return text

    async def generate_json(self, parts: Sequence[Part], output_schema: Dict[str, Any], **kwargs) -> str:
        """按 JSON schema 生成结构化内容，返回原始文本，由调用方解析校验"""
        return await self.generate(parts, output_schema=output_schema, **kwargs)

    async def close(self):
        """关闭客户端"""
        await self.client.aclose()


# 全局API实例
_api_instance = None


async def get_gemini_api() -> GeminiAPI:
    """获取Gemini API实例"""
    global _api_instance
    if _api_instance is None:
        _api_instance = GeminiAPI()
    return _api_instance


async def close_gemini_api():
    """关闭API实例"""
    global _api_instance
    if _api_instance:
        await _api_instance.close()
        _api_instance = None
