"""辅助函数模块"""

import re
import json
import base64
import binascii
import mimetypes
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

# Office Open XML 在部分系统的 mimetypes 表中缺失
mimetypes.add_type(
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document", ".docx"
)

DATA_URI_PATTERN = re.compile(
    r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+)(?P<params>(?:;[\w.+-]+=[\w.+-]+)*);base64,(?P<data>.*)$",
    re.DOTALL,
)


def truncate_text(text: str, max_length: int = 1000, suffix: str = "...") -> str:
    """截断文本到指定长度"""
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix


def encode_data_uri(content: bytes, media_type: str) -> str:
    """将二进制内容编码为 data URI"""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


def decode_data_uri(data_uri: str) -> Tuple[str, bytes]:
    """解析 data URI，返回 (媒体类型, 二进制内容)

    只接受 base64 编码的 data URI，格式为 ``data:<mimetype>;base64,<data>``。
    """
    match = DATA_URI_PATTERN.match(data_uri.strip())
    if not match:
        raise ValueError("Expected a data URI of the form 'data:<mimetype>;base64,<data>'.")

    try:
        content = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Data URI payload is not valid base64: {e}") from e

    return match.group("media_type").lower(), content


def guess_media_type(path: Union[str, Path]) -> Optional[str]:
    """根据文件扩展名推断媒体类型"""
    media_type, _ = mimetypes.guess_type(str(path))
    return media_type


def load_document(path: Union[str, Path], media_type: Optional[str] = None) -> Dict[str, Any]:
    """读取本地文件，返回可直接用于请求校验的文档负载"""
    path = Path(path)
    return {
        "content": path.read_bytes(),
        "media_type": media_type or guess_media_type(path) or "application/octet-stream",
    }


def extract_json_object(content: str) -> Any:
    """从模型回复中提取 JSON 对象

    模型有时会把 JSON 包在 markdown 代码块或说明文字里，这里取第一个 ``{``
    到最后一个 ``}`` 之间的内容解析。
    """
    json_start = content.find('{')
    json_end = content.rfind('}') + 1

    if json_start == -1 or json_end == 0:
        raise ValueError("No JSON object found in model output")

    return json.loads(content[json_start:json_end])
