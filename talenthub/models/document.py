"""上传文档数据模型"""

from enum import Enum
from typing import Any, Dict

from pydantic import Field, model_validator

from .base import ContractModel
from ..utils.helpers import decode_data_uri, encode_data_uri

MAX_DOCUMENT_SIZE = 5 * 1024 * 1024  # 5MB


class ResumeMediaType(str, Enum):
    """简历允许的媒体类型"""
    PDF = "application/pdf"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class CertificateMediaType(str, Enum):
    """证书允许的媒体类型"""
    PDF = "application/pdf"
    PNG = "image/png"
    JPEG = "image/jpeg"


class Document(ContractModel):
    """上传文档：二进制内容 + 声明的媒体类型

    也可以直接传入 data URI 字符串，或带 ``dataUri`` 键的字典。
    """
    content: bytes = Field(..., max_length=MAX_DOCUMENT_SIZE, repr=False, description="原始文件内容")
    media_type: str = Field(..., description="声明的媒体类型")

    @model_validator(mode="before")
    @classmethod
    def _expand_data_uri(cls, data: Any) -> Any:
        if isinstance(data, str):
            data = {"data_uri": data}
        if isinstance(data, dict):
            data_uri = data.get("data_uri", data.get("dataUri"))
            if data_uri is not None:
                media_type, content = decode_data_uri(data_uri)
                return {"content": content, "media_type": media_type}
        return data

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def media_type_value(self) -> str:
        return self.media_type.value if isinstance(self.media_type, Enum) else self.media_type

    def to_data_uri(self) -> str:
        return encode_data_uri(self.content, self.media_type_value)


class ResumeDocument(Document):
    """简历文档（.pdf / .docx）"""
    media_type: ResumeMediaType


class CertificateDocument(Document):
    """证书文档（.pdf / .png / .jpeg）"""
    media_type: CertificateMediaType


def lift_data_uri_fields(data: Any, mapping: Dict[str, str]) -> Any:
    """把旧版的 ``*DataUri`` 字段映射到文档字段

    例如 ``{"resumeDataUri": "data:..."}`` -> ``{"resume": "data:..."}``。
    """
    if not isinstance(data, dict):
        return data
    data = dict(data)
    for legacy_key, field_name in mapping.items():
        if legacy_key in data and field_name not in data:
            data[field_name] = data.pop(legacy_key)
    return data
