"""请求/响应校验

所有约束在模型字段上声明（范围、长度、枚举、必填），pydantic 一次性校验并
收集全部错误，这里把错误转换为 :class:`FieldViolation` 列表。
"""

from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_snake

from .exceptions import FieldViolation, ValidationError

M = TypeVar("M", bound=BaseModel)

# pydantic 错误类型 -> 约束类别
_KIND_BY_ERROR_TYPE: Dict[str, str] = {
    "missing": "required",
    "greater_than": "range",
    "greater_than_equal": "range",
    "less_than": "range",
    "less_than_equal": "range",
    "string_too_short": "length",
    "string_too_long": "length",
    "bytes_too_short": "length",
    "bytes_too_long": "length",
    "too_short": "length",
    "too_long": "length",
    "enum": "enum",
    "literal_error": "enum",
}


def _error_kind(error_type: str) -> str:
    if error_type in _KIND_BY_ERROR_TYPE:
        return _KIND_BY_ERROR_TYPE[error_type]
    if error_type.endswith("_type") or error_type.endswith("_parsing"):
        return "type"
    return "value"


def _field_path(loc: tuple) -> str:
    if not loc:
        return "payload"
    return ".".join(to_snake(part) if isinstance(part, str) else str(part) for part in loc)


def _error_message(error: Dict[str, Any]) -> str:
    if error["type"] == "bytes_too_long":
        max_mb = error.get("ctx", {}).get("max_length", 0) / (1024 * 1024)
        return f"Max file size is {max_mb:g}MB."
    return error["msg"]


def violations_from(exc: PydanticValidationError) -> List[FieldViolation]:
    """把 pydantic 的校验错误转换为字段违规列表"""
    return [
        FieldViolation(
            field=_field_path(error["loc"]),
            kind=_error_kind(error["type"]),
            message=_error_message(error),
        )
        for error in exc.errors(include_url=False)
    ]


def validate_payload(model: Type[M], payload: Any) -> M:
    """校验未类型化的负载，返回强类型模型实例

    Raises:
        ValidationError: 负载违反任意字段约束，``violations`` 包含全部违规项
    """
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(model.__name__, violations_from(e)) from e
