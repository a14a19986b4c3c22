"""契约模型基类与通用约束类型"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContractModel(BaseModel):
    """请求/响应契约基类

    对外使用 camelCase 键名（``jobField``、``aiComments``），Python 侧使用
    snake_case 属性，两种写法在输入时都接受。
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# 可复用的字段约束
Percentage = Annotated[float, Field(ge=0, le=100)]
NonEmptyStr = Annotated[str, Field(min_length=1), AfterValidator(_not_blank)]
