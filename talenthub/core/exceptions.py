"""TalentHub 异常定义"""

from dataclasses import dataclass
from typing import Dict, List, Optional


class TalentHubError(Exception):
    """TalentHub 基础异常"""
    pass


@dataclass(frozen=True)
class FieldViolation:
    """单个字段的约束违规"""
    field: str
    kind: str  # required / type / range / length / enum / value
    message: str


class ValidationError(TalentHubError):
    """调用方输入不合法

    ``violations`` 包含一次校验中收集到的全部字段违规，表现层可以一次性展示。
    """

    def __init__(self, model_name: str, violations: List[FieldViolation]):
        self.model_name = model_name
        self.violations = list(violations)
        fields = ", ".join(v.field for v in self.violations)
        super().__init__(f"{model_name} 校验失败: {len(self.violations)} 处错误 ({fields})")

    @property
    def fields(self) -> List[str]:
        return [v.field for v in self.violations]

    def as_dict(self) -> Dict[str, List[str]]:
        """按字段分组的错误信息"""
        grouped: Dict[str, List[str]] = {}
        for violation in self.violations:
            grouped.setdefault(violation.field, []).append(violation.message)
        return grouped


class UpstreamError(TalentHubError):
    """外部模型服务不可达或返回非成功状态"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class SchemaViolationError(TalentHubError):
    """模型输出无法解析为声明的响应结构"""

    def __init__(self, message: str, raw_output: Optional[str] = None, violations: Optional[List[FieldViolation]] = None):
        self.raw_output = raw_output
        self.violations = list(violations or [])
        super().__init__(message)


class TemplateError(TalentHubError):
    """提示词模板定义或渲染错误"""
    pass


class AuthError(TalentHubError):
    """身份认证失败"""

    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code
        super().__init__(message)
