"""提示词模板

模板由有序片段组成：

- :class:`Text`        字面文本
- :class:`Slot`        标量字段替换
- :class:`MediaSlot`   内联文档（单个或列表）
- :class:`Conditional` 仅当可选字段存在且非空时渲染的子片段

渲染结果是文本片段与文档片段交替的有序列表，直接对应模型请求的 parts。
源码语法：``{{field}}``、``{{media field}}``、``{{#if field}} ... {{/if}}``。
"""

import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence, Tuple, Union

from .exceptions import TemplateError
from ..models.document import Document


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Slot:
    name: str


@dataclass(frozen=True)
class MediaSlot:
    name: str


@dataclass(frozen=True)
class Conditional:
    name: str
    segments: Tuple["Segment", ...]


Segment = Union[Text, Slot, MediaSlot, Conditional]


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class MediaPart:
    media_type: str
    content: bytes

    @classmethod
    def from_document(cls, document: Document) -> "MediaPart":
        return cls(media_type=document.media_type_value, content=document.content)


Part = Union[TextPart, MediaPart]


@dataclass(frozen=True)
class RenderedPrompt:
    """渲染后的提示词，相邻文本片段已合并"""
    parts: Tuple[Part, ...]

    @property
    def text(self) -> str:
        """仅文本部分，用于日志和调试"""
        return "".join(part.text for part in self.parts if isinstance(part, TextPart))

    @property
    def media(self) -> List[MediaPart]:
        return [part for part in self.parts if isinstance(part, MediaPart)]


_TAG_PATTERN = re.compile(r"\{\{\s*(#if\s+\w+|/if|media\s+\w+|\w+)\s*\}\}")


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, tuple)) and not value:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


class PromptTemplate:
    """由片段组成的提示词模板"""

    def __init__(self, name: str, segments: Sequence[Segment]):
        self.name = name
        self.segments = tuple(segments)

    @classmethod
    def parse(cls, name: str, source: str) -> "PromptTemplate":
        """把模板源码解析为片段序列"""
        # 栈中每层为 (条件字段名, 片段列表)，最外层字段名为 None
        stack: List[Tuple[Any, List[Segment]]] = [(None, [])]
        position = 0

        for match in _TAG_PATTERN.finditer(source):
            if match.start() > position:
                stack[-1][1].append(Text(source[position:match.start()]))
            position = match.end()

            tag = match.group(1)
            if tag.startswith("#if"):
                stack.append((tag.split()[1], []))
            elif tag == "/if":
                if len(stack) == 1:
                    raise TemplateError(f"模板 {name}: 多余的 {{{{/if}}}}")
                field_name, segments = stack.pop()
                stack[-1][1].append(Conditional(field_name, tuple(segments)))
            elif tag.startswith("media"):
                stack[-1][1].append(MediaSlot(tag.split()[1]))
            else:
                stack[-1][1].append(Slot(tag))

        if len(stack) != 1:
            raise TemplateError(f"模板 {name}: 条件块 {stack[-1][0]} 未闭合")
        if position < len(source):
            stack[0][1].append(Text(source[position:]))

        return cls(name, stack[0][1])

    @property
    def fields(self) -> List[str]:
        """模板引用的全部字段名"""
        names: List[str] = []

        def collect(segments):
            for segment in segments:
                if isinstance(segment, Conditional):
                    names.append(segment.name)
                    collect(segment.segments)
                elif isinstance(segment, (Slot, MediaSlot)):
                    names.append(segment.name)

        collect(self.segments)
        return list(dict.fromkeys(names))

    def render(self, values: Mapping[str, Any]) -> RenderedPrompt:
        """按字段值渲染模板

        Raises:
            TemplateError: 非条件块中的字段缺失，或文档字段类型不对
        """
        parts: List[Part] = []
        self._render_segments(self.segments, values, parts)
        return RenderedPrompt(tuple(parts))

    def _render_segments(self, segments, values: Mapping[str, Any], parts: List[Part]) -> None:
        for segment in segments:
            if isinstance(segment, Text):
                self._append_text(parts, segment.text)
            elif isinstance(segment, Slot):
                self._append_text(parts, str(self._lookup(values, segment.name)))
            elif isinstance(segment, MediaSlot):
                value = self._lookup(values, segment.name)
                documents = value if isinstance(value, (list, tuple)) else [value]
                for document in documents:
                    if not isinstance(document, Document):
                        raise TemplateError(
                            f"模板 {self.name}: 字段 {segment.name} 需要文档，实际为 {type(document).__name__}"
                        )
                    parts.append(MediaPart.from_document(document))
            elif isinstance(segment, Conditional):
                if _is_present(values.get(segment.name)):
                    self._render_segments(segment.segments, values, parts)

    def _lookup(self, values: Mapping[str, Any], name: str) -> Any:
        if name not in values or values[name] is None:
            raise TemplateError(f"模板 {self.name}: 缺少字段 {name}")
        return values[name]

    @staticmethod
    def _append_text(parts: List[Part], text: str) -> None:
        if not text:
            return
        if parts and isinstance(parts[-1], TextPart):
            parts[-1] = TextPart(parts[-1].text + text)
        else:
            parts.append(TextPart(text))

    def __repr__(self) -> str:
        return f"PromptTemplate(name={self.name!r}, fields={self.fields!r})"
