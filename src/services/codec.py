"""JSON 编解码服务

使用 pydantic TypeAdapter，支持 dataclass、pydantic 模型、TypedDict 和内置类型。
"""

import decimal
import math
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter

T = TypeVar("T")


@lru_cache(maxsize=256)
def _adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def _ensure_finite(obj: Any):
    """JSON 不能表示 NaN 和 Infinity，遇到即抛出 ValueError"""
    if isinstance(obj, float):
        if not math.isfinite(obj):
            raise ValueError(f"Out of range float value: {obj!r}")
    elif isinstance(obj, decimal.Decimal):
        if not obj.is_finite():
            raise ValueError(f"Out of range decimal value: {obj!r}")
    elif isinstance(obj, dict):
        for key, item in obj.items():
            _ensure_finite(key)
            _ensure_finite(item)
    elif isinstance(obj, (list, tuple, set, frozenset)):
        for item in obj:
            _ensure_finite(item)


class JsonCodec:
    """JSON 编解码器"""

    def __init__(self, strict: bool = True):
        """初始化编解码器

        Args:
            strict: 严格模式下解码不做类型转换（如 "1" 不会变成 1）
        """
        self.strict = strict

    def encode(self, value: Any) -> bytes:
        """序列化为 JSON

        Raises:
            pydantic_core.PydanticSerializationError: 值无法序列化
            pydantic.PydanticSchemaGenerationError: 类型不受支持
            ValueError: 包含 NaN 或 Infinity
        """
        adapter = _adapter(type(value))
        _ensure_finite(adapter.dump_python(value))
        return adapter.dump_json(value)

    def decode(self, data: bytes, type_: type[T]) -> T:
        """反序列化为指定类型

        Raises:
            pydantic.ValidationError: JSON 格式错误或与类型不匹配
        """
        return _adapter(type_).validate_json(data, strict=self.strict)
