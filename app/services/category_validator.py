"""分类提交数据的规范化。

纯函数，不访问存储。入参宽松：类型不对的字段按零值处理（空串 / 0），
再套用默认值，因此这里不会抛出任何异常。
"""
from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_TITLE = "Category"
DEFAULT_URI = "/Category"

# 数据库 INTEGER 列为 64 位有符号整数
ORDER_MIN = -(2 ** 63)
ORDER_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class CategoryRecord:
    title: str
    uri: str
    description: str
    order: int

    @property
    def has_explicit_order(self) -> bool:
        return self.order > 0


def _coerce_str(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def _to_int(value: Any) -> int:
    # bool 是 int 的子类，单独排除
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else 0
    if isinstance(value, str):
        raw = value.strip()
        try:
            return int(raw)
        except ValueError:
            return 0
    return 0


def _coerce_int(value: Any) -> int:
    number = _to_int(value)
    # 超出存储范围的序号同样按零值处理
    if number < ORDER_MIN or number > ORDER_MAX:
        return 0
    return number


def normalize_submission(submission: Mapping[str, Any] | None) -> CategoryRecord:
    """把一份（可能不完整的）分类提交规范化为完整记录"""
    data = submission or {}
    return CategoryRecord(
        title=_coerce_str(data.get("title")) or DEFAULT_TITLE,
        uri=_coerce_str(data.get("uri")) or DEFAULT_URI,
        description=_coerce_str(data.get("description")),
        order=_coerce_int(data.get("order")),
    )

