from pydantic import BaseModel, ConfigDict
from typing import Any, Optional


class CategoryAddRequest(BaseModel):
    """添加分类的请求（字段均可缺省，由服务层补默认值）"""
    categoryTitle: Optional[Any] = None
    categoryURI: Optional[Any] = None
    categoryDescription: Optional[Any] = None
    # 允许 "12" 这样的数字字符串
    categoryOrder: Optional[Any] = None

    model_config = ConfigDict(extra="ignore")

    def to_submission(self) -> dict[str, Any]:
        """只保留请求里实际出现的字段"""
        fields = {
            "categoryTitle": "title",
            "categoryURI": "uri",
            "categoryDescription": "description",
            "categoryOrder": "order",
        }
        sent = self.model_dump(exclude_unset=True)
        return {fields[key]: value for key, value in sent.items() if key in fields}


class CategoryUpdateRequest(CategoryAddRequest):
    oId: int


class CategoryOrderRequest(BaseModel):
    oId: int
    direction: str


class CategoryResponse(BaseModel):
    oId: str
    categoryTitle: str
    categoryURI: str
    categoryDescription: str
    categoryOrder: int

    @classmethod
    def from_model(cls, category) -> "CategoryResponse":
        return cls(
            oId=str(category.id),
            categoryTitle=category.title,
            categoryURI=category.uri,
            categoryDescription=category.description or "",
            categoryOrder=category.order,
        )


class ConsoleResult(BaseModel):
    """控制台统一响应：sc 表示成功与否，字段名与旧客户端保持一致"""
    sc: bool
    oId: Optional[str] = None
    msg: Optional[str] = None
    category: Optional[CategoryResponse] = None
    categories: Optional[list[CategoryResponse]] = None
