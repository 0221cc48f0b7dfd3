"""分类管理的业务异常。

服务层只抛出这些类型；由路由层统一转换成 {sc, msg} 响应。
"""
from app.core.labels import get_label


class CategoryServiceError(Exception):
    """分类服务异常基类"""


class DuplicateCategoryError(CategoryServiceError):
    """URI 已被其他分类占用"""

    def __init__(self, uri: str):
        self.uri = uri
        super().__init__(f"{get_label('duplicatedCategoryURILabel')}: {uri}")


class CategoryNotFoundError(CategoryServiceError):
    """分类不存在"""

    def __init__(self, category_id):
        self.category_id = category_id
        super().__init__(f"{get_label('categoryNotFoundLabel')}: {category_id}")


class StorageError(CategoryServiceError):
    """存储层（数据库/事务）失败，不做重试，原样上抛"""


class CategoryOrderExhaustedError(CategoryServiceError):
    """当前最大序号已到上限，无法自动追加"""

    def __init__(self):
        super().__init__(get_label("categoryOrderExhaustedLabel"))
