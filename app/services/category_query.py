from app.core.errors import CategoryNotFoundError
from app.models import Category
from app.services.category_store import CategoryStore


class CategoryQueryService:
    """分类只读查询"""

    def __init__(self, store: CategoryStore):
        self.store = store

    def get_category(self, category_id: int) -> Category:
        category = self.store.get(category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    def get_categories(self) -> list[Category]:
        # 按序号升序，序号相同按创建先后
        return self.store.list_ordered()
