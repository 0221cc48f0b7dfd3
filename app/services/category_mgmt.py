"""分类管理服务：分类的唯一写入口。

保证每次成功调用后：
- uri 在所有分类中唯一（检查与写入在同一事务内，且持有进程内写锁；
  数据库唯一约束兜底跨进程并发）
- 未显式指定排序（<= 0）时，新分类排在当前最大序号之后
"""
import logging
import threading
from dataclasses import replace
from typing import Any, Mapping

from app.core.config import settings
from app.core.errors import CategoryNotFoundError, CategoryOrderExhaustedError, DuplicateCategoryError
from app.core.labels import get_label
from app.services.category_store import CategoryStore
from app.services.category_validator import ORDER_MAX, normalize_submission

logger = logging.getLogger(__name__)

# 串行化“查重 + 写入”，所有服务实例共享
_category_write_lock = threading.Lock()

DIRECTIONS = ("up", "down")


class CategoryMgmtService:
    def __init__(self, store: CategoryStore, order_seed: int | None = None):
        self.store = store
        self.order_seed = settings.CATEGORY_ORDER_SEED if order_seed is None else order_seed

    def _next_order(self) -> int:
        current_max = self.store.max_order()
        if current_max is None:
            return self.order_seed
        if current_max >= ORDER_MAX:
            raise CategoryOrderExhaustedError()
        return current_max + 1

    def add_category(self, submission: Mapping[str, Any] | None) -> int:
        """添加分类，返回新分类 id。

        uri 已存在时抛 DuplicateCategoryError；数据库失败抛 StorageError（不重试）。
        """
        record = normalize_submission(submission)

        with _category_write_lock, self.store.transaction():
            if not record.has_explicit_order:
                record = replace(record, order=self._next_order())

            if self.store.find_by_uri(record.uri) is not None:
                raise DuplicateCategoryError(record.uri)

            category_id = self.store.insert(record)

        logger.info(f"分类已创建: id={category_id}, uri={record.uri}, order={record.order}")
        return category_id

    def update_category(self, category_id: int, submission: Mapping[str, Any] | None) -> None:
        """更新分类；排序 <= 0 时保持原序号"""
        record = normalize_submission(submission)

        with _category_write_lock, self.store.transaction():
            category = self.store.get(category_id)
            if category is None:
                raise CategoryNotFoundError(category_id)

            if not record.has_explicit_order:
                record = replace(record, order=category.order)

            owner = self.store.find_by_uri(record.uri)
            if owner is not None and owner.id != category.id:
                raise DuplicateCategoryError(record.uri)

            self.store.update(category, record)

        logger.info(f"分类已更新: id={category_id}, uri={record.uri}")

    def remove_category(self, category_id: int) -> None:
        # 删除后不压缩序号，允许出现空档
        with self.store.transaction():
            category = self.store.get(category_id)
            if category is None:
                raise CategoryNotFoundError(category_id)
            self.store.delete(category)

        logger.info(f"分类已删除: id={category_id}")

    def change_order(self, category_id: int, direction: str) -> None:
        """与相邻分类交换序号；已在最前/最后时不做任何事"""
        if direction not in DIRECTIONS:
            raise ValueError(get_label("invalidDirectionLabel"))

        with _category_write_lock, self.store.transaction():
            category = self.store.get(category_id)
            if category is None:
                raise CategoryNotFoundError(category_id)

            neighbor = self.store.neighbor(category, direction)
            if neighbor is None:
                return

            if category.order != neighbor.order:
                mine, theirs = category.order, neighbor.order
                self.store.set_order(category, theirs)
                self.store.set_order(neighbor, mine)
            else:
                self._swap_tied(category, neighbor)

        logger.info(f"分类排序已调整: id={category_id}, direction={direction}")

    def _swap_tied(self, category, neighbor) -> None:
        # 序号相同时先后只由 id 决定，交换序号无效：
        # 在列表中交换两者位置，再从交换处起把序号补成严格递增（只增不减）
        ordered = self.store.list_ordered()
        ids = [c.id for c in ordered]
        i, j = ids.index(category.id), ids.index(neighbor.id)
        ordered[i], ordered[j] = ordered[j], ordered[i]

        prev = None
        for item in ordered[min(i, j):]:
            if prev is not None and item.order <= prev:
                if prev >= ORDER_MAX:
                    raise CategoryOrderExhaustedError()
                self.store.set_order(item, prev + 1)
            prev = item.order
