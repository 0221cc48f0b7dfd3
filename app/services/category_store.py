from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import and_, func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateCategoryError, StorageError
from app.models import Category
from app.services.category_validator import CategoryRecord


URI_CONSTRAINT = "uq_category_uri"


def _is_uri_conflict(exc: IntegrityError) -> bool:
    # SQLite 只报列名（category.uri），MySQL/PostgreSQL 会带上约束名
    message = str(exc.orig)
    return URI_CONSTRAINT in message or "category.uri" in message


class CategoryStore:
    """分类表的读写封装。

    所有数据库异常在这里统一转换：uri 唯一约束冲突 -> DuplicateCategoryError，
    其余 SQLAlchemyError（含其他约束失败）-> StorageError。写操作只 flush，提交由 transaction() 负责。
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self) -> Iterator["CategoryStore"]:
        # 已在事务中（调用方还有未提交的写入）时只开 SAVEPOINT，失败只回滚到保存点，
        # 提交交给外层事务的所有者；否则开启并提交一个独立事务
        try:
            if self.db.in_transaction():
                with self.db.begin_nested():
                    yield self
            else:
                with self.db.begin():
                    yield self
        except SQLAlchemyError as exc:
            raise StorageError("分类数据写入失败") from exc

    def _flush(self, record: CategoryRecord) -> None:
        try:
            self.db.flush()
        except IntegrityError as exc:
            if _is_uri_conflict(exc):
                raise DuplicateCategoryError(record.uri) from exc
            raise StorageError("分类数据写入失败") from exc
        except SQLAlchemyError as exc:
            raise StorageError("分类数据写入失败") from exc

    def get(self, category_id: int) -> Optional[Category]:
        try:
            return self.db.get(Category, category_id)
        except SQLAlchemyError as exc:
            raise StorageError("分类查询失败") from exc

    def find_by_uri(self, uri: str) -> Optional[Category]:
        try:
            return self.db.query(Category).filter(Category.uri == uri).first()
        except SQLAlchemyError as exc:
            raise StorageError("分类查询失败") from exc

    def max_order(self) -> Optional[int]:
        try:
            return self.db.query(func.max(Category.order)).scalar()
        except SQLAlchemyError as exc:
            raise StorageError("分类查询失败") from exc

    def list_ordered(self) -> list[Category]:
        try:
            return self.db.query(Category).order_by(Category.order.asc(), Category.id.asc()).all()
        except SQLAlchemyError as exc:
            raise StorageError("分类查询失败") from exc

    def neighbor(self, category: Category, direction: str) -> Optional[Category]:
        """按 (order, id) 排序，取紧挨着的前一个（up）或后一个（down）分类"""
        if direction == "up":
            cond = or_(
                Category.order < category.order,
                and_(Category.order == category.order, Category.id < category.id),
            )
            ordering = (Category.order.desc(), Category.id.desc())
        else:
            cond = or_(
                Category.order > category.order,
                and_(Category.order == category.order, Category.id > category.id),
            )
            ordering = (Category.order.asc(), Category.id.asc())
        try:
            return self.db.query(Category).filter(cond).order_by(*ordering).first()
        except SQLAlchemyError as exc:
            raise StorageError("分类查询失败") from exc

    def insert(self, record: CategoryRecord) -> int:
        category = Category(
            title=record.title,
            uri=record.uri,
            description=record.description,
            order=record.order,
        )
        self.db.add(category)
        self._flush(record)
        return category.id

    def update(self, category: Category, record: CategoryRecord) -> None:
        category.title = record.title
        category.uri = record.uri
        category.description = record.description
        category.order = record.order
        self._flush(record)

    def set_order(self, category: Category, order: int) -> None:
        category.order = order
        try:
            self.db.flush()
        except SQLAlchemyError as exc:
            raise StorageError("分类排序更新失败") from exc

    def delete(self, category: Category) -> None:
        self.db.delete(category)
        try:
            self.db.flush()
        except SQLAlchemyError as exc:
            raise StorageError("分类删除失败") from exc
