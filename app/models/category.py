from sqlalchemy import Column, Integer, String, Text, UniqueConstraint
from app.core.database import Base


class Category(Base):
    """文章分类"""
    __tablename__ = "category"
    __table_args__ = (
        UniqueConstraint("uri", name="uq_category_uri"),
        # id 单调递增且删除后不复用（SQLite 需显式开启 AUTOINCREMENT）
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    uri = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    order = Column("categoryOrder", Integer, nullable=False, default=0, index=True)

    def __repr__(self):
        return f"<Category {self.uri}>"
