"""分类控制台接口。

所有接口都返回 HTTP 200，成功与否放在 sc 字段里；业务异常在这里统一
转换为 {"sc": false, "msg": ...}，不会继续向外抛出。
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import CategoryServiceError, StorageError
from app.core.labels import get_label
from app.schemas.category import (
    CategoryAddRequest,
    CategoryOrderRequest,
    CategoryResponse,
    CategoryUpdateRequest,
    ConsoleResult,
)
from app.services.category_mgmt import CategoryMgmtService
from app.services.category_query import CategoryQueryService
from app.services.category_store import CategoryStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_category_store(db: Session = Depends(get_db)) -> CategoryStore:
    return CategoryStore(db)


def get_mgmt_service(store: CategoryStore = Depends(get_category_store)) -> CategoryMgmtService:
    return CategoryMgmtService(store)


def get_query_service(store: CategoryStore = Depends(get_category_store)) -> CategoryQueryService:
    return CategoryQueryService(store)


def _failure(exc: Exception) -> ConsoleResult:
    if isinstance(exc, StorageError):
        logger.exception(f"分类存储失败: {exc}")
        return ConsoleResult(sc=False, msg=get_label("systemErrLabel"))
    logger.warning(f"分类操作被拒绝: {exc}")
    return ConsoleResult(sc=False, msg=str(exc))


@router.post("/category/", response_model=ConsoleResult, response_model_exclude_none=True)
def add_category(
    payload: CategoryAddRequest,
    service: CategoryMgmtService = Depends(get_mgmt_service),
):
    """添加分类，返回 {sc, oId, msg}"""
    try:
        category_id = service.add_category(payload.to_submission())
    except CategoryServiceError as exc:
        return _failure(exc)
    return ConsoleResult(sc=True, oId=str(category_id), msg=get_label("addSuccLabel"))


@router.put("/category/", response_model=ConsoleResult, response_model_exclude_none=True)
def update_category(
    payload: CategoryUpdateRequest,
    service: CategoryMgmtService = Depends(get_mgmt_service),
):
    try:
        service.update_category(payload.oId, payload.to_submission())
    except CategoryServiceError as exc:
        return _failure(exc)
    return ConsoleResult(sc=True, msg=get_label("updateSuccLabel"))


@router.put("/category/order/", response_model=ConsoleResult, response_model_exclude_none=True)
def change_order(
    payload: CategoryOrderRequest,
    service: CategoryMgmtService = Depends(get_mgmt_service),
):
    """上移 / 下移分类"""
    try:
        service.change_order(payload.oId, payload.direction)
    except (CategoryServiceError, ValueError) as exc:
        return _failure(exc)
    return ConsoleResult(sc=True, msg=get_label("updateSuccLabel"))


@router.delete("/category/{category_id}", response_model=ConsoleResult, response_model_exclude_none=True)
def remove_category(
    category_id: int,
    service: CategoryMgmtService = Depends(get_mgmt_service),
):
    try:
        service.remove_category(category_id)
    except CategoryServiceError as exc:
        return _failure(exc)
    return ConsoleResult(sc=True, msg=get_label("removeSuccLabel"))


@router.get("/category/{category_id}", response_model=ConsoleResult, response_model_exclude_none=True)
def get_category(
    category_id: int,
    service: CategoryQueryService = Depends(get_query_service),
):
    try:
        category = service.get_category(category_id)
    except CategoryServiceError as exc:
        return _failure(exc)
    return ConsoleResult(sc=True, category=CategoryResponse.from_model(category))


@router.get("/categories", response_model=ConsoleResult, response_model_exclude_none=True)
def get_categories(service: CategoryQueryService = Depends(get_query_service)):
    """按排序返回全部分类"""
    try:
        categories = service.get_categories()
    except CategoryServiceError as exc:
        return _failure(exc)
    return ConsoleResult(sc=True, categories=[CategoryResponse.from_model(c) for c in categories])
