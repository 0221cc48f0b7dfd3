import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from app.core.config import settings
from app.core.database import Base, engine
from app.core.labels import get_label
from app.models import Category  # noqa: F401  注册模型，保证 create_all 能建表
from app.routes import categories

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    _run_startup()
    yield


# 创建 FastAPI 应用
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


@app.exception_handler(SQLAlchemyError)
async def _sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    # 兜底：未被服务层转换的数据库异常统一返回 JSON
    logging.exception("数据库异常: %s", exc)
    detail = "数据库错误，请检查数据库连接与表结构"
    if settings.DEBUG_DB_ERRORS:
        detail = f"{detail}: {exc}"
    return JSONResponse(status_code=500, content={"detail": detail})


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError):
    # 控制台客户端只认 {sc, msg}：请求体不是 JSON 对象等格式错误也按该结构返回
    logging.warning("请求格式错误: %s %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"sc": False, "msg": get_label("badRequestLabel")})


def _run_startup() -> None:
    """应用启动时执行：创建表"""
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as exc:
        logging.exception("数据库初始化失败（无法创建表），请检查 DATABASE_URL 连接与权限: %s", exc)
        raise


# CORS 中间件
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# 数据库健康检查
@app.get("/health")
async def health_check():
    """健康检查端点"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logging.exception("数据库健康检查失败: %s", exc)
        return JSONResponse(status_code=503, content={"status": "degraded"})
    return {"status": "ok"}


# 包含路由
app.include_router(categories.router, prefix="/console", tags=["Categories"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=False)
