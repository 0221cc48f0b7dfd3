from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
import os
import json


class Settings(BaseSettings):
    """应用配置"""

    # API 配置
    API_TITLE: str = "Blog Category API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Category management console for the blog platform"

    # 数据库配置（默认本地 SQLite）
    DATABASE_URL: str = "sqlite:///./blog.db"

    # 分类排序：库里还没有任何分类时，新分类使用的起始序号
    CATEGORY_ORDER_SEED: int = 10

    # 调试：数据库异常时是否把驱动错误信息透出到响应
    DEBUG_DB_ERRORS: bool = False

    # CORS 配置
    # 支持通过环境变量 CORS_ORIGINS 覆盖：
    # - JSON 数组：["https://a.com","https://b.com"]
    # - 逗号分隔：https://a.com,https://b.com
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        if v is None:
            return v
        if isinstance(v, str):
            raw = v.strip()
            if not raw:
                return []
            if raw.startswith("["):
                try:
                    parsed = json.loads(raw)
                except ValueError:
                    parsed = None
                if isinstance(parsed, list):
                    return [str(item).strip() for item in parsed if str(item).strip()]
            return [item.strip() for item in raw.split(",") if item.strip()]
        return v

    @field_validator("CATEGORY_ORDER_SEED")
    @classmethod
    def _check_order_seed(cls, v: int) -> int:
        if v < 0:
            raise ValueError("CATEGORY_ORDER_SEED 不能为负数")
        return v

    @staticmethod
    def _default_env_file() -> str:
        env_file = os.getenv("ENV_FILE")
        if env_file:
            return env_file
        for candidate in (".env.sqlite", ".env"):
            if os.path.exists(candidate):
                return candidate
        return ".env"

    model_config = SettingsConfigDict(env_file=_default_env_file.__func__(), extra="ignore")


settings = Settings()
