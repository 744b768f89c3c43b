"""
应用配置
从环境变量 / .env 读取
"""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """应用设置"""

    # 应用基础配置
    APP_NAME: str = "LuxuryStay Back Office"
    DEBUG: bool = False

    # 数据库配置
    DATABASE_URL: str = "sqlite:///./keystone.db"

    # 会话配置（无状态签名令牌）
    SECRET_KEY: str = "change-me-session-secret"
    ALGORITHM: str = "HS256"
    SESSION_MAX_AGE_SECONDS: int = 60 * 60 * 24 * 30

    # 启动时写入基线数据（每张表为空时才写入）
    SEED_ON_STARTUP: bool = True

    # 房态同步
    ROOM_SYNC_TIMEOUT_SECONDS: float = 5.0
    # 退房时是否把房间恢复为 available（默认关闭，保持现有行为）
    ROOM_SYNC_RELEASE_ON_CHECKOUT: bool = False

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# 全局设置实例
settings = Settings()
