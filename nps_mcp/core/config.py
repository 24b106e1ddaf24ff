"""
应用配置管理
"""

from typing import Optional

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nps_mcp import __version__

NPS_SIGNUP_URL = "https://www.nps.gov/subjects/developer/get-started.htm"


class Settings(BaseSettings):
    # 应用基础配置
    app_name: str = "nationalparks-mcp-server"
    version: str = __version__
    log_level: str = "INFO"

    # 监听配置
    host: str = "0.0.0.0"
    port: int = Field(default=8000, description="HTTP listen port, read from PORT")

    # NPS API配置
    nps_api_key: Optional[str] = Field(
        default=None,
        description="National Park Service API key, read from NPS_API_KEY"
    )
    nps_api_base_url: str = "https://developer.nps.gov/api/v1"
    nps_request_timeout: float = Field(default=30.0, description="Upstream request timeout in seconds")
    nps_user_agent: str = f"nationalparks-mcp-server/{__version__}"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("nps_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def has_api_key(self) -> bool:
        return self.nps_api_key is not None

    def warn_if_unconfigured(self) -> bool:
        """Log a warning when the NPS API key is absent. Returns True if it warned."""
        if self.has_api_key:
            return False
        logger.warning("NPS_API_KEY is not set in environment variables.")
        logger.warning(f"Get your API key at: {NPS_SIGNUP_URL}")
        return True


# 创建全局设置实例
settings = Settings()
