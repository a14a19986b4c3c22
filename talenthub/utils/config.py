"""配置管理模块"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# 加载环境变量
load_dotenv()


class GeminiConfig(BaseSettings):
    """Gemini 生成式模型API配置"""
    model_config = SettingsConfigDict(env_prefix="GEMINI_", extra="ignore")

    api_key: str = Field("", description="Gemini API密钥")
    base_url: str = Field("https://generativelanguage.googleapis.com/v1beta")
    model: str = Field("gemini-2.0-flash")
    timeout: int = Field(60, description="请求超时(秒)")
    temperature: float = Field(0.4, ge=0, le=2)


class FirebaseConfig(BaseSettings):
    """Firebase 身份认证与存储配置"""
    model_config = SettingsConfigDict(env_prefix="FIREBASE_", extra="ignore")

    api_key: str = Field("", description="Firebase Web API密钥")
    auth_url: str = Field("https://identitytoolkit.googleapis.com/v1")
    storage_bucket: str = Field("talenthub.firebasestorage.app")
    storage_url: str = Field("https://firebasestorage.googleapis.com/v0")
    timeout: int = Field(30)


class AppConfig(BaseSettings):
    """应用配置"""
    model_config = SettingsConfigDict(env_prefix="APP_", extra="ignore")

    name: str = Field("TalentHub")
    version: str = Field("1.0.0")
    debug: bool = Field(False, validation_alias="DEBUG")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    log_dir: str = Field("logs", validation_alias="LOG_DIR")


class Settings:
    """全局配置类"""

    def __init__(self):
        self.app = AppConfig()
        self.gemini = GeminiConfig()
        self.firebase = FirebaseConfig()


# 全局配置实例
settings = Settings()


def get_settings() -> Settings:
    """获取配置实例"""
    return settings


get_config = get_settings
