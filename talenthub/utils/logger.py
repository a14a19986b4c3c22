"""日志工具模块

所有模块共用一个 loguru ``logger``，按 ``extra["name"]`` 区分来源：

- ``app``   应用与HTTP层
- ``ai``    模型调用与流程
- ``api``   第三方存储等接口
- ``auth``  登录注册与会话

AI 与认证日志另外写入独立文件，便于排查。
"""

import re
import sys
from pathlib import Path
from loguru import logger
from .config import get_settings

settings = get_settings()

# 日志中出现的密钥/令牌一律打码，例如 httpx 错误信息里带 ?key=... 的URL
_SECRET_PATTERN = re.compile(r"(?i)(key=|idToken[\"']?\s*[:=]\s*[\"']?|password[\"']?\s*[:=]\s*[\"']?)[^&\s\"',}]+")

# 独立日志文件 -> 收录的记录来源
CHANNEL_FILES = {
    "ai_analysis.log": ("ai",),
    "auth.log": ("auth",),
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} | {message}"
CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def _redact(record):
    record["message"] = _SECRET_PATTERN.sub(r"\1***", record["message"])


def _channel_filter(names):
    return lambda record: record["extra"].get("name") in names


def _add_file_sink(path: Path, level: str, **kwargs):
    logger.add(
        path,
        format=FILE_FORMAT,
        level=level,
        rotation="10 MB",
        retention="30 days",
        compression="zip",
        diagnose=False,
        **kwargs
    )


def setup_logger():
    """配置日志系统"""
    logger.remove()
    logger.configure(extra={"name": "talenthub"}, patcher=_redact)

    log_dir = Path(settings.app.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=settings.app.log_level,
        colorize=True,
        backtrace=True,
        diagnose=settings.app.debug
    )

    _add_file_sink(log_dir / "app.log", "DEBUG", backtrace=True)
    _add_file_sink(log_dir / "error.log", "ERROR", backtrace=True)
    for filename, names in CHANNEL_FILES.items():
        _add_file_sink(log_dir / filename, "INFO", filter=_channel_filter(names))

    return logger


def get_logger(name: str = None):
    """获取日志记录器"""
    if name:
        return logger.bind(name=name)
    return logger


# 初始化日志系统
setup_logger()

app_logger = get_logger("app")
ai_logger = get_logger("ai")
api_logger = get_logger("api")
auth_logger = get_logger("auth")
