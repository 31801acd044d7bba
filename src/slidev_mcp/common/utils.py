"""公共工具函数：统一日志配置与服务配置加载。

包含：
- `get_logger`：配置并返回指定名称的 `logging.Logger`；
- `set_log_level`：按服务配置调整根 Logger 的级别；
- `get_server_config`：从环境变量（可由 `.env` 提供）读取 MCP 服务配置，非法时抛错。
"""

import os
import logging
from typing import get_args

from dotenv import load_dotenv
from pydantic import ValidationError

from slidev_mcp.common.errors import ConfigError
from slidev_mcp.common.types import LogLevel, ServerConfig

ENV_PREFIX = "SLIDEV_MCP_"
LOG_LEVELS = get_args(LogLevel)


def get_logger(name: str) -> logging.Logger:
    """获取带统一格式的 Logger。

    行为：
    - 日志级别取自环境变量 `SLIDEV_MCP_LOG_LEVEL`，默认 INFO；无法识别的级别回退为 INFO，
      由 `get_server_config` 负责报告配置错误；
    - 日志格式包含时间、模块名、级别与消息；
    - 输出到 stderr，避免干扰 STDIO 传输的协议数据。
    """
    level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").strip().upper()
    if level not in LOG_LEVELS:
        level = "INFO"
    logging.basicConfig(level=level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    return logging.getLogger(name)


def set_log_level(level: str) -> None:
    logging.getLogger().setLevel(level)


def get_server_config(env_file: str | None = None) -> ServerConfig:
    """读取 MCP 服务配置。

    参数：
        env_file: 可选的 `.env` 文件路径；为空时由 `load_dotenv` 自动查找。

    返回：
        ServerConfig：传输方式、监听地址、端口与日志级别。
    """
    # 已存在的环境变量优先于 .env 中的值
    load_dotenv(env_file)

    values = {}
    for field in ("transport", "host", "port", "log_level"):
        raw = os.getenv(f"{ENV_PREFIX}{field.upper()}")
        if raw is not None and raw.strip():
            values[field] = raw.strip()
    if "log_level" in values:
        values["log_level"] = values["log_level"].upper()

    try:
        return ServerConfig(**values)
    except ValidationError as e:
        issues = [f"{ENV_PREFIX}{'.'.join(str(p) for p in err['loc']).upper()}: {err['msg']}" for err in e.errors()]
        raise ConfigError("Invalid server configuration: " + "; ".join(issues)) from e
