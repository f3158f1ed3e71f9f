# config/settings.py
import os
import sys
from typing import List, Optional, Tuple
from dotenv import load_dotenv
from pydantic import ValidationError, Field
from pydantic_settings import BaseSettings
from util.enums import Environment
import logging


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()

_log = logging.getLogger("config.settings")

DEFAULT_SENTINEL_PORT = 26379


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")
    DEFAULT_PER_PAGE: int = Field(default=10, validation_alias="DEFAULT_PER_PAGE")

    # Redis
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0", validation_alias="REDIS_URL"
    )
    REDIS_KEY_PREFIX: str = Field(default="", validation_alias="REDIS_KEY_PREFIX")
    REDIS_CONNECT_TIMEOUT: float = Field(
        default=1.0, validation_alias="REDIS_CONNECT_TIMEOUT"
    )
    REDIS_HEALTH_CHECK_INTERVAL: float = Field(
        default=30.0, validation_alias="REDIS_HEALTH_CHECK_INTERVAL"
    )
    REDIS_SENTINELS: str = Field(default="", validation_alias="REDIS_SENTINELS")
    REDIS_SENTINEL_NAME: str = Field(
        default="mymaster", validation_alias="REDIS_SENTINEL_NAME"
    )
    REDIS_PASSWORD: Optional[str] = Field(
        default=None, validation_alias="REDIS_PASSWORD"
    )

    # Logging knobs
    LOGGER_NAME: str = "functions-storage"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    def sentinel_hosts(self) -> List[Tuple[str, int]]:
        """
        Parse REDIS_SENTINELS ("host:port, host2:port2") into (host, port) pairs.
        Blank entries are dropped; a missing port falls back to 26379.
        """
        hosts: List[Tuple[str, int]] = []
        for raw in self.REDIS_SENTINELS.split(","):
            entry = raw.strip()
            if not entry:
                continue
            host, _, port = entry.rpartition(":")
            if not host:
                hosts.append((port, DEFAULT_SENTINEL_PORT))
            else:
                hosts.append((host, int(port)))
        return hosts


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
