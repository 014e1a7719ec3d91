import json
import logging
import sys
import time
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Extra attributes copied into the JSON line when present on the record
EXTRA_FIELDS = (
    "trace_id", "strategy", "strategies", "sources", "video_id",
    "latency_ms", "status_code", "error_type", "saved",
)

class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

class JsonFormatter(logging.Formatter):
    """JSON line formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON line"""
        base = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        base.update({
            field: getattr(record, field)
            for field in EXTRA_FIELDS if hasattr(record, field)
        })

        if record.exc_info:
            base["exception"] = self.formatException(record.exc_info)

        # default=str keeps non-JSON extras (e.g. exceptions) from breaking the line
        return json.dumps(base, ensure_ascii=False, default=str)

def setup_json_logging(level: Optional[int] = None) -> None:
    """Route all loggers to stdout as JSON lines; level falls back to LOG_LEVEL"""
    if level is None:
        level = logging.getLevelName(LoggingSettings().log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    # httpx logs every request at INFO; keep it to warnings
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.info("JSON logging initialized", extra={"trace_id": "system_init"})
