import logging
import json
from datetime import datetime

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

class JSONFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": datetime.utcnow().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
        }

        if hasattr(record, "request_id"):
            log_record["request_id"] = record.request_id

        if hasattr(record, "user_id"):
            log_record["user_id"] = record.user_id

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)

def setup_logging(level: str = "INFO", json_output: bool = False) -> logging.Logger:
    """Configure the ``prepfeed`` logger hierarchy.

    Handlers are attached once; calling this again only adjusts the level.
    """
    logger = logging.getLogger("prepfeed")
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        if json_output:
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
