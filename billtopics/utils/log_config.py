# billtopics/utils/log_config.py

import logging
import sys
from billtopics.core.config import settings

# gensim logs every pass at INFO
_NOISY_LOGGERS = ("gensim", "smart_open", "matplotlib", "numexpr")


def setup_logging(level: str | None = None):
    logger = logging.getLogger()
    logger.setLevel((level or settings.LOG_LEVEL).upper())
    logger.handlers = []

    formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
    )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if settings.ENV != "debug":
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logger.info("✅ Logging system initialized")
