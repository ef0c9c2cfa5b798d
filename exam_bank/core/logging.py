import logging

from exam_bank.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, level or settings.LOG_LEVEL, logging.INFO),
        format=LOG_FORMAT,
    )
