import logging
import os
import sys
from logging.handlers import TimedRotatingFileHandler

from colorlog import ColoredFormatter

from zorax.core.config import settings

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


class FolderFormatterMixin:
    """Adds ``record.folder`` (the directory of the calling module) to each record."""

    def format(self, record):
        record.folder = os.path.basename(os.path.dirname(record.pathname))
        return super().format(record)


class ColoredFolderFormatter(FolderFormatterMixin, ColoredFormatter):
    pass


class FolderFormatter(FolderFormatterMixin, logging.Formatter):
    pass


class Logger:
    @staticmethod
    def get_logger(name: str = None) -> logging.Logger:
        """
        Return a configured logger.
        - name: usually __name__; defaults to settings.PROJECT_NAME.
        Handlers are attached once per name, so repeated calls are cheap.
        """
        name = name or settings.PROJECT_NAME
        logger = logging.getLogger(name)
        if logger.handlers:
            return logger

        logger.setLevel(logging.DEBUG)
        logger.propagate = False

        console = logging.StreamHandler(sys.stdout)
        console.setLevel(settings.LOG_LEVEL.upper())
        console.setFormatter(
            ColoredFolderFormatter(
                "%(log_color)s%(levelname)-8s [%(folder)s/%(filename)s:%(lineno)d] %(message)s",
                log_colors=LOG_COLORS,
            )
        )
        logger.addHandler(console)

        log_dir = settings.LOG_DIR
        if not os.access(log_dir, os.W_OK) and not os.access(os.path.dirname(os.path.abspath(log_dir)), os.W_OK):
            log_dir = "/tmp"

        try:
            os.makedirs(log_dir, exist_ok=True)
            fh = TimedRotatingFileHandler(
                filename=os.path.join(log_dir, f"{settings.PROJECT_NAME.lower()}.log"),
                when="midnight",
                backupCount=30,
                encoding="utf-8",
            )
            fh.setLevel(logging.INFO)
            fh.setFormatter(
                FolderFormatter("%(asctime)s %(levelname)-8s [%(folder)s/%(filename)s:%(lineno)d] %(message)s")
            )
            logger.addHandler(fh)
        except OSError as e:
            logger.warning("Failed to set up file logging: %s", e)

        return logger
