from .logging import EXPORT_FAILED, EXPORTED, LOG_LEVELS, LogMessage

__all__ = ["EXPORTED", "EXPORT_FAILED", "LOG_LEVELS", "LogMessage"]
