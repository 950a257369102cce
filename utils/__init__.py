from .log import log, LogLevel

__all__ = ["log", "LogLevel"]
