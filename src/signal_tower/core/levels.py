"""Dispatch verbosity levels.

Channels store raw integers; these constants exist for readability.

    level <= 0  ->  nothing is logged on dispatch
    level == 1  ->  the channel name is logged
    level >= 2  ->  the channel name and the payload are logged
"""

from enum import IntEnum


class LogLevel(IntEnum):
    SILENT = 0
    NAME = 1
    PAYLOAD = 2


def describe_level(level: int) -> str:
    """Human readable label for a verbosity level."""
    if level <= LogLevel.SILENT:
        return "silent"
    if level == LogLevel.NAME:
        return "name"
    return "payload"
