"""Process exit statuses, scheduled jobs rely on them to detect failed runs"""

from enum import IntEnum


class ExitCode(IntEnum):
    success = 0
    missing_configuration = 1
    failure = 2
