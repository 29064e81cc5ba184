"""Process exit codes for the ghr command.

CI runners treat any non-zero exit as a failed step; the distinct values
let a workflow tell bad inputs apart from API trouble.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the ghr command.

    - 0: Success
    - 1: User error (missing or invalid action input)
    - 2: Environment error (no token, no repository)
    - 4: API error (GitHub rejected a call or was unreachable)
    - 5: I/O error (step output file not writable)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    API_ERROR = 4
    IO_ERROR = 5
