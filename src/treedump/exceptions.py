from typing import Optional


class WalkError(Exception):
    """
    Exception raised when the directory walk cannot list or classify an entry.

    A walk failure is fatal: it aborts tree construction and is reported at the CLI
    level together with the underlying cause. This is distinct from failures to read
    a file's content, which are recovered locally by the content printer.

    Attributes:
        path (str): The path that could not be listed or classified.
        cause (Optional[OSError]): The underlying operating system error, if any.

    Example:
        >>> error = WalkError("/srv/data", PermissionError(13, "Permission denied"))
        >>> str(error)
        'Failed to walk /srv/data: [Errno 13] Permission denied'
        >>> error.path
        '/srv/data'
    """

    def __init__(self, path: str, cause: Optional[OSError] = None) -> None:
        """
        Initialize the exception with the failing path and its cause.

        Args:
            path (str): The path that could not be listed or classified.
            cause (Optional[OSError]): The underlying error. Defaults to None.
        """
        self.path = path
        self.cause = cause
        message = f"Failed to walk {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
