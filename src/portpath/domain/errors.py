"""Domain errors."""


class PortPathError(Exception):
    """Base error."""
    pass


class PathValidationError(PortPathError, ValueError):
    """Path string rejected by the path grammar."""

    def __init__(self, raw: str, message: str = "invalid path"):
        self.raw = raw
        super().__init__(f"{message}: {raw!r}")


class ContractViolationError(PortPathError):
    """Caller broke an API precondition. Not a recoverable runtime failure."""
    pass


class FileIOError(PortPathError):
    """File I/O error with context."""

    def __init__(self, message: str, path: str = "", operation: str = ""):
        self.path = path
        self.operation = operation
        super().__init__(f"[{operation}] {path}: {message}" if operation else message)


class TemporaryDirectoryError(PortPathError):
    """Temporary directory used before initialization or could not be prepared."""
    pass


class UniqueNameExhaustedError(PortPathError):
    """Every numeric suffix for a prefix is already taken."""
    pass
