"""Domain errors for chatwootctl."""


class ManagerError(RuntimeError):
    """Raised when a management action cannot continue safely."""
