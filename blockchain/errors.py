"""
Deployment Errors
Single error type surfaced by every deployment stage
"""

from typing import Optional


class DeployError(Exception):
    """
    Raised when resolving, submitting or confirming a deployment fails

    The message is what the operator sees. ``stage`` only adds context
    to the log line, callers never branch on it.
    """

    def __init__(self, message: str, stage: str = 'deploy', cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.cause = cause

    @classmethod
    def wrap(cls, error: BaseException, stage: str) -> 'DeployError':
        """Wrap an arbitrary exception, keeping an existing DeployError as is"""
        if isinstance(error, DeployError):
            return error

        message = str(error) or error.__class__.__name__
        return cls(message, stage=stage, cause=error)

    def __str__(self) -> str:
        return self.message
