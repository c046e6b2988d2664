"""Exit code taxonomy for the plugin CLI."""

from __future__ import annotations

from enum import IntEnum

from cachegen.errors import CacheGenError


class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    - 0: Success
    - 1-9: General errors (parse, descriptor, config)
    - 10-19: Generation errors
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
    DESCRIPTOR_ERROR = 3
    CONFIG_ERROR = 4

    GENERATION_ERROR = 10

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Map an exception to an appropriate exit code.

        Parameters
        ----------
        exc
            Exception to classify.

        Returns
        -------
        ExitCode
            Exit code appropriate for the exception type.
        """
        if isinstance(exc, CacheGenError):
            try:
                return cls(exc.exit_code)
            except ValueError:
                return cls.GENERAL_ERROR
        if exc.__class__.__module__.startswith("cyclopts"):
            return cls.PARSE_ERROR
        if isinstance(exc, (FileNotFoundError, PermissionError, IsADirectoryError)):
            return cls.CONFIG_ERROR
        return cls.GENERAL_ERROR


__all__ = ["ExitCode"]
