"""Error taxonomy for cache manager generation."""

from __future__ import annotations


class CacheGenError(RuntimeError):
    """Base error for cache manager generation failures."""

    exit_code: int = 1


class RequestDecodeError(CacheGenError):
    """Serialized plugin request could not be decoded."""

    exit_code: int = 2


class DescriptorError(CacheGenError):
    """Descriptor violates the generator's input contract."""

    exit_code: int = 3


class ConfigError(CacheGenError):
    """Invalid plugin parameter or environment configuration."""

    exit_code: int = 4


class GenerationError(CacheGenError):
    """Generation of an output file failed."""

    exit_code: int = 10

    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"generating file {path}: {cause}")


__all__ = [
    "CacheGenError",
    "ConfigError",
    "DescriptorError",
    "GenerationError",
    "RequestDecodeError",
]
