"""Immutable descriptor views consumed and produced by the generator.

The plugin layer decodes a compilation request into these structs once per
run. Generation only reads them; every output is a fresh ``GeneratedFile``.
"""

from __future__ import annotations

import msgspec

from serde_msgspec import StructBaseStrict


class Comments(StructBaseStrict, frozen=True):
    """Leading comment attached to a service or method.

    ``leading`` holds the raw comment body as reported by protoc source info,
    without comment markers (for example ``" Fetches an order.\\n"``).
    """

    leading: str = ""

    @property
    def has_leading(self) -> bool:
        """Return whether a leading comment is present."""
        return bool(self.leading)

    def go_lines(self) -> tuple[str, ...]:
        """Render the comment as Go line comments.

        Returns
        -------
        tuple[str, ...]
            One ``//``-prefixed line per comment line; empty without a comment.
        """
        if not self.leading:
            return ()
        return tuple(f"//{line}" for line in self.leading.removesuffix("\n").split("\n"))


class MethodDescriptor(StructBaseStrict, frozen=True):
    """RPC method of a service, with Go identifiers for its message types."""

    name: str
    input_type: str
    output_type: str
    service_name: str
    comments: Comments = msgspec.field(default_factory=Comments)


class ServiceDescriptor(StructBaseStrict, frozen=True):
    """Service with its methods in declaration order."""

    name: str
    methods: tuple[MethodDescriptor, ...] = ()
    comments: Comments = msgspec.field(default_factory=Comments)


class FileDescriptor(StructBaseStrict, frozen=True):
    """Proto file with the Go naming facts needed to place generated output."""

    path: str
    package_name: str
    filename_prefix: str
    import_path: str = ""
    generate: bool = True
    services: tuple[ServiceDescriptor, ...] = ()


class GenerationRequest(StructBaseStrict, frozen=True):
    """Decoded compilation request."""

    files: tuple[FileDescriptor, ...] = ()
    parameter: str = ""
    compiler_version: str | None = None


class GeneratedFile(StructBaseStrict, frozen=True):
    """Generated source for one input file.

    ``fragments`` are the header and declarations in emission order.
    """

    name: str
    package_name: str
    fragments: tuple[str, ...] = ()

    @property
    def content(self) -> str:
        """Return the full file text."""
        return "".join(self.fragments)


class GenerationResponse(StructBaseStrict, frozen=True):
    """Result of a generation run."""

    files: tuple[GeneratedFile, ...] = ()
    error: str | None = None


__all__ = [
    "Comments",
    "FileDescriptor",
    "GeneratedFile",
    "GenerationRequest",
    "GenerationResponse",
    "MethodDescriptor",
    "ServiceDescriptor",
]
