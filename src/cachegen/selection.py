"""Selection of services that receive a generated cache manager."""

from __future__ import annotations

from typing import TYPE_CHECKING

from cachegen.config import CandidatePolicy

if TYPE_CHECKING:
    from cachegen.descriptors import FileDescriptor, ServiceDescriptor

_DEFAULT_POLICY = CandidatePolicy()


def is_candidate(service: ServiceDescriptor, policy: CandidatePolicy = _DEFAULT_POLICY) -> bool:
    """Return whether a service name ends with the marker suffix.

    The match is case-sensitive and a name equal to the suffix qualifies.

    Returns
    -------
    bool
        True when the service participates in generation.
    """
    return service.name.endswith(policy.marker_suffix)


def has_candidate(file: FileDescriptor, policy: CandidatePolicy = _DEFAULT_POLICY) -> bool:
    """Return whether any service of a file is a candidate."""
    return any(is_candidate(service, policy) for service in file.services)


def candidate_services(
    file: FileDescriptor,
    policy: CandidatePolicy = _DEFAULT_POLICY,
) -> tuple[ServiceDescriptor, ...]:
    """Return the candidate services of a file in declaration order."""
    return tuple(service for service in file.services if is_candidate(service, policy))


__all__ = ["candidate_services", "has_candidate", "is_candidate"]
