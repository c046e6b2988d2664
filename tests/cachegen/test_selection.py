"""Tests for candidate service selection."""

from __future__ import annotations

import pytest

from cachegen.config import CandidatePolicy
from cachegen.selection import candidate_services, has_candidate, is_candidate
from tests.test_helpers.descriptors import file_with, service


@pytest.mark.parametrize("name", ["OrderCache", "Cache", "XCache"])
def test_names_ending_in_cache_are_candidates(name: str) -> None:
    """Names ending in ``Cache`` qualify, including ``Cache`` itself."""
    assert is_candidate(service(name))


@pytest.mark.parametrize("name", ["OrderService", "Cached", "Ordercache", "CacheService", ""])
def test_other_names_are_not_candidates(name: str) -> None:
    """The suffix match is exact and case-sensitive."""
    assert not is_candidate(service(name))


def test_policy_overrides_suffix() -> None:
    """A custom marker suffix replaces ``Cache``."""
    policy = CandidatePolicy(marker_suffix="Memo")
    assert is_candidate(service("OrderMemo"), policy)
    assert not is_candidate(service("OrderCache"), policy)


def test_candidate_services_preserve_order() -> None:
    """Candidates are returned in declaration order."""
    proto = file_with(service("BCache"), service("Plain"), service("ACache"))
    assert [item.name for item in candidate_services(proto)] == ["BCache", "ACache"]
    assert has_candidate(proto)


def test_file_without_candidates() -> None:
    """Files without candidate services are reported as such."""
    proto = file_with(service("OrderService"))
    assert not has_candidate(proto)
    assert candidate_services(proto) == ()
