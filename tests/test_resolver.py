from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from pdf_image_extractor.exceptions import ResolutionError
from pdf_image_extractor.resolver import ResolverProxy


class _Reference:
    """Indirect-reference stand-in that records concurrent resolutions."""

    active = 0
    peak = 0
    guard = threading.Lock()

    def __init__(self, value: int) -> None:
        self.value = value

    def get_object(self) -> int:
        with _Reference.guard:
            _Reference.active += 1
            _Reference.peak = max(_Reference.peak, _Reference.active)
        time.sleep(0.001)
        with _Reference.guard:
            _Reference.active -= 1
        return self.value


class _Broken:
    def get_object(self):
        raise KeyError("missing object 12 0 R")


def test_resolve_returns_referenced_object() -> None:
    resolver = ResolverProxy()

    assert resolver.resolve(_Reference(42)) == 42


def test_resolve_passes_direct_objects_through() -> None:
    resolver = ResolverProxy()
    direct = {"/Subtype": "/Image"}

    assert resolver.resolve(direct) is direct
    assert resolver.resolve(None) is None


def test_resolution_is_serialized_across_threads() -> None:
    resolver = ResolverProxy()
    _Reference.active = 0
    _Reference.peak = 0

    with ThreadPoolExecutor(max_workers=8) as executor:
        values = list(executor.map(resolver.resolve, [_Reference(i) for i in range(64)]))

    assert values == list(range(64))
    assert _Reference.peak == 1


def test_failure_is_scoped_and_does_not_poison_proxy() -> None:
    resolver = ResolverProxy()

    with pytest.raises(ResolutionError) as excinfo:
        resolver.resolve(_Broken())

    assert isinstance(excinfo.value.__cause__, KeyError)
    assert not resolver.locked
    assert resolver.resolve(_Reference(7)) == 7


def test_call_runs_under_lock_and_propagates_errors() -> None:
    resolver = ResolverProxy()

    assert resolver.call(lambda: resolver.locked) is True

    def boom() -> None:
        raise ValueError("decode failed")

    with pytest.raises(ValueError):
        resolver.call(boom)
    assert not resolver.locked
