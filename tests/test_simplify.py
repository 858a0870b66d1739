import pytest

from sectortri.errors import DegenerateLoopError
from sectortri.simplify import simplify_loop


def test_removes_midpoints():
    loop = [(0, 0), (0, 5), (0, 10), (10, 10), (10, 0)]
    assert simplify_loop(loop) == [(0, 0), (0, 10), (10, 10), (10, 0)]


def test_removes_duplicates():
    loop = [(0, 0), (0, 0), (0, 10), (10, 10), (10, 0)]
    assert simplify_loop(loop) == [(0, 0), (0, 10), (10, 10), (10, 0)]


def test_removes_across_the_wrap():
    loop = [(0, 5), (0, 10), (10, 10), (10, 0), (0, 0)]
    assert simplify_loop(loop) == [(0, 10), (10, 10), (10, 0), (0, 0)]


def test_nearly_straight_run_is_removed():
    loop = [(0, 0), (0, 10), (10, 10), (20, 10.1), (20, 0)]
    assert len(simplify_loop(loop)) == 4


def test_clean_loop_unchanged():
    loop = [(0, 0), (0, 10), (5, 10), (5, 5), (10, 5), (10, 0)]
    assert simplify_loop(loop) == loop


def test_input_not_mutated():
    loop = [(0, 0), (0, 5), (0, 10), (10, 10), (10, 0)]
    simplify_loop(loop)
    assert len(loop) == 5


@pytest.mark.parametrize("loop", [
    [(0, 0), (5, 0), (10, 0)],
    [(0, 0), (5, 0), (10, 0), (5, 0)],
    [(1, 1), (1, 1), (1, 1)],
])
def test_degenerate_loops_raise(loop):
    with pytest.raises(DegenerateLoopError):
        simplify_loop(loop)
