import random

import pytest

from placement_engine import (
    Container,
    Item,
    Placement,
    boxes_separated,
    layout,
)


class ScriptedRandom:
    """Returns queued values in order, counting draws."""

    def __init__(self, values):
        self._values = list(values)
        self.calls = 0

    def random(self):
        value = self._values[self.calls]
        self.calls += 1
        return value


class CountingRandom(random.Random):
    def __init__(self, seed):
        super().__init__(seed)
        self.calls = 0

    def random(self):
        self.calls += 1
        return super().random()


def _box(left, top, w=100, h=100):
    return Placement(left=left, top=top, width=w, height=h)


def test_boxes_separated_requires_gap_larger_than_margin():
    a = _box(0, 0)
    assert boxes_separated(_box(121, 0), a, 20)
    # exactly margin apart counts as a collision
    assert not boxes_separated(_box(120, 0), a, 20)
    assert not boxes_separated(_box(0, 120), a, 20)
    assert boxes_separated(_box(0, 121), a, 20)
    assert boxes_separated(_box(0, -121), a, 20)
    assert not boxes_separated(_box(50, 50), a, 0)


def test_three_items_scripted_draws():
    rng = ScriptedRandom([
        0.0, 0.0, 0.1,   # item 1 at (0, 0)
        0.9, 0.0, 0.2,   # item 2 at (270, 0)
        0.1, 0.1,        # item 3 collides with item 1
        0.0, 0.9, 0.3,   # item 3 at (0, 270)
    ])
    result = layout(Container(400, 400), [Item(100, 100)] * 3, margin=20, rng=rng)

    assert len(result) == 3
    assert [(p.left, p.top) for p in result] == [
        (0.0, 0.0),
        (pytest.approx(270.0), 0.0),
        (0.0, pytest.approx(270.0)),
    ]
    assert [p.attempts for p in result] == [1, 1, 2]
    assert [p.reveal_delay for p in result] == [0.1, 0.2, 0.3]
    assert not any(p.exhausted for p in result)
    assert result.residual_overlaps(20) == []
    assert rng.calls == 11


def test_ample_container_placements_are_separated_unless_exhausted():
    for seed in range(25):
        items = [Item(100, 100, key=str(i)) for i in range(3)]
        result = layout(Container(400, 400), items, margin=20, rng=random.Random(seed))
        assert [p.key for p in result] == ["0", "1", "2"]
        for j, later in enumerate(result):
            assert 0 <= later.left <= 300
            assert 0 <= later.top <= 300
            assert 1 <= later.attempts <= 50
            if later.exhausted:
                continue
            for i in range(j):
                assert boxes_separated(later, result[i], 20)


def test_same_seed_gives_identical_layout():
    items = [Item(100, 100), Item(80, 40), Item(30, 120)]
    first = layout(Container(400, 400), items, margin=20, rng=random.Random(1234))
    second = layout(Container(400, 400), items, margin=20, rng=random.Random(1234))
    assert first == second


def test_reveal_delay_in_unit_interval():
    items = [Item(10, 10) for _ in range(40)]
    result = layout(Container(500, 500), items, margin=5, rng=random.Random(3))
    assert all(0.0 <= p.reveal_delay < 1.0 for p in result)


def test_first_item_accepted_on_first_draw():
    rng = CountingRandom(99)
    result = layout(Container(1000, 1000), [Item(50, 50)], margin=0, rng=rng)
    assert len(result) == 1
    assert result[0].attempts == 1
    assert not result[0].exhausted
    # one position draw (two values) plus the reveal delay
    assert rng.calls == 3


def test_oversize_items_clamped_and_bounded():
    rng = CountingRandom(5)
    items = [Item(100, 100) for _ in range(5)]
    result = layout(Container(50, 50), items, margin=20, rng=rng)

    assert len(result) == 5
    assert all((p.left, p.top) == (0.0, 0.0) for p in result)
    assert [p.attempts for p in result] == [1, 50, 50, 50, 50]
    assert [p.exhausted for p in result] == [False, True, True, True, True]
    assert result.total_draws <= 5 * 50
    assert rng.calls == 2 * result.total_draws + 5


def test_oversize_allow_keeps_negative_offsets():
    items = [Item(100, 100) for _ in range(5)]
    result = layout(Container(50, 50), items, margin=20, rng=random.Random(5), oversize="allow")
    assert len(result) == 5
    for p in result:
        assert -50 <= p.left <= 0
        assert -50 <= p.top <= 0
    assert result.total_draws <= 250


def test_oversize_reject_raises():
    with pytest.raises(ValueError):
        layout(Container(50, 50), [Item(100, 10)], rng=random.Random(0), oversize="reject")


def test_oversize_clamp_only_affects_the_overflowing_axis():
    rng = ScriptedRandom([0.5, 0.5, 0.0])
    result = layout(Container(200, 50), [Item(100, 100)], rng=rng)
    assert result[0].left == pytest.approx(50.0)
    assert result[0].top == 0.0


def test_custom_attempt_cap_is_honoured():
    items = [Item(100, 100) for _ in range(4)]
    result = layout(Container(100, 100), items, margin=0, rng=random.Random(1), max_attempts=7)
    assert [p.attempts for p in result] == [1, 7, 7, 7]


def test_empty_items_give_empty_set():
    result = layout(Container(100, 100), [], rng=random.Random(0))
    assert len(result) == 0
    assert result.total_draws == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"container": Container(-1, 10), "items": []},
        {"container": Container(10, 10), "items": [Item(-5, 5)]},
        {"container": Container(10, 10), "items": [], "margin": -1},
        {"container": Container(10, 10), "items": [], "max_attempts": 0},
        {"container": Container(10, 10), "items": [], "oversize": "shrink"},
    ],
)
def test_invalid_input_rejected(kwargs):
    with pytest.raises(ValueError):
        layout(rng=random.Random(0), **kwargs)


def test_zero_size_container_degenerates_silently():
    result = layout(Container(0, 0), [Item(0, 0), Item(0, 0)], margin=0, rng=random.Random(2))
    assert len(result) == 2
    assert all((p.left, p.top) == (0.0, 0.0) for p in result)
