from __future__ import annotations

import copy
import pickle

from prettydump import MU, Interval, Mu, Pair, PrettyDumpable


def test_pair_order():
    assert sorted([Pair("b", 1), Pair("a", 2)]) == [Pair("a", 2), Pair("b", 1)]
    assert Pair("a", 1) == Pair("a", 1)


def test_mu():
    assert Mu() is MU
    assert repr(MU) == "Mu"
    assert copy.copy(MU) is MU
    assert pickle.loads(pickle.dumps(MU)) is MU


def test_interval_defaults():
    interval = Interval()
    assert interval.min is None and interval.max is None
    assert not interval.excludes_min and not interval.excludes_max


class Hooked:
    def __pretty_dump__(self, renderer, depth):
        return "hooked"


def test_protocol():
    assert isinstance(Hooked(), PrettyDumpable)
    assert not isinstance(1, PrettyDumpable)
