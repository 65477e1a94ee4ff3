"""Unit tests for fake collectors."""

from __future__ import annotations

import threading

import pytest

from mp_metrics.metrics import Desc, MetricType, new_const_metric
from mp_metrics.testing.fakes import BlockingCollector, FailingCollector, StaticCollector


class TestStaticCollector:
    def test_describes_and_collects_what_it_was_given(self) -> None:
        desc = Desc("static", "h")
        metric = new_const_metric(desc, MetricType.GAUGE, 1)
        collector = StaticCollector([desc], [metric])
        assert list(collector.describe()) == [desc]
        assert list(collector.collect()) == [metric]

    def test_counts_collect_calls(self) -> None:
        collector = StaticCollector([Desc("static", "h")])
        collector.collect()
        collector.collect()
        assert collector.collect_calls == 2


class TestFailingCollector:
    def test_raises_given_error(self) -> None:
        error = RuntimeError("boom")
        collector = FailingCollector(Desc("broken", "h"), error)
        with pytest.raises(RuntimeError) as excinfo:
            collector.collect()
        assert excinfo.value is error


class TestBlockingCollector:
    def test_blocks_until_released(self) -> None:
        desc = Desc("slow", "h")
        metric = new_const_metric(desc, MetricType.GAUGE, 1)
        collector = BlockingCollector(desc, [metric])
        result: list[object] = []
        thread = threading.Thread(target=lambda: result.extend(collector.collect()))
        thread.start()

        assert collector.started.wait(timeout=5)
        assert result == []
        collector.release()
        thread.join(timeout=5)
        assert result == [metric]
