"""Testing fakes – scripted collectors."""
from mp_metrics.testing.fakes.collectors import BlockingCollector, FailingCollector, StaticCollector

__all__ = ["BlockingCollector", "FailingCollector", "StaticCollector"]
