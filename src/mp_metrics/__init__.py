"""
mp_metrics – in-process instrumentation: metrics, vectors and a gathering registry.

Import path convention::

    from mp_metrics.metrics import Counter, GaugeVec, MetricOpts
    from mp_metrics.registry import Registry, must_register, gather
    from mp_metrics.config import MetricsSettings
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
