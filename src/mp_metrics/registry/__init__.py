"""Registry – registration, gathering and the default registry."""
from mp_metrics.registry.default import default_registry, gather, must_register, register, unregister
from mp_metrics.registry.families import CollectedSample, FamilyAssembler
from mp_metrics.registry.registry import Registry
from mp_metrics.registry.report import GatherReport

__all__ = [
    "CollectedSample",
    "FamilyAssembler",
    "GatherReport",
    "Registry",
    "default_registry",
    "gather",
    "must_register",
    "register",
    "unregister",
]
