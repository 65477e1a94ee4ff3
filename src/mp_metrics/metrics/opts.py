"""Metrics – MetricOpts and fully-qualified name building."""
from __future__ import annotations

import dataclasses
from typing import Mapping, Sequence

from mp_metrics.metrics.desc import Desc


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    """Join the non-empty parts with ``_``; an empty *name* yields ``""``."""
    if not name:
        return ""
    return "_".join(part for part in (namespace, subsystem, name) if part)


@dataclasses.dataclass(frozen=True)
class MetricOpts:
    """Options shared by every metric constructor.

    Example::

        MetricOpts(
            namespace="our_company",
            subsystem="blob_storage",
            name="deletes",
            help="How many delete operations we have conducted.",
            const_labels={"binary_version": "canary"},
        )
    """

    name: str
    help: str
    namespace: str = ""
    subsystem: str = ""
    const_labels: Mapping[str, str] = dataclasses.field(default_factory=dict)

    @property
    def fq_name(self) -> str:
        return build_fq_name(self.namespace, self.subsystem, self.name)

    def describe(self, variable_labels: Sequence[str] = ()) -> Desc:
        return Desc(self.fq_name, self.help, tuple(variable_labels), self.const_labels)


__all__ = ["MetricOpts", "build_fq_name"]
