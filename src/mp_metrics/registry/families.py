"""Registry – FamilyAssembler, merging collected samples into metric families.

Checks applied to every sample, in order:

* its descriptor must be valid,
* with ``pedantic`` on, its descriptor must be one its collector described,
* help text and type must agree with the family,
* its label names must have the family's label shape,
* its label values must not repeat within the family.

A failing sample is dropped and reported; the rest of its family and every
other family are kept.
"""
from __future__ import annotations

import dataclasses
from typing import Iterable, Mapping

from mp_metrics.metrics.desc import Desc, hash_parts
from mp_metrics.metrics.errors import (
    InconsistentDimensionsError,
    InconsistentMetricError,
    MetricsError,
)
from mp_metrics.metrics.model import MetricFamily, MetricType, Sample


@dataclasses.dataclass(frozen=True)
class CollectedSample:
    desc: Desc
    metric_type: MetricType
    sample: Sample


@dataclasses.dataclass
class _FamilyDraft:
    name: str
    help: str
    type: MetricType
    dim_hash: int
    samples: list[Sample] = dataclasses.field(default_factory=list)
    seen: set[tuple[str, ...]] = dataclasses.field(default_factory=set)


class FamilyAssembler:
    """Accumulates collected samples and emits sorted :class:`MetricFamily` objects.

    Parameters
    ----------
    dim_hashes:
        Label shape recorded at registration, per metric name. Names a
        collector emits without having described them take the shape of the
        first sample seen.
    pedantic:
        Reject samples whose descriptor was not described by their collector.
    """

    def __init__(self, dim_hashes: Mapping[str, int], *, pedantic: bool = False) -> None:
        self._dim_hashes = dim_hashes
        self._pedantic = pedantic
        self._drafts: dict[str, _FamilyDraft] = {}
        self.errors: list[MetricsError] = []

    def add_all(self, collected: Iterable[CollectedSample], described_ids: frozenset[int]) -> None:
        for item in collected:
            error = self._add(item, described_ids)
            if error is not None:
                self.errors.append(error)

    def _add(self, item: CollectedSample, described_ids: frozenset[int]) -> MetricsError | None:
        desc, sample = item.desc, item.sample
        if desc.error is not None:
            return desc.error
        name = desc.fq_name
        if self._pedantic and desc.id not in described_ids:
            return InconsistentMetricError(
                f"Collected metric '{name}' with a descriptor its collector never described",
                fq_name=name,
            )

        shape = hash_parts([name, *sorted(sample.label_names)])
        draft = self._drafts.get(name)
        if draft is None:
            draft = _FamilyDraft(
                name=name,
                help=desc.help,
                type=item.metric_type,
                dim_hash=self._dim_hashes.get(name, shape),
            )
            self._drafts[name] = draft

        if desc.help != draft.help:
            return InconsistentMetricError(
                f"Collected metric '{name}' has help {desc.help!r} but should have {draft.help!r}",
                fq_name=name,
            )
        if item.metric_type is not draft.type:
            return InconsistentMetricError(
                f"Collected metric '{name}' is a {item.metric_type.value} "
                f"but its family is a {draft.type.value}",
                fq_name=name,
            )
        if shape != draft.dim_hash:
            return InconsistentDimensionsError(
                f"Collected metric '{name}' has labels {list(sample.label_names)} "
                "inconsistent with its family",
                fq_name=name,
                detail={"labels": list(sample.label_names)},
            )
        if sample.label_values in draft.seen:
            return InconsistentMetricError(
                f"Collected metric '{name}' {sample.label_dict()} was collected before "
                "with the same name and label values",
                fq_name=name,
            )
        draft.seen.add(sample.label_values)
        draft.samples.append(sample)
        return None

    def families(self) -> list[MetricFamily]:
        """Non-empty families sorted by name, samples sorted by label values."""
        return [
            MetricFamily(
                name=draft.name,
                help=draft.help,
                type=draft.type,
                samples=tuple(
                    sorted(draft.samples, key=lambda s: (s.label_values, s.timestamp_ms or 0))
                ),
            )
            for draft in sorted(self._drafts.values(), key=lambda d: d.name)
            if draft.samples
        ]


__all__ = ["CollectedSample", "FamilyAssembler"]
