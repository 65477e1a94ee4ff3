"""Registry – collector registration and the gather pipeline."""
from __future__ import annotations

import asyncio
import concurrent.futures
import dataclasses
import threading

from mp_metrics.config.settings import MetricsSettings
from mp_metrics.metrics.desc import Desc
from mp_metrics.metrics.errors import (
    AlreadyRegisteredError,
    CollectorError,
    DuplicateDescriptorError,
    GatherTimeoutError,
    InconsistentDimensionsError,
    InvalidDescriptorError,
    MetricsError,
)
from mp_metrics.metrics.ports import Collector
from mp_metrics.observability.logging import get_logger
from mp_metrics.registry.families import CollectedSample, FamilyAssembler
from mp_metrics.registry.report import GatherReport

log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class _Registration:
    collector: Collector
    descs: tuple[Desc, ...]
    desc_ids: frozenset[int]


def _render(collector: Collector) -> list[CollectedSample]:
    return [CollectedSample(m.desc(), m.metric_type, m.write()) for m in collector.collect()]


class Registry:
    """Registers collectors and gathers their metrics into families.

    Registration validates every descriptor a collector describes and either
    records all of them or none. Gathering runs each collector's ``collect``
    in its own future on a bounded thread pool, outside the registry lock,
    and merges the results in registration order so that repeated gathers of
    unchanged data come out identical.

    Parameters
    ----------
    max_workers:
        Upper bound on collectors collected in parallel.
    gather_timeout:
        Seconds to wait for all collectors; ``None`` waits for every one of
        them. Collectors still running are reported with
        :class:`GatherTimeoutError` and left behind.
    pedantic:
        Reject collected metrics whose descriptor their collector did not
        describe.
    """

    def __init__(
        self,
        *,
        max_workers: int = 8,
        gather_timeout: float | None = None,
        pedantic: bool = False,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._max_workers = max_workers
        self._gather_timeout = gather_timeout
        self._pedantic = pedantic
        self._lock = threading.Lock()
        self._registrations: dict[frozenset[int], _Registration] = {}
        self._desc_ids: set[int] = set()
        self._dim_hashes: dict[str, int] = {}
        self._name_refs: dict[str, int] = {}

    @classmethod
    def from_settings(cls, settings: MetricsSettings) -> Registry:
        return cls(
            max_workers=settings.gather_max_workers,
            gather_timeout=settings.gather_timeout,
            pedantic=settings.pedantic,
        )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, collector: Collector) -> None:
        """Register *collector* or raise without recording anything.

        Raises
        ------
        InvalidDescriptorError
            A descriptor was built from invalid input, or there are none.
        AlreadyRegisteredError
            A collector with exactly the same descriptors is registered.
        DuplicateDescriptorError
            One of the descriptors is already registered.
        InconsistentDimensionsError
            A metric name is already registered with another label shape.
        """
        descs = tuple(collector.describe())
        if not descs:
            raise InvalidDescriptorError(f"Collector {collector!r} has no descriptors")
        for desc in descs:
            desc.result.unwrap()

        registration = _Registration(collector, descs, frozenset(d.id for d in descs))
        with self._lock:
            existing = self._registrations.get(registration.desc_ids)
            if existing is not None:
                raise AlreadyRegisteredError(existing.collector, collector)

            new_ids: set[int] = set()
            new_dims: dict[str, int] = {}
            for desc in descs:
                if desc.id in self._desc_ids or desc.id in new_ids:
                    raise DuplicateDescriptorError(
                        f"Descriptor {desc!r} already exists with the same name and const label values",
                        fq_name=desc.fq_name,
                    )
                recorded = self._dim_hashes.get(desc.fq_name, new_dims.get(desc.fq_name))
                if recorded is not None and recorded != desc.dim_hash:
                    raise InconsistentDimensionsError(
                        f"Descriptor {desc!r} has label names inconsistent with "
                        "previously registered metrics of the same name",
                        fq_name=desc.fq_name,
                    )
                new_ids.add(desc.id)
                new_dims[desc.fq_name] = desc.dim_hash

            self._desc_ids.update(new_ids)
            for desc in descs:
                self._dim_hashes[desc.fq_name] = desc.dim_hash
                self._name_refs[desc.fq_name] = self._name_refs.get(desc.fq_name, 0) + 1
            self._registrations[registration.desc_ids] = registration

        log.debug("collector_registered", collector=repr(collector), descriptors=len(descs))

    def must_register(self, *collectors: Collector) -> None:
        """Register every collector; a failure is logged as critical and raised."""
        for collector in collectors:
            try:
                self.register(collector)
            except MetricsError as exc:
                log.critical("registration_failed", collector=repr(collector), error=exc)
                raise

    def unregister(self, collector: Collector) -> bool:
        """Forget *collector*; return whether it was registered."""
        desc_ids = frozenset(d.id for d in collector.describe() if d.is_valid)
        with self._lock:
            registration = self._registrations.pop(desc_ids, None)
            if registration is None:
                return False
            for desc in registration.descs:
                self._desc_ids.discard(desc.id)
                refs = self._name_refs[desc.fq_name] - 1
                if refs:
                    self._name_refs[desc.fq_name] = refs
                else:
                    del self._name_refs[desc.fq_name]
                    del self._dim_hashes[desc.fq_name]

        log.debug("collector_unregistered", collector=repr(collector))
        return True

    @property
    def collectors(self) -> tuple[Collector, ...]:
        with self._lock:
            return tuple(r.collector for r in self._registrations.values())

    def __contains__(self, collector: object) -> bool:
        return any(c is collector for c in self.collectors)

    def __len__(self) -> int:
        with self._lock:
            return len(self._registrations)

    # ------------------------------------------------------------------
    # Gathering
    # ------------------------------------------------------------------

    def gather(self) -> GatherReport:
        """Collect every registered collector and assemble metric families.

        Never raises for collector problems: they come back in
        :attr:`GatherReport.errors` next to everything that did succeed.
        """
        with self._lock:
            registrations = list(self._registrations.values())
            dim_hashes = dict(self._dim_hashes)

        if not registrations:
            return GatherReport()

        results, errors = self._collect_all(registrations)

        assembler = FamilyAssembler(dim_hashes, pedantic=self._pedantic)
        for registration, collected in zip(registrations, results):
            if collected is not None:
                assembler.add_all(collected, registration.desc_ids)
        errors.extend(assembler.errors)

        report = GatherReport(families=assembler.families(), errors=errors)
        log.debug("gather_completed", families=len(report.families), errors=len(report.errors))
        return report

    async def gather_async(self) -> GatherReport:
        """Run :meth:`gather` in a worker thread, for asyncio callers."""
        return await asyncio.to_thread(self.gather)

    def _collect_all(
        self, registrations: list[_Registration]
    ) -> tuple[list[list[CollectedSample] | None], list[MetricsError]]:
        results: list[list[CollectedSample] | None] = [None] * len(registrations)
        errors: list[MetricsError] = []
        executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(registrations)),
            thread_name_prefix="mp-metrics-gather",
        )
        futures = {
            executor.submit(_render, registration.collector): index
            for index, registration in enumerate(registrations)
        }
        pending = set(futures)
        try:
            for future in concurrent.futures.as_completed(futures, timeout=self._gather_timeout):
                pending.discard(future)
                index = futures[future]
                try:
                    results[index] = future.result()
                except Exception as exc:  # noqa: BLE001
                    error = CollectorError(registrations[index].collector, exc)
                    log.warning("collector_failed", collector=repr(registrations[index].collector), error=error)
                    errors.append(error)
        except concurrent.futures.TimeoutError:
            for future in sorted(pending, key=futures.__getitem__):
                future.cancel()
                collector = registrations[futures[future]].collector
                error = GatherTimeoutError(collector, self._gather_timeout or 0.0)
                log.warning("collector_timed_out", collector=repr(collector), error=error)
                errors.append(error)
        finally:
            executor.shutdown(wait=not pending, cancel_futures=True)
        return results, errors


__all__ = ["Registry"]
