"""Metrics – Desc, the immutable identity of a metric.

A descriptor never raises from its constructor. Validation problems are kept
on the descriptor as ``Err(InvalidDescriptorError)`` and surface only when the
descriptor is used, i.e. on registration or while gathering.
"""
from __future__ import annotations

import dataclasses
import hashlib
import re
from types import MappingProxyType
from typing import Iterable, Mapping

from mp_metrics.kernel.types import Err, Ok, Result
from mp_metrics.metrics.errors import InvalidDescriptorError
from mp_metrics.metrics.model import LabelPair

METRIC_NAME_RE = re.compile(r"^[a-zA-Z_:][a-zA-Z0-9_:]*$")
LABEL_NAME_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

# Label names with this prefix are reserved for fields such as the metric
# name and value.
RESERVED_LABEL_PREFIX = "__"

# Never part of a valid UTF-8 string.
_SEPARATOR = b"\xff"


def hash_parts(parts: Iterable[str]) -> int:
    """Return a 64-bit hash over *parts*, each terminated by a separator byte."""
    digest = hashlib.blake2b(digest_size=8)
    for part in parts:
        digest.update(part.encode("utf-8"))
        digest.update(_SEPARATOR)
    return int.from_bytes(digest.digest(), "big")


def is_valid_metric_name(name: str) -> bool:
    return isinstance(name, str) and bool(METRIC_NAME_RE.fullmatch(name))


def is_valid_label_name(name: str) -> bool:
    return (
        isinstance(name, str)
        and bool(LABEL_NAME_RE.fullmatch(name))
        and not name.startswith(RESERVED_LABEL_PREFIX)
    )


def _is_utf8_string(value: object) -> bool:
    if not isinstance(value, str):
        return False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


@dataclasses.dataclass(frozen=True, eq=False)
class Desc:
    """Descriptor shared by every metric emitted under one identity.

    Attributes
    ----------
    fq_name:
        Fully-qualified metric name.
    help:
        Help text, required.
    variable_labels:
        Names of the labels whose values are chosen per child, in the order
        callers pass values.
    const_labels:
        Labels with fixed values, read-only.
    const_label_pairs:
        ``const_labels`` as :class:`LabelPair` objects sorted by name.
    id:
        Hash over the name, the const label pairs and the variable label
        names. Equal ids mean the same metric identity.
    dim_hash:
        Hash over the name and the set of all label names, ignoring const
        label values. Equal dim hashes mean the same label shape.
    result:
        ``Ok(self)`` or ``Err(InvalidDescriptorError)``.
    """

    fq_name: str
    help: str
    variable_labels: tuple[str, ...] = ()
    const_labels: Mapping[str, str] = dataclasses.field(default_factory=dict)
    const_label_pairs: tuple[LabelPair, ...] = dataclasses.field(init=False)
    id: int = dataclasses.field(init=False)
    dim_hash: int = dataclasses.field(init=False)
    result: Result[Desc, InvalidDescriptorError] = dataclasses.field(init=False)

    def __post_init__(self) -> None:
        const_labels = MappingProxyType(dict(self.const_labels))
        object.__setattr__(self, "variable_labels", tuple(self.variable_labels))
        object.__setattr__(self, "const_labels", const_labels)
        object.__setattr__(
            self,
            "const_label_pairs",
            tuple(
                sorted(
                    (LabelPair(n, v) for n, v in const_labels.items()),
                    key=lambda p: str(p.name),
                )
            ),
        )

        error = self._validate()
        if error is not None:
            object.__setattr__(self, "id", 0)
            object.__setattr__(self, "dim_hash", 0)
            object.__setattr__(self, "result", Err(error))
            return

        id_parts = [self.fq_name]
        for pair in self.const_label_pairs:
            id_parts.extend((pair.name, pair.value))
        id_parts.extend(self.variable_labels)
        label_names = sorted({*const_labels, *self.variable_labels})
        object.__setattr__(self, "id", hash_parts(id_parts))
        object.__setattr__(self, "dim_hash", hash_parts([self.fq_name, *label_names]))
        object.__setattr__(self, "result", Ok(self))

    def _validate(self) -> InvalidDescriptorError | None:
        if not is_valid_metric_name(self.fq_name):
            return InvalidDescriptorError(
                f"'{self.fq_name}' is not a valid metric name", fq_name=self.fq_name
            )
        if not self.help:
            return InvalidDescriptorError(
                f"Metric '{self.fq_name}' has an empty help text", fq_name=self.fq_name
            )
        seen: set[str] = set()
        for name in (*self.const_labels, *self.variable_labels):
            if not is_valid_label_name(name):
                return InvalidDescriptorError(
                    f"'{name}' is not a valid label name for metric '{self.fq_name}'",
                    fq_name=self.fq_name,
                    detail={"label": name},
                )
            if name in seen:
                return InvalidDescriptorError(
                    f"Duplicate label name '{name}' for metric '{self.fq_name}'",
                    fq_name=self.fq_name,
                    detail={"label": name},
                )
            seen.add(name)
        for name, value in self.const_labels.items():
            if not _is_utf8_string(value):
                return InvalidDescriptorError(
                    f"Const label '{name}' of metric '{self.fq_name}' has value {value!r}, "
                    "which is not a valid UTF-8 string",
                    fq_name=self.fq_name,
                    detail={"label": name},
                )
        return None

    @property
    def error(self) -> InvalidDescriptorError | None:
        return self.result.error_or_none()

    @property
    def is_valid(self) -> bool:
        return self.result.is_ok()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Desc):
            return NotImplemented
        return (
            self.fq_name == other.fq_name
            and self.help == other.help
            and self.const_label_pairs == other.const_label_pairs
            and self.variable_labels == other.variable_labels
        )

    def __hash__(self) -> int:
        return hash((self.fq_name, self.const_label_pairs, self.variable_labels))

    def __repr__(self) -> str:
        const = ", ".join(f"{p.name}={p.value!r}" for p in self.const_label_pairs)
        return (
            f"Desc(fq_name={self.fq_name!r}, help={self.help!r}, "
            f"const_labels={{{const}}}, variable_labels={list(self.variable_labels)!r})"
        )


__all__ = [
    "Desc",
    "LABEL_NAME_RE",
    "METRIC_NAME_RE",
    "RESERVED_LABEL_PREFIX",
    "hash_parts",
    "is_valid_label_name",
    "is_valid_metric_name",
]
