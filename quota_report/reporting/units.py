from __future__ import annotations
"""Conversion of aggregated totals into the whole units shown to users.

Conversion truncates and is not idempotent, so it only ever runs on a raw
accumulator, producing a separate frozen presentation object, and the
accumulator is sealed in the process.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple
from .aggregate import MaxObservation, WorkloadReport, QuotaReport
from .records import Dimension, RESOURCES

MILLI_PER_UNIT = 1000
BYTES_PER_GIB = 1024 ** 3

UNIT_LABELS = {'cpu': 'core', 'memory': 'Gi'}


def to_whole_compute_units(milli: int) -> int:
    return milli // MILLI_PER_UNIT


def to_gibibytes(num_bytes: int) -> int:
    return num_bytes // BYTES_PER_GIB


def to_display_units(resource: str, amount: int) -> int:
    if resource == 'cpu':
        return to_whole_compute_units(amount)
    return to_gibibytes(amount)


@dataclass(frozen=True)
class Observation:
    value: int
    owner_name: str
    owner_namespace: str

    def to_dict(self) -> dict:
        return {'value': self.value, 'namespace': self.owner_namespace, 'pod': self.owner_name}


@dataclass(frozen=True)
class NormalizedWorkloadReport:
    scope: Optional[str]
    sums: Tuple[Tuple[Dimension, int], ...]
    maxima: Tuple[Tuple[Dimension, Observation], ...]
    ratios: Tuple[Tuple[str, Observation], ...]
    pods: int
    containers: int

    def sum(self, dim: Dimension) -> int:
        return dict(self.sums)[dim]

    def max(self, dim: Dimension) -> Observation:
        return dict(self.maxima)[dim]

    def ratio(self, resource: str) -> Observation:
        return dict(self.ratios)[resource]

    def to_dict(self) -> dict:
        return {
            'scope': self.scope,
            'pods': self.pods,
            'containers': self.containers,
            'sums': {dim.key: v for dim, v in self.sums},
            'maxima': {dim.key: obs.to_dict() for dim, obs in self.maxima},
            'ratios': {res: obs.to_dict() for res, obs in self.ratios},
        }


@dataclass(frozen=True)
class NormalizedQuotaReport:
    scope: Optional[str]
    allocated: Tuple[Tuple[Dimension, int], ...]
    used: Tuple[Tuple[Dimension, int], ...]
    quotas: int
    top_consumers: NormalizedWorkloadReport

    def to_dict(self) -> dict:
        return {
            'scope': self.scope,
            'quotas': self.quotas,
            'allocated': {dim.key: v for dim, v in self.allocated},
            'used': {dim.key: v for dim, v in self.used},
            'top_consumers': self.top_consumers.to_dict(),
        }


def _convert_sums(sums: Dict[Dimension, int]) -> Tuple[Tuple[Dimension, int], ...]:
    return tuple((dim, to_display_units(dim.resource, sums[dim])) for dim in Dimension)


def _convert_max(resource: str, obs: MaxObservation) -> Observation:
    return Observation(to_display_units(resource, obs.value), obs.owner_name, obs.owner_namespace)


def normalize_workload_report(report: WorkloadReport) -> NormalizedWorkloadReport:
    if not isinstance(report, WorkloadReport):
        raise TypeError(f'Expected a raw WorkloadReport, got {type(report).__name__}')
    report.seal()
    return NormalizedWorkloadReport(
        scope=report.scope,
        sums=_convert_sums(report.sums),
        maxima=tuple((dim, _convert_max(dim.resource, report.maxima[dim])) for dim in Dimension),
        # ratios are dimensionless
        ratios=tuple(
            (res, Observation(report.ratios[res].value, report.ratios[res].owner_name, report.ratios[res].owner_namespace))
            for res in RESOURCES
        ),
        pods=report.records,
        containers=report.containers,
    )


def normalize_quota_report(report: QuotaReport) -> NormalizedQuotaReport:
    if not isinstance(report, QuotaReport):
        raise TypeError(f'Expected a raw QuotaReport, got {type(report).__name__}')
    report.seal()
    return NormalizedQuotaReport(
        scope=report.scope,
        allocated=_convert_sums(report.allocated),
        used=_convert_sums(report.used),
        quotas=report.quotas,
        top_consumers=normalize_workload_report(report.top_consumers),
    )
