from __future__ import annotations
"""Single-pass reduction of workload and quota records into report totals.

Maxima are replaced only on a strictly greater value, so the first record
seen in input order keeps the owner fields on ties. Limit/request ratios are
integer floor divisions and are only computed for containers that declare a
non-zero request.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence
from ..errors import EmptyResultSet, EmptyQuotaSet, ReportAlreadyNormalized
from ..util import logging as log
from .records import Dimension, RESOURCES, ContainerResources, WorkloadRecord, QuotaRecord


@dataclass
class MaxObservation:
    value: int = 0
    owner_name: str = ''
    owner_namespace: str = ''

    def offer(self, value: int, record: WorkloadRecord) -> bool:
        if value > self.value:
            self.value = value
            self.owner_name = record.name
            self.owner_namespace = record.namespace
            return True
        return False


def _zero_sums() -> Dict[Dimension, int]:
    return {dim: 0 for dim in Dimension}


class _Sealable:
    _sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        if self._sealed:
            raise ReportAlreadyNormalized(f'{type(self).__name__} for {self.scope or "cluster"} was already normalized')
        self._sealed = True

    def _check_open(self) -> None:
        if self._sealed:
            raise ReportAlreadyNormalized(f'{type(self).__name__} is sealed and cannot be updated')


@dataclass
class WorkloadReport(_Sealable):
    scope: Optional[str] = None
    sums: Dict[Dimension, int] = field(default_factory=_zero_sums)
    maxima: Dict[Dimension, MaxObservation] = field(default_factory=lambda: {dim: MaxObservation() for dim in Dimension})
    ratios: Dict[str, MaxObservation] = field(default_factory=lambda: {res: MaxObservation() for res in RESOURCES})
    records: int = 0
    containers: int = 0

    def fold_container(self, record: WorkloadRecord, container: ContainerResources) -> None:
        self._check_open()
        self.containers += 1
        for dim in Dimension:
            quantity = container.get(dim)
            self.sums[dim] += quantity
            self.maxima[dim].offer(quantity, record)
        for res in RESOURCES:
            request = container.request(res)
            if request == 0:
                continue
            self.ratios[res].offer(container.limit(res) // request, record)

    def fold(self, record: WorkloadRecord) -> None:
        self._check_open()
        self.records += 1
        for container in record.containers:
            self.fold_container(record, container)


@dataclass
class QuotaReport(_Sealable):
    scope: Optional[str] = None
    allocated: Dict[Dimension, int] = field(default_factory=_zero_sums)
    used: Dict[Dimension, int] = field(default_factory=_zero_sums)
    quotas: int = 0
    top_consumers: WorkloadReport = field(default_factory=WorkloadReport)

    def fold(self, quota: QuotaRecord) -> None:
        self._check_open()
        self.quotas += 1
        for dim in Dimension:
            self.allocated[dim] += quota.hard.get(dim, 0)
            self.used[dim] += quota.used.get(dim, 0)


def aggregate_workloads(records: Iterable[WorkloadRecord], scope: Optional[str] = None) -> WorkloadReport:
    report = WorkloadReport(scope=scope)
    for record in records:
        report.fold(record)
    if report.records == 0:
        raise EmptyResultSet('pods', scope)
    log.debug('aggregated workloads', scope=scope or 'cluster', pods=report.records, containers=report.containers)
    return report


def aggregate_quotas(quotas: Sequence[QuotaRecord], all_workloads: Sequence[WorkloadRecord], scope: Optional[str] = None) -> QuotaReport:
    if not quotas:
        raise EmptyQuotaSet(scope)
    report = QuotaReport(scope=scope)
    for quota in quotas:
        report.fold(quota)
    report.top_consumers = aggregate_workloads(all_workloads, scope)
    log.debug('aggregated quotas', scope=scope or 'cluster', quotas=report.quotas)
    return report
