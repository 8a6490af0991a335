from __future__ import annotations
"""Typed views of the pod and resource quota objects the reports consume.

The API returns plain JSON dicts; these helpers pull out only the resource
declarations the aggregators need, converted to integer milli-units (CPU)
and bytes (memory). Missing fields are zero.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List
from .quantity import cpu_milli, memory_bytes


class Dimension(Enum):
    CPU_REQUEST = ('cpu', 'requests')
    CPU_LIMIT = ('cpu', 'limits')
    MEMORY_REQUEST = ('memory', 'requests')
    MEMORY_LIMIT = ('memory', 'limits')

    @property
    def resource(self) -> str:
        return self.value[0]

    @property
    def kind(self) -> str:
        return self.value[1]

    @property
    def quota_key(self) -> str:
        return f'{self.kind}.{self.resource}'

    @property
    def key(self) -> str:
        return f'{self.resource}_{self.kind[:-1]}'

    def parse(self, value: Any, field: str | None = None) -> int:
        if self.resource == 'cpu':
            return cpu_milli(value, field)
        return memory_bytes(value, field)


RESOURCES = ('cpu', 'memory')


@dataclass(frozen=True)
class ContainerResources:
    name: str
    cpu_request: int = 0
    cpu_limit: int = 0
    memory_request: int = 0
    memory_limit: int = 0

    def get(self, dim: Dimension) -> int:
        return getattr(self, dim.key)

    def request(self, resource: str) -> int:
        return getattr(self, f'{resource}_request')

    def limit(self, resource: str) -> int:
        return getattr(self, f'{resource}_limit')


@dataclass(frozen=True)
class WorkloadRecord:
    name: str
    namespace: str
    containers: List[ContainerResources] = field(default_factory=list)


@dataclass(frozen=True)
class QuotaRecord:
    name: str
    namespace: str
    hard: Dict[Dimension, int] = field(default_factory=dict)
    used: Dict[Dimension, int] = field(default_factory=dict)


def container_from_spec(container: Dict[str, Any]) -> ContainerResources:
    resources = container.get('resources') or {}
    name = container.get('name', '')
    values = {}
    for dim in Dimension:
        section = resources.get(dim.kind) or {}
        values[dim.key] = dim.parse(section.get(dim.resource), f'{name}.{dim.kind}.{dim.resource}')
    return ContainerResources(name=name, **values)


def workload_from_pod(pod: Dict[str, Any]) -> WorkloadRecord:
    meta = pod.get('metadata') or {}
    spec = pod.get('spec') or {}
    # init containers are not part of the steady-state footprint
    containers = [container_from_spec(c) for c in spec.get('containers') or []]
    return WorkloadRecord(
        name=meta.get('name', ''),
        namespace=meta.get('namespace', ''),
        containers=containers,
    )


def quota_from_object(quota: Dict[str, Any]) -> QuotaRecord:
    meta = quota.get('metadata') or {}
    hard_raw = (quota.get('spec') or {}).get('hard') or {}
    used_raw = (quota.get('status') or {}).get('used') or {}
    hard = {dim: dim.parse(hard_raw.get(dim.quota_key), f'hard.{dim.quota_key}') for dim in Dimension}
    used = {dim: dim.parse(used_raw.get(dim.quota_key), f'used.{dim.quota_key}') for dim in Dimension}
    return QuotaRecord(
        name=meta.get('name', ''),
        namespace=meta.get('namespace', ''),
        hard=hard,
        used=used,
    )
