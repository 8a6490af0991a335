from __future__ import annotations
from typing import Any, Dict, List, Protocol, Optional, Union
from ..config import ReportConfig
from ..kube.client import POD_PHASES_ON_NODE, node_phase_selector
from ..util import logging as log
from .aggregate import WorkloadReport, QuotaReport, aggregate_workloads, aggregate_quotas
from .records import workload_from_pod, quota_from_object
from .units import (
    NormalizedWorkloadReport, NormalizedQuotaReport,
    normalize_workload_report, normalize_quota_report,
)


class DataSource(Protocol):
    def list_workloads(self, field_selector: Optional[str] = None) -> List[Dict[str, Any]]: ...

    def list_quotas(self) -> List[Dict[str, Any]]: ...


def build_node_report(source: DataSource, node_name: str) -> WorkloadReport:
    """Aggregate the running and pending pods bound to one node."""
    pods: List[Dict[str, Any]] = []
    for phase in POD_PHASES_ON_NODE:
        pods.extend(source.list_workloads(node_phase_selector(node_name, phase)))
    return aggregate_workloads([workload_from_pod(p) for p in pods], scope=node_name)


def build_cluster_report(source: DataSource) -> QuotaReport:
    """Sum every resource quota in the cluster and find the largest pod consumers."""
    quotas = [quota_from_object(q) for q in source.list_quotas()]
    if not quotas:
        # skip listing pods when the report is going to fail anyway
        return aggregate_quotas(quotas, [])
    workloads = [workload_from_pod(p) for p in source.list_workloads()]
    return aggregate_quotas(quotas, workloads)


def generate_reports(source: DataSource, report_cfg: ReportConfig) -> List[Union[NormalizedWorkloadReport, NormalizedQuotaReport]]:
    if report_cfg.empty:
        raise ValueError('Nothing to report: give a node name or request the cluster report')
    results: List[Union[NormalizedWorkloadReport, NormalizedQuotaReport]] = []
    if report_cfg.node_name:
        log.info('building node report', node=report_cfg.node_name)
        results.append(normalize_workload_report(build_node_report(source, report_cfg.node_name)))
    if report_cfg.cluster_report:
        log.info('building cluster report')
        results.append(normalize_quota_report(build_cluster_report(source)))
    return results
