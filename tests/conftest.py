import sys, os
import pytest

# Ensure project root (parent of tests directory) is on sys.path for imports when
# test execution occurs in environments that don't automatically include it.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from quota_report.util import logging as log


def make_pod(name, namespace='default', containers=None):
    """Build a pod API object; containers are (cpu_req, cpu_lim, mem_req, mem_lim) tuples."""
    specs = []
    for i, (cpu_req, cpu_lim, mem_req, mem_lim) in enumerate(containers or []):
        requests, limits = {}, {}
        if cpu_req is not None: requests['cpu'] = cpu_req
        if mem_req is not None: requests['memory'] = mem_req
        if cpu_lim is not None: limits['cpu'] = cpu_lim
        if mem_lim is not None: limits['memory'] = mem_lim
        specs.append({'name': f'c{i}', 'resources': {'requests': requests, 'limits': limits}})
    return {'metadata': {'name': name, 'namespace': namespace}, 'spec': {'containers': specs}}


def make_quota(name, namespace='default', hard=None, used=None):
    return {
        'metadata': {'name': name, 'namespace': namespace},
        'spec': {'hard': dict(hard or {})},
        'status': {'used': dict(used or {})},
    }


class FakeDataSource:
    def __init__(self, pods_by_selector=None, all_pods=None, quotas=None):
        self.pods_by_selector = pods_by_selector or {}
        self.all_pods = all_pods or []
        self.quotas = quotas or []
        self.calls = []

    def list_workloads(self, field_selector=None):
        self.calls.append(('pods', field_selector))
        if field_selector is None:
            return list(self.all_pods)
        return list(self.pods_by_selector.get(field_selector, []))

    def list_quotas(self):
        self.calls.append(('quotas', None))
        return list(self.quotas)


@pytest.fixture(autouse=True)
def _reset_logging():
    log.configure_logging('INFO', 'text')
    yield
    log.configure_logging('INFO', 'text')
