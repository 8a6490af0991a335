from __future__ import annotations
from typing import Dict, Any, List, Iterable, Optional
from urllib.parse import urlencode
from kubernetes import config as k8s_config, client as k8s_client
from kubernetes.client.exceptions import ApiException
import urllib3, json, os
from ..errors import DataSourceUnavailable
from ..util import logging as log
urllib3.disable_warnings()

POD_PHASES_ON_NODE = ('Running', 'Pending')

def load_kubeconfig(kubeconfig: str | None = None, context: str | None = None):
    if kubeconfig: k8s_config.load_kube_config(config_file=os.path.expanduser(kubeconfig), context=context)
    else: k8s_config.load_kube_config(context=context)

def configure_from_credentials(credentials) -> k8s_client.Configuration:
    cfg = k8s_client.Configuration()
    cfg.host = credentials.host
    if credentials.token:
        cfg.api_key = {"authorization": credentials.token}
        cfg.api_key_prefix = {"authorization": "Bearer"}
        log.debug('using bearer token', host=credentials.host)
    elif credentials.username and credentials.password:
        import base64
        basic_auth = base64.b64encode(f"{credentials.username}:{credentials.password}".encode()).decode()
        cfg.api_key = {"authorization": f"Basic {basic_auth}"}
    if credentials.cert_file: cfg.cert_file = credentials.cert_file
    if credentials.key_file: cfg.key_file = credentials.key_file
    if credentials.ca_file: cfg.ssl_ca_cert = credentials.ca_file
    cfg.verify_ssl = credentials.verify_ssl
    if not credentials.verify_ssl: log.warn('ssl_verification_disabled', host=credentials.host)
    return cfg

def build_api_client(app_cfg) -> k8s_client.ApiClient:
    if app_cfg.credentials:
        return k8s_client.ApiClient(configuration=configure_from_credentials(app_cfg.credentials))
    load_kubeconfig(app_cfg.kubeconfig, app_cfg.context)
    return k8s_client.ApiClient()

def node_phase_selector(node_name: str, phase: str) -> str:
    return f"spec.nodeName={node_name},status.phase={phase}"

def list_resources(api_client: k8s_client.ApiClient, path: str, what: str, field_selector: str | None = None) -> Iterable[Dict[str, Any]]:
    """Page through a core list endpoint, yielding raw item dicts.

    Any API or transport failure raises DataSourceUnavailable on the spot;
    a point-in-time report is never retried.
    """
    cont = None
    while True:
        params = {}
        if field_selector:
            params['fieldSelector'] = field_selector
        if cont:
            params['continue'] = cont
        url = path + (f"?{urlencode(params)}" if params else '')
        try:
            resp = api_client.call_api(url, 'GET', response_type='object', _preload_content=False, auth_settings=['BearerToken'])
            payload = json.loads(resp[0].data)
        except ApiException as e:
            status = getattr(e, 'status', None)
            log.error('failed listing resources', what=what, selector=field_selector, status=status, reason=e.reason)
            raise DataSourceUnavailable(what, str(e.reason), status) from e
        except Exception as e:
            log.error('unhandled error listing resources', what=what, selector=field_selector, error=str(e))
            raise DataSourceUnavailable(what, str(e)) from e
        for item in payload.get('items', []) or []:
            yield item
        cont = (payload.get('metadata') or {}).get('continue')
        if not cont:
            break


class KubeDataSource:
    """Fully materialized pod and resource quota listings from one cluster."""

    def __init__(self, api_client: k8s_client.ApiClient):
        self._api_client = api_client

    def list_workloads(self, field_selector: Optional[str] = None) -> List[Dict[str, Any]]:
        items = list(list_resources(self._api_client, '/api/v1/pods', 'pods', field_selector))
        log.info('listed pods', selector=field_selector or '<all>', count=len(items))
        return items

    def list_quotas(self) -> List[Dict[str, Any]]:
        items = list(list_resources(self._api_client, '/api/v1/resourcequotas', 'resourcequotas'))
        log.info('listed resource quotas', count=len(items))
        return items
