from __future__ import annotations
import os
import yaml
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_KUBECONFIG = os.path.join('~', '.kube', 'config')


@dataclass(frozen=True)
class ClusterCredentials:
    host: str
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    cert_file: Optional[str] = None
    key_file: Optional[str] = None
    ca_file: Optional[str] = None
    verify_ssl: bool = True


@dataclass(frozen=True)
class LoggingConfig:
    level: str = 'INFO'
    format: str = 'text'


@dataclass(frozen=True)
class AppConfig:
    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    credentials: Optional[ClusterCredentials] = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)


@dataclass(frozen=True)
class ReportConfig:
    """Which reports one invocation produces. Built once from CLI flags."""
    node_name: Optional[str] = None
    cluster_report: bool = False

    @property
    def empty(self) -> bool:
        return not self.node_name and not self.cluster_report


def _parse_credentials(raw: dict) -> ClusterCredentials:
    if not raw.get('host'):
        raise ValueError('credentials must include host')
    return ClusterCredentials(
        host=raw['host'],
        token=raw.get('token'),
        username=raw.get('username'),
        password=raw.get('password'),
        cert_file=raw.get('cert_file'),
        key_file=raw.get('key_file'),
        ca_file=raw.get('ca_file'),
        verify_ssl=raw.get('verify_ssl', True),
    )


def load_config(path: str) -> AppConfig:
    if not os.path.exists(path):
        raise FileNotFoundError(f'Config file not found: {path}')
    with open(path, 'r', encoding='utf-8') as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f'Config file {path} must contain a mapping')
    creds_data = raw.get('credentials')
    credentials = _parse_credentials(creds_data) if creds_data else None
    kubeconfig = raw.get('kubeconfig')
    if kubeconfig and credentials:
        raise ValueError('Config cannot specify both kubeconfig and credentials')
    logging_raw = raw.get('logging', {}) or {}
    logging_cfg = LoggingConfig(
        level=logging_raw.get('level', 'INFO'),
        format=logging_raw.get('format', 'text'),
    )
    return AppConfig(
        kubeconfig=kubeconfig,
        context=raw.get('context'),
        credentials=credentials,
        logging=logging_cfg,
    )
