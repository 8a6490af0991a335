import pytest
from quota_report.config import load_config, AppConfig, ReportConfig


def test_load_kubeconfig_config(tmp_path):
    cfg_path = tmp_path / 'cfg.yaml'
    cfg_path.write_text('kubeconfig: ~/.kube/other\ncontext: prod\nlogging:\n  level: DEBUG\n  format: json\n')
    cfg = load_config(str(cfg_path))
    assert cfg.kubeconfig == '~/.kube/other'
    assert cfg.context == 'prod'
    assert cfg.credentials is None
    assert cfg.logging.level == 'DEBUG'
    assert cfg.logging.format == 'json'


def test_load_credentials_config(tmp_path):
    cfg_path = tmp_path / 'cfg.yaml'
    cfg_path.write_text('credentials:\n  host: https://api:6443\n  token: t0k\n  verify_ssl: false\n')
    cfg = load_config(str(cfg_path))
    assert cfg.credentials.host == 'https://api:6443'
    assert cfg.credentials.verify_ssl is False
    assert cfg.logging.format == 'text'


def test_empty_file_gives_defaults(tmp_path):
    cfg_path = tmp_path / 'cfg.yaml'
    cfg_path.write_text('')
    assert load_config(str(cfg_path)) == AppConfig()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / 'nope.yaml'))


def test_kubeconfig_and_credentials_are_exclusive(tmp_path):
    cfg_path = tmp_path / 'cfg.yaml'
    cfg_path.write_text('kubeconfig: ~/.kube/config\ncredentials:\n  host: https://api\n')
    with pytest.raises(ValueError):
        load_config(str(cfg_path))


def test_credentials_need_host(tmp_path):
    cfg_path = tmp_path / 'cfg.yaml'
    cfg_path.write_text('credentials:\n  token: abc\n')
    with pytest.raises(ValueError):
        load_config(str(cfg_path))


def test_report_config_is_immutable():
    rc = ReportConfig(node_name='n1')
    assert not rc.empty
    assert ReportConfig().empty
    with pytest.raises(AttributeError):
        rc.node_name = 'n2'
