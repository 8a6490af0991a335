from __future__ import annotations
import click
from kubernetes.config import ConfigException
from .config import AppConfig, ReportConfig, load_config
from .errors import ReportError
from .kube.client import KubeDataSource, build_api_client
from .reporting.builder import generate_reports
from .reporting.render import render_table, render_json
from .util import logging as log


def _load_app_config(path: str | None) -> AppConfig:
    if not path:
        return AppConfig()
    try:
        return load_config(path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))


@click.group(add_help_option=False)
@click.option('--config', default=None, help='Optional config file path')
@click.pass_context
def cli(ctx, config):
    """Pod resource and quota usage reports"""
    ctx.ensure_object(dict)
    ctx.obj['config'] = config


@cli.command(add_help_option=False)
@click.option('--node-name', default=None, help='Report on pods bound to this node')
@click.option('--cluster-report', is_flag=True, help='Report on resource quotas across the cluster')
@click.option('--kubeconfig', default=None, help='Kubeconfig path (overrides config file)')
@click.option('--output', type=click.Choice(['table', 'json']), default='table', show_default=True)
@click.option('--no-color', is_flag=True, help='Disable colored table output')
@click.option('--log-level', default=None, help='Override configured log level')
@click.pass_context
def report(ctx, node_name, cluster_report, kubeconfig, output, no_color, log_level):
    """Print a node-scoped and/or cluster-scoped resource report."""
    cfg = _load_app_config(ctx.obj['config'])
    try:
        log.configure_logging(log_level or cfg.logging.level, cfg.logging.format)
    except ValueError as e:
        raise click.ClickException(str(e))
    report_cfg = ReportConfig(node_name=node_name or None, cluster_report=cluster_report)
    if report_cfg.empty:
        raise click.UsageError('Must specify --node-name and/or --cluster-report')
    if kubeconfig:
        if cfg.credentials:
            raise click.ClickException('--kubeconfig cannot be combined with configured credentials')
        cfg = AppConfig(kubeconfig=kubeconfig, context=cfg.context, logging=cfg.logging)
    try:
        api_client = build_api_client(cfg)
    except (ConfigException, OSError) as e:
        log.error('unable to configure API client', error=str(e))
        raise click.ClickException(f'Unable to configure API client: {e}')
    try:
        reports = generate_reports(KubeDataSource(api_client), report_cfg)
    except ReportError as e:
        log.error('report failed', error=str(e))
        raise click.ClickException(str(e))
    if output == 'json':
        click.echo(render_json(reports))
        return
    for i, rep in enumerate(reports):
        if i:
            click.echo('')
        click.echo(render_table(rep, color=not no_color))


@cli.command('help', add_help_option=False)
@click.argument('command', required=False)
@click.pass_context
def help_cmd(ctx, command):
    """Show context-driven help for a command, or list all commands."""
    group = ctx.parent.command if ctx.parent else ctx.command
    if not command:
        click.echo("Available commands:")
        for cmd_name in group.commands:
            click.echo(f"  {cmd_name}")
        click.echo("\nRun 'python -m quota_report.run help <command>' for details.")
        return
    cmd = group.commands.get(command)
    if not cmd:
        click.echo(f"Unknown command: {command}")
        click.echo("Run 'python -m quota_report.run help' to list available commands.")
        return
    with click.Context(cmd) as cmd_ctx:
        click.echo(cmd.get_help(cmd_ctx))


if __name__ == '__main__':
    cli()
