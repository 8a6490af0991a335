from __future__ import annotations
"""Terminal and JSON rendering of normalized reports.

Every block is a title row followed by a value row; blocks are built from
label tables keyed by Dimension so node and cluster reports share the same
code path. Columns are right-aligned across the whole table.
"""
import json
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union
import click
from .records import Dimension
from .units import UNIT_LABELS, NormalizedWorkloadReport, NormalizedQuotaReport

COLUMN_PADDING = 3

MAX_LABELS = [
    (Dimension.CPU_REQUEST, 'Max CPU request:'),
    (Dimension.CPU_LIMIT, 'Max CPU limit:'),
    (Dimension.MEMORY_REQUEST, 'Max Memory request:'),
    (Dimension.MEMORY_LIMIT, 'Max Memory limit:'),
]

SUM_LABELS = [
    (Dimension.CPU_REQUEST, 'All requested CPU:'),
    (Dimension.MEMORY_REQUEST, 'All requested MEMORY:'),
    (Dimension.CPU_LIMIT, 'All CPU limits:'),
    (Dimension.MEMORY_LIMIT, 'All MEMORY limits:'),
]

RATIO_LABELS = [
    ('cpu', 'Max CPU ratio:'),
    ('memory', 'Max MEMORY ratio:'),
]

QUOTA_LABELS = [
    (Dimension.CPU_REQUEST, 'CPU REQUESTS:'),
    (Dimension.CPU_LIMIT, 'CPU LIMITS:'),
    (Dimension.MEMORY_REQUEST, 'MEMORY REQUESTS:'),
    (Dimension.MEMORY_LIMIT, 'MEMORY LIMITS:'),
]

OWNER_TITLES = ['Namespace:', 'Pod name:']

# (fg, bold) pairs
TITLE = ('blue', True)
ALERT_TITLE = ('red', True)
VALUE = ('magenta', True)
MUTED_VALUE = ('yellow', False)
HEADING = ('green', True)


@dataclass(frozen=True)
class Block:
    titles: Tuple[str, ...]
    values: Tuple[str, ...]
    title_style: Tuple[str, bool] = TITLE
    value_style: Tuple[str, bool] = VALUE


def _amount(dim: Dimension, value: int) -> str:
    return f'{value} {UNIT_LABELS[dim.resource]}'


def max_blocks(report: NormalizedWorkloadReport) -> List[Block]:
    blocks = []
    for dim, label in MAX_LABELS:
        obs = report.max(dim)
        blocks.append(Block((label, *OWNER_TITLES), (_amount(dim, obs.value), obs.owner_namespace, obs.owner_name)))
    return blocks


def workload_blocks(report: NormalizedWorkloadReport) -> List[Block]:
    blocks = max_blocks(report)
    blocks.append(Block(
        tuple(label for _, label in SUM_LABELS),
        tuple(_amount(dim, report.sum(dim)) for dim, _ in SUM_LABELS),
        ALERT_TITLE, MUTED_VALUE,
    ))
    for res, label in RATIO_LABELS:
        obs = report.ratio(res)
        blocks.append(Block((label, *OWNER_TITLES), (str(obs.value), obs.owner_namespace, obs.owner_name), ALERT_TITLE, MUTED_VALUE))
    return blocks


def quota_blocks(report: NormalizedQuotaReport) -> List[Block]:
    blocks = []
    for prefix, values in (('ALLOCATED', dict(report.allocated)), ('USED', dict(report.used))):
        blocks.append(Block(
            tuple(f'{prefix} {label}' for _, label in QUOTA_LABELS),
            tuple(_amount(dim, values[dim]) for dim, _ in QUOTA_LABELS),
            ALERT_TITLE, VALUE,
        ))
    return blocks + max_blocks(report.top_consumers)


def format_blocks(blocks: Sequence[Block], color: bool = True) -> List[str]:
    widths: List[int] = []
    for block in blocks:
        for row in (block.titles, block.values):
            for i, cell in enumerate(row):
                if i >= len(widths):
                    widths.append(0)
                widths[i] = max(widths[i], len(cell))
    lines = []
    for block in blocks:
        for row, (fg, bold) in ((block.titles, block.title_style), (block.values, block.value_style)):
            text = ''.join(cell.rjust(widths[i] + COLUMN_PADDING) for i, cell in enumerate(row))
            lines.append(click.style(text, fg=fg, bold=bold) if color else text)
    return lines


def render_table(report: Union[NormalizedWorkloadReport, NormalizedQuotaReport], color: bool = True) -> str:
    lines = []
    if isinstance(report, NormalizedQuotaReport):
        heading = f'Cluster quota report ({report.quotas} quotas)'
        blocks = quota_blocks(report)
    else:
        heading = f'Node name: {report.scope}'
        blocks = workload_blocks(report)
    fg, bold = HEADING
    lines.append(click.style(heading, fg=fg, bold=bold) if color else heading)
    lines.extend(format_blocks(blocks, color))
    return '\n'.join(lines)


def render_json(reports: Sequence[Union[NormalizedWorkloadReport, NormalizedQuotaReport]]) -> str:
    out = []
    for report in reports:
        kind = 'cluster' if isinstance(report, NormalizedQuotaReport) else 'node'
        out.append({'type': kind, **report.to_dict()})
    return json.dumps(out if len(out) > 1 else out[0], indent=2)
