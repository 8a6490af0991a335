from __future__ import annotations


class ReportError(Exception):
    """Base class for failures that abort report generation."""


class DataSourceUnavailable(ReportError):
    """Listing workloads or quotas from the API failed."""

    def __init__(self, what: str, reason: str, status: int | None = None):
        self.what = what
        self.reason = reason
        self.status = status
        detail = f' (status {status})' if status is not None else ''
        super().__init__(f'Unable to list {what}{detail}: {reason}')


class EmptyResultSet(ReportError):
    """A required record sequence came back empty."""

    def __init__(self, what: str, scope: str | None = None):
        self.what = what
        self.scope = scope
        where = f' for {scope}' if scope else ''
        super().__init__(f'Empty {what} list{where}')


class EmptyQuotaSet(EmptyResultSet):
    def __init__(self, scope: str | None = None):
        super().__init__('quota', scope)


class ReportAlreadyNormalized(ReportError):
    """Unit conversion was requested for a report that was already converted."""
