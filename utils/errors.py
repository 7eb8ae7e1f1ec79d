"""
Report pipeline errors.

Every failure raised by the fetchers, aggregators and stores derives from
ReportError so the API layer and the snapshot scheduler can handle them in
one place.
"""


class ReportError(Exception):
    """Base class for report generation and persistence failures."""


class SourceUnavailable(ReportError):
    """The external data provider could not be reached or refused the request."""


class DecodeError(ReportError):
    """Source payload or stored row could not be decoded into the expected shape."""


class EmptyDataSet(ReportError):
    """The fetched collection was empty, so best/worst cannot be computed."""


class NotFound(ReportError):
    """No stored report matches the requested id."""

    def __init__(self, table: str, report_id: int) -> None:
        super().__init__(f"could not find report with id {report_id} in {table}")
        self.table = table
        self.report_id = report_id


class UnexpectedRowCount(ReportError):
    """A write statement affected a number of rows other than one."""

    def __init__(self, rows_affected: int) -> None:
        super().__init__(f"expected 1 row affected, got {rows_affected}")
        self.rows_affected = rows_affected


class SchemaInitFatal(ReportError):
    """The database could not be reached or its schema could not be prepared."""


class StoreClosed(ReportError):
    """The store was used after close()."""


class StoreError(ReportError):
    """The database rejected a statement for a reason not covered above."""
