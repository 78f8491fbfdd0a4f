from gastally.loader import TraceLoadError, load, load_document
from gastally.report import REPORTS, CronReport, MessageReport, ReportConfig, TraceReport
from gastally.tally import Tally, grand_total, tally_calls
from gastally.trace_models import CronDocument, ExecutionTrace, GasCharge, Message, MessageListDocument, TopLevelMessage

__all__ = [
    "CronDocument",
    "CronReport",
    "ExecutionTrace",
    "GasCharge",
    "Message",
    "MessageListDocument",
    "MessageReport",
    "REPORTS",
    "ReportConfig",
    "Tally",
    "TopLevelMessage",
    "TraceLoadError",
    "TraceReport",
    "grand_total",
    "load",
    "load_document",
    "tally_calls",
]
