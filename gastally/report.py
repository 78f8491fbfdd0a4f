import logging
from typing import ClassVar, Dict, Iterator, List, Optional, Tuple, Type

from pydantic import BaseModel, Field, NonNegativeInt

from gastally.tally import Tally, grand_total, tally_calls
from gastally.trace_models import CronDocument, ExecutionTrace, MessageListDocument

logger = logging.getLogger(__name__)

INDENT = "  "


class ReportConfig(BaseModel):
    """
    Options controlling which calls are displayed. Tallies and totals always cover the full tree.
    """

    display_depth: Optional[NonNegativeInt] = Field(None, description="Calls at this depth or deeper are not displayed. None displays every call.")

    def displays(self, tally: Tally) -> bool:
        """Returns whether a tally falls within the display depth."""
        return self.display_depth is None or tally.depth < self.display_depth


class TraceReport(BaseModel):
    """
    Renders gas tallies for the execution traces found in a trace document.

    Subclasses pick the document shape, locate its root traces and format each line.

    :param config: ReportConfig - Display options.
    """

    document_model: ClassVar[Type[BaseModel]]

    config: ReportConfig = Field(default_factory=ReportConfig, description="Display options.")

    def roots(self, document: BaseModel) -> List[Tuple[Optional[str], ExecutionTrace]]:
        """Returns the labelled root traces of a document, in document order. Subclasses must override this.

        :param document: A validated instance of ``document_model``.
        :type document: BaseModel
        :return: Pairs of label (None for an unlabelled root) and trace.
        :rtype: List[Tuple[Optional[str], ExecutionTrace]]
        """
        raise NotImplementedError

    def format_tally(self, tally: Tally) -> str:
        """Formats one displayed tally as a report line. Subclasses must override this."""
        raise NotImplementedError

    def header(self) -> List[str]:
        return []

    def footer(self, total_gas: int) -> List[str]:
        return []

    def render(self, document: BaseModel) -> Iterator[str]:
        """Tallies every root trace of the document and yields the report lines.

        :param document: A validated instance of ``document_model``.
        :type document: BaseModel
        :return: Report lines without trailing newlines.
        :rtype: Iterator[str]
        """
        yield from self.header()
        total_gas = 0
        for label, trace in self.roots(document):
            tallies = tally_calls(trace)
            total_gas += grand_total(tallies)
            logger.info("Tallied %d calls for %s", len(tallies), label or "root trace")
            if label is not None:
                yield label
            for tally in tallies:
                if self.config.displays(tally):
                    yield self.format_tally(tally)
        yield from self.footer(total_gas)


class CronReport(TraceReport):
    """Report for a single cron execution trace, closed by a grand total line."""

    document_model: ClassVar[Type[BaseModel]] = CronDocument

    def roots(self, document: CronDocument) -> List[Tuple[Optional[str], ExecutionTrace]]:
        return [(None, document.value.active.execution_trace)]

    def format_tally(self, tally: Tally) -> str:
        indent = INDENT * tally.depth
        return f"{indent}{tally.from_actor}->{tally.to_actor}:{tally.method} self:{tally.self_gas:,} total:{tally.total_gas:,}"

    def footer(self, total_gas: int) -> List[str]:
        return [f"Total gas: {total_gas:,}"]


class MessageReport(TraceReport):
    """
    Tab-separated report for the top-level messages of a tipset.

    Each message's calls follow a line holding the message CID.
    """

    document_model: ClassVar[Type[BaseModel]] = MessageListDocument

    def roots(self, document: MessageListDocument) -> List[Tuple[Optional[str], ExecutionTrace]]:
        return [(msg.label, msg.execution_trace) for msg in document.trace]

    def format_tally(self, tally: Tally) -> str:
        indent = INDENT * tally.depth
        # Method numbers are not grouped.
        return f"{indent}{tally.from_actor}→{tally.to_actor}:{tally.method}\t{tally.self_gas:>12,}\t{tally.total_gas:>12,}"

    def header(self) -> List[str]:
        return ["call\tself\ttotal"]


REPORTS: Dict[str, Type[TraceReport]] = {
    "cron": CronReport,
    "messages": MessageReport,
}
