from typing import List

from pydantic import BaseModel, Field, NonNegativeInt

from gastally.trace_models import ExecutionTrace


class Tally(BaseModel):
    """
    Gas consumed by one call in an execution trace.

    :param from_actor: str - Sender of the call.
    :param to_actor: str - Receiver of the call.
    :param depth: NonNegativeInt - Call depth, 0 for the top-level call.
    :param method: NonNegativeInt - Method number invoked.
    :param self_gas: NonNegativeInt - Gas charged directly by the call.
    :param total_gas: NonNegativeInt - Self gas plus the total gas of every subcall.
    """

    from_actor: str = Field(..., description="Sender of the call.")
    to_actor: str = Field(..., description="Receiver of the call.")
    depth: NonNegativeInt = Field(..., description="Call depth, 0 for the top-level call.")
    method: NonNegativeInt = Field(..., description="Method number invoked.")
    self_gas: NonNegativeInt = Field(..., description="Gas charged directly by the call.")
    total_gas: NonNegativeInt = Field(..., description="Self gas plus the total gas of every subcall.")


def tally_calls(trace: ExecutionTrace, depth: int = 0) -> List[Tally]:
    """Tallies the gas consumption of a message execution and its subcalls.

    Charges are summed as floats and truncated once, so fractional charges carry
    into the integer total.

    :param trace: The execution trace node to tally.
    :type trace: ExecutionTrace
    :param depth: Call depth of ``trace``, defaults to 0
    :type depth: int
    :return: One tally per call, in call sequence. The first tally is ``trace`` itself.
    :rtype: List[Tally]
    """
    self_gas = trace.charged_gas()

    result = [
        Tally(
            from_actor=trace.msg.from_actor,
            to_actor=trace.msg.to_actor,
            depth=depth,
            method=trace.msg.method,
            self_gas=int(self_gas),
            total_gas=int(self_gas),
        )
    ]

    subcall_gas = 0
    for call in trace.subcalls or []:
        sub_result = tally_calls(call, depth + 1)
        result.extend(sub_result)
        subcall_gas += sub_result[0].total_gas
    result[0].total_gas += subcall_gas
    return result


def grand_total(tallies: List[Tally]) -> int:
    """Sums the self gas of every tally in a sequence."""
    total = 0
    for t in tallies:
        total += t.self_gas
    return total
