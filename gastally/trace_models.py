import math
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Message(BaseModel):
    """
    The message a trace node executes. Only the fields needed to label a call are decoded.

    :param from_actor: str - Address of the sending actor.
    :param to_actor: str - Address of the receiving actor.
    :param method: int - Method number invoked on the receiver.
    """

    model_config = ConfigDict(populate_by_name=True)

    from_actor: str = Field(..., alias="From", strict=True, description="Sender actor address.")
    to_actor: str = Field(..., alias="To", strict=True, description="Receiver actor address.")
    method: int = Field(..., alias="Method", strict=True, ge=0, description="Method number invoked on the receiver. Must be a JSON integer; 2.0 is rejected.")


class GasCharge(BaseModel):
    """A single gas charge recorded during execution."""

    model_config = ConfigDict(populate_by_name=True)

    total_gas: float = Field(..., alias="tg", strict=True, ge=0, allow_inf_nan=False, description="Total gas charged for this step. Must be finite and non-negative.")


class ExecutionTrace(BaseModel):
    """
    One node of a message execution trace.

    :param msg: Message - The executed message.
    :param gas_charges: List[GasCharge] - Gas charged directly by this call.
    :param subcalls: Optional[List[ExecutionTrace]] - Nested calls, None for a leaf.
    """

    model_config = ConfigDict(populate_by_name=True)

    msg: Message = Field(..., alias="Msg", description="The executed message.")
    gas_charges: List[GasCharge] = Field(..., alias="GasCharges", description="Gas charged directly by this call.")
    subcalls: Optional[List["ExecutionTrace"]] = Field(None, alias="Subcalls", description="Nested calls in execution order.")

    def charged_gas(self) -> float:
        """Sums this call's gas charges as floats, in charge order."""
        # Accumulate left to right; sum() uses compensated float summation on newer interpreters.
        total = 0.0
        for charge in self.gas_charges:
            total += charge.total_gas
        return total

    @model_validator(mode="after")
    def _check_charged_gas_finite(self) -> "ExecutionTrace":
        if not math.isfinite(self.charged_gas()):
            raise ValueError("sum of gas charges overflows")
        return self


ExecutionTrace.model_rebuild()


class ActorState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    execution_trace: ExecutionTrace = Field(..., alias="ExecutionTrace", description="Trace of the cron tick.")


class CronStateValue(BaseModel):
    active: ActorState = Field(..., description="The active cron execution.")


class CronDocument(BaseModel):
    """
    Document holding a single cron execution trace at ``value.active.ExecutionTrace``.
    """

    value: CronStateValue = Field(..., description="Wrapped cron state.")


class Cid(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    root: str = Field(..., alias="/", description="String form of the CID.")


class TopLevelMessage(BaseModel):
    """A message included in a tipset, together with its execution trace."""

    model_config = ConfigDict(populate_by_name=True)

    msg_cid: Cid = Field(..., alias="MsgCid", description="CID of the top-level message.")
    execution_trace: ExecutionTrace = Field(..., alias="ExecutionTrace", description="Trace of the message execution.")

    @property
    def label(self) -> str:
        return self.msg_cid.root


class MessageListDocument(BaseModel):
    """
    Document holding the traces of several top-level messages under ``Trace``.
    """

    model_config = ConfigDict(populate_by_name=True)

    trace: List[TopLevelMessage] = Field(..., alias="Trace", description="Top-level messages in execution order.")
