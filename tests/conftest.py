"""Shared fixtures for building trace documents."""

import json
import logging

import pytest


def _node(from_actor="f01", to_actor="f02", method=0, charges=(), subcalls=None):
    trace = {
        "Msg": {"From": from_actor, "To": to_actor, "Method": method, "Value": "0", "Params": None},
        "MsgRct": {"ExitCode": 0, "Return": None, "GasUsed": 0},
        "GasCharges": [{"Name": "OnMethodInvocation", "tg": tg, "cg": 0, "sg": 0, "tt": 0} for tg in charges],
    }
    if subcalls is not None:
        trace["Subcalls"] = subcalls
    return trace


@pytest.fixture
def node():
    """Builds a raw ExecutionTrace node as Lotus encodes it."""
    return _node


@pytest.fixture
def cron_document():
    def build(trace):
        return {"value": {"active": {"ExecutionTrace": trace}}}

    return build


@pytest.fixture
def message_document():
    def build(*messages):
        return {"Trace": [{"MsgCid": {"/": label}, "ExecutionTrace": trace} for label, trace in messages]}

    return build


@pytest.fixture
def write_json(tmp_path):
    """Writes a value as JSON to a temporary file and returns its path."""

    def write(data, name="trace.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return str(path)

    return write


@pytest.fixture(autouse=True)
def reset_package_log_level():
    yield
    logging.getLogger("gastally").setLevel(logging.NOTSET)
