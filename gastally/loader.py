import json
import logging
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

DocumentT = TypeVar("DocumentT", bound=BaseModel)


class TraceLoadError(ValueError):
    """Raised when a trace file is not valid JSON or does not have the expected shape."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard constant {name}")


def load(path: str) -> Dict[str, Any]:
    """Reads a JSON trace file into memory.

    :param path: Path to the trace file.
    :type path: str
    :raises TraceLoadError: If the contents are not valid JSON or the top level is not an object.
    :return: The decoded JSON object.
    :rtype: Dict[str, Any]
    """
    with open(path, "rb") as f:
        raw = f.read()
    logger.debug("Read %d bytes from %s", len(raw), path)

    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        raise TraceLoadError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise TraceLoadError(f"{path} must contain a JSON object, found {type(data).__name__}")
    return data


def load_document(path: str, document_model: Type[DocumentT]) -> DocumentT:
    """Reads a trace file and validates it against a root document model.

    :param path: Path to the trace file.
    :type path: str
    :param document_model: The pydantic model describing the document's shape.
    :type document_model: Type[DocumentT]
    :raises TraceLoadError: If the file cannot be decoded or does not match the model.
    :return: The validated document.
    :rtype: DocumentT
    """
    data = load(path)
    try:
        document = document_model.model_validate(data)
    except ValidationError as e:
        raise TraceLoadError(f"{path} is not a valid {document_model.__name__}: {e}") from e
    logger.debug("Validated %s as %s", path, document_model.__name__)
    return document
