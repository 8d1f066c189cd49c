# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import json
from typing import Any

from sgres_lib.core.error import SGresCollaboratorError
from sgres_lib.core.logger import get_logger

logger = get_logger(__name__)


def parse_scontrol_json(text: str, key: str) -> list[dict[str, Any]]:
    """
    Parse a JSON document produced by `scontrol ... --json` and return its records.

    Args:
        text (str): The raw standard output of scontrol.
        key (str): Top-level key holding the list of records (`nodes` or `jobs`).

    Returns:
        list[dict[str, Any]]: The records stored under `key`.

    Raises:
        SGresCollaboratorError: If the text is not valid JSON or does not contain
            a list of records under `key`.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise SGresCollaboratorError(f"Could not parse the output of scontrol: {e}.")

    if not isinstance(document, dict) or not isinstance(document.get(key), list):
        raise SGresCollaboratorError(
            f"The output of scontrol does not contain a list of '{key}'."
        )

    records = document[key]
    if not all(isinstance(record, dict) for record in records):
        raise SGresCollaboratorError(
            f"The output of scontrol contains '{key}' that are not JSON objects."
        )

    logger.debug(f"Parsed {len(records)} record(s) of '{key}' from scontrol.")
    return records


def get_field(record: dict[str, Any], name: str, kind: type) -> Any:
    """
    Retrieve a required field of an scontrol record, checking its type.

    Args:
        record (dict[str, Any]): A node or job record.
        name (str): Name of the field.
        kind (type): Expected type of the value.

    Returns:
        Any: The value of the field.

    Raises:
        SGresCollaboratorError: If the field is missing or has an unexpected type.
    """
    if name not in record:
        raise SGresCollaboratorError(f"Record from scontrol is missing field '{name}'.")

    value = record[name]
    # bool is a subclass of int but never a valid count
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise SGresCollaboratorError(
            f"Field '{name}' from scontrol has unexpected value '{value}'."
        )

    return value


def get_string_list(record: dict[str, Any], name: str) -> list[str]:
    """
    Retrieve a required field holding a list of strings.

    Raises:
        SGresCollaboratorError: If the field is missing or is not a list of strings.
    """
    values = get_field(record, name, list)
    if not all(isinstance(v, str) for v in values):
        raise SGresCollaboratorError(
            f"Field '{name}' from scontrol is not a list of strings."
        )

    return values
