"""
Record codec - pipe-delimited line format for persisted tasks.

One task per line, fields in fixed order::

    id|text|completed|createdAt

Lines are joined with ``\\n`` and the file has no trailing newline. Inside a
field, backslash, pipe, newline and carriage return are written as ``\\\\``,
``\\|``, ``\\n`` and ``\\r``. Any other backslash sequence is read back
literally, so files holding plain text without these characters decode the
same as they always have.
"""

import re
from typing import Iterable, List

from ..models.task import Task
from ..utils.exceptions import RecordFormatError
from ..utils.logger import get_logger

logger = get_logger(__name__)

FIELD_SEPARATOR = "|"
RECORD_SEPARATOR = "\n"
FIELD_COUNT = 4

_ESCAPES = {
    "\\": "\\\\",
    "|": "\\|",
    "\n": "\\n",
    "\r": "\\r",
}
_UNESCAPES = {
    "\\": "\\",
    "|": "|",
    "n": "\n",
    "r": "\r",
}
_ID_PATTERN = re.compile(r"[0-9]+")


def escape_field(value: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in value)


def split_fields(line: str) -> List[str]:
    """Split *line* on unescaped separators and undo escapes in each field."""
    fields: List[str] = []
    current: List[str] = []
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\" and i + 1 < len(line):
            nxt = line[i + 1]
            if nxt in _UNESCAPES:
                current.append(_UNESCAPES[nxt])
            else:
                current.append(ch + nxt)
            i += 2
            continue
        if ch == FIELD_SEPARATOR:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    fields.append("".join(current))
    return fields


def encode_line(task: Task) -> str:
    return FIELD_SEPARATOR.join([
        str(task.id),
        escape_field(task.text),
        "true" if task.completed else "false",
        escape_field(task.created_at),
    ])


def decode_line(line: str) -> Task:
    """
    Decode one persisted line into a Task.

    Raises:
        RecordFormatError: wrong field count or an id that is not a
            positive integer
    """
    fields = split_fields(line)
    if len(fields) != FIELD_COUNT:
        raise RecordFormatError(line, f"expected {FIELD_COUNT} fields, got {len(fields)}")

    raw_id, text, completed, created_at = fields
    if not _ID_PATTERN.fullmatch(raw_id) or int(raw_id) <= 0:
        raise RecordFormatError(line, f"id {raw_id!r} is not a positive integer")

    return Task(
        id=int(raw_id),
        text=text,
        completed=completed == "true",
        created_at=created_at,
    )


def encode_records(tasks: Iterable[Task]) -> str:
    return RECORD_SEPARATOR.join(encode_line(task) for task in tasks)


def decode_records(content: str) -> List[Task]:
    """
    Decode a whole data file.

    Blank lines are ignored. Malformed lines are skipped with a warning so a
    single bad record does not hide the rest of the list.
    """
    tasks: List[Task] = []
    for lineno, raw in enumerate(content.split(RECORD_SEPARATOR), start=1):
        line = raw.rstrip("\r")
        if not line.strip():
            continue
        try:
            tasks.append(decode_line(line))
        except RecordFormatError as e:
            logger.warning(f"Skipping line {lineno}: {e.reason}")
    return tasks
