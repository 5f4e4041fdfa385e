from typing import Iterable, Iterator, List, NamedTuple, Tuple

from pdmsched.domain.errors import MalformedRecordError, TaskError
from pdmsched.domain.task import parse_duration


class TaskRecord(NamedTuple):
    id: str
    duration: int
    dependencies: List[str]


def parse_record(line: str) -> TaskRecord:
    """
    Parse one input line of the form ``"A 2 B,C"``.

    The first field is the task ID, the second its duration and the optional
    third a comma separated list of IDs the task depends on.

    Raises:
        MalformedRecordError: If the field count is wrong or a dependency is empty
        InvalidDurationError: If the duration is not a non-negative integer
    """
    fields = line.split()
    if len(fields) not in (2, 3):
        raise MalformedRecordError(
            "Tasks must have both an ID and duration and at most one "
            f"dependency list, got {line!r}"
        )

    task_id = fields[0]
    duration = parse_duration(fields[1], task_id)

    dependencies = []
    if len(fields) == 3:
        dependencies = fields[2].split(",")
        if any(not dep for dep in dependencies):
            raise MalformedRecordError(
                f"Empty entry in dependency list of task {task_id!r}: {fields[2]!r}"
            )

    return TaskRecord(task_id, duration, dependencies)


def is_blank(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def iter_records(lines: Iterable[str]) -> Iterator[Tuple[int, TaskRecord]]:
    """
    Yield (line number, record) for every non-blank, non-comment line.

    Errors are re-raised with the 1-based line number prepended to the
    message and stored on the exception as ``lineno``.
    """
    for lineno, line in enumerate(lines, start=1):
        if is_blank(line):
            continue
        try:
            record = parse_record(line)
        except TaskError as e:
            tag_line_number(e, lineno)
            raise
        yield lineno, record


def tag_line_number(error: TaskError, lineno: int) -> TaskError:
    """Prefix an input error's message with the line it came from."""
    error.lineno = lineno
    error.args = (f"line {lineno}: {error}",)
    return error
