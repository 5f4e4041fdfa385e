import re
from typing import List, Optional, Union

from pdmsched.domain.errors import InvalidDurationError, MalformedRecordError

_DIGITS = re.compile(r"[0-9]+")


def parse_duration(value: Union[int, str], task_id: Optional[str] = None) -> int:
    """
    Convert a duration given as an int or a string of digits to an int.

    Args:
        value: The raw duration
        task_id: Task the duration belongs to, used in the error message

    Returns:
        int: The duration

    Raises:
        InvalidDurationError: If the value is not a non-negative integer
    """
    # bool is an int subclass but never a meaningful duration
    if isinstance(value, bool):
        raise InvalidDurationError(value, task_id)

    if isinstance(value, int):
        if value < 0:
            raise InvalidDurationError(value, task_id)
        return value

    if isinstance(value, str):
        text = value.strip()
        if _DIGITS.fullmatch(text):
            return int(text)

    raise InvalidDurationError(value, task_id)


class Task:
    """
    Represents a single activity in a precedence diagram.

    Edges are stored as lists of task identifiers, so tasks never hold
    references to each other. The registry that owns the task keeps
    predecessors and successors symmetric.
    """

    def __init__(self, id: str, duration: Union[int, str], is_anchor: bool = False):
        """
        Initialize a new Task.

        Args:
            id: Unique identifier for the task
            duration: Duration as a non-negative integer (or a string of digits)
            is_anchor: True for the synthetic START/END tasks

        Raises:
            MalformedRecordError: If the identifier is missing
            InvalidDurationError: If the duration is not a non-negative integer
        """
        if not id or not isinstance(id, str):
            raise MalformedRecordError("Task ID must be a non-empty string")
        self.id = id
        self.duration = parse_duration(duration, id)
        self.is_anchor = is_anchor

        # Graph edges (task IDs, insertion ordered, no duplicates)
        self.predecessors: List[str] = []
        self.successors: List[str] = []

        # Schedule attributes
        self.early_start = 0
        self.early_finish = 0
        self.late_start: Optional[int] = None
        self.late_finish: Optional[int] = None

        # Position in the forward traversal, set by the forward pass
        self.topological_index: Optional[int] = None

    def __repr__(self):
        return (
            f"Task(id={self.id!r}, duration={self.duration}, "
            f"es={self.early_start}, ef={self.early_finish}, "
            f"ls={self.late_start}, lf={self.late_finish})"
        )

    def add_predecessor(self, task_id: str) -> "Task":
        if task_id not in self.predecessors:
            self.predecessors.append(task_id)
        return self

    def add_successor(self, task_id: str) -> "Task":
        if task_id not in self.successors:
            self.successors.append(task_id)
        return self

    @property
    def is_scheduled(self) -> bool:
        """True once both propagation passes have set the latest times."""
        return self.late_start is not None and self.late_finish is not None

    @property
    def slack(self) -> Optional[int]:
        """Total float (latest start minus earliest start), None before scheduling."""
        if self.late_start is None:
            return None
        return self.late_start - self.early_start

    @property
    def is_critical(self) -> bool:
        return (
            self.is_scheduled
            and self.early_start == self.late_start
            and self.early_finish == self.late_finish
        )

    def reset_schedule(self) -> "Task":
        """Put the schedule attributes back to their initial sentinels."""
        self.early_start = 0
        self.early_finish = 0
        self.late_start = None
        self.late_finish = None
        self.topological_index = None
        return self

    def to_row(self):
        """Return the (id, ES, EF, LS, LF) tuple used by reports."""
        return (
            self.id,
            self.early_start,
            self.early_finish,
            self.late_start,
            self.late_finish,
        )
