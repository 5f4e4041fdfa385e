import logging
from typing import Dict, Iterable, Iterator, Optional, Union

from pdmsched.domain.errors import (
    DuplicateIdError,
    MalformedRecordError,
    UnknownDependencyError,
)
from pdmsched.domain.task import Task, parse_duration

logger = logging.getLogger(__name__)

START_ID = "START"
END_ID = "END"


class TaskRegistry:
    """
    Holds every task of one scheduling run, keyed by identifier.

    Tasks are kept in insertion order. Dependencies must already be
    registered when a task is inserted, which keeps the graph acyclic.
    """

    def __init__(self, start_id: str = START_ID, end_id: str = END_ID):
        """
        Initialize an empty registry.

        Args:
            start_id: Identifier used for the synthetic start anchor
            end_id: Identifier used for the synthetic end anchor

        Raises:
            MalformedRecordError: If the anchor identifiers are empty or equal
        """
        if not start_id or not end_id or start_id == end_id:
            raise MalformedRecordError(
                "Anchor IDs must be non-empty and distinct from each other"
            )
        self.start_id = start_id
        self.end_id = end_id
        self.tasks: Dict[str, Task] = {}

    def __len__(self):
        return len(self.tasks)

    def __contains__(self, task_id):
        return task_id in self.tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks.values())

    def __getitem__(self, task_id) -> Task:
        return self.tasks[task_id]

    def get(self, task_id, default=None) -> Optional[Task]:
        return self.tasks.get(task_id, default)

    @property
    def has_start(self) -> bool:
        return self.start_id in self.tasks

    @property
    def has_end(self) -> bool:
        return self.end_id in self.tasks

    def insert(
        self,
        task_id: str,
        duration: Union[int, str],
        dependencies: Optional[Iterable[str]] = None,
    ) -> Task:
        """
        Create a task and wire it to its dependencies.

        Args:
            task_id: Unique identifier of the new task
            duration: Non-negative integer duration (or a string of digits)
            dependencies: Identifiers of tasks that must finish first

        Returns:
            Task: The newly created task

        Raises:
            MalformedRecordError: If the identifier is missing
            DuplicateIdError: If the identifier is already registered
            InvalidDurationError: If the duration is not a non-negative integer
            UnknownDependencyError: If a dependency is not registered yet
        """
        if not task_id or not isinstance(task_id, str):
            raise MalformedRecordError("Task ID must be a non-empty string")
        if task_id in self.tasks:
            raise DuplicateIdError(task_id)

        duration = parse_duration(duration, task_id)

        if dependencies is None:
            dependencies = []
        elif isinstance(dependencies, str):
            raise MalformedRecordError(
                f"Dependencies of task {task_id!r} must be a list of IDs, not a string"
            )

        # Collapse repeats, keeping first occurrence order
        dep_ids = list(dict.fromkeys(dependencies))
        for dep_id in dep_ids:
            if dep_id not in self.tasks:
                raise UnknownDependencyError(task_id, dep_id)

        # Everything validated, now mutate
        task = Task(task_id, duration)
        for dep_id in dep_ids:
            task.add_predecessor(dep_id)
            self.tasks[dep_id].add_successor(task_id)
        self.tasks[task_id] = task

        logger.debug(
            "Inserted task %s (duration=%d, predecessors=%s)",
            task_id,
            duration,
            dep_ids,
        )
        return task

    def add_anchor(self, task_id: str) -> Task:
        """Register a zero-duration anchor task with no edges."""
        if task_id in self.tasks:
            raise DuplicateIdError(task_id)
        task = Task(task_id, 0, is_anchor=True)
        self.tasks[task_id] = task
        return task

    def link(self, predecessor_id: str, successor_id: str):
        """Add a finish-to-start edge between two registered tasks."""
        self.tasks[successor_id].add_predecessor(predecessor_id)
        self.tasks[predecessor_id].add_successor(successor_id)

    def real_tasks(self):
        """Return the tasks that are not START/END anchors."""
        return [task for task in self.tasks.values() if not task.is_anchor]

    def reset_schedule(self):
        """Clear all propagated times so the passes can be run again."""
        for task in self.tasks.values():
            task.reset_schedule()
        return self
