import logging

from pdmsched.domain.errors import DuplicateIdError, ScheduleInvariantError, TaskError
from pdmsched.domain.registry import END_ID, START_ID, TaskRegistry
from pdmsched.utils.graph import (
    add_end,
    add_start,
    backward_pass,
    find_critical_path,
    forward_pass,
    to_networkx,
)
from pdmsched.utils.parsing import iter_records, parse_record, tag_line_number

logger = logging.getLogger(__name__)


class PDMScheduler:
    def __init__(self, start_id=START_ID, end_id=END_ID):
        self.registry = TaskRegistry(start_id=start_id, end_id=end_id)

        # Schedule results
        self.critical_path = []  # Critical task IDs ordered by early start
        self.schedule_order = []  # Task IDs in forward traversal order
        self.is_scheduled = False

        # Graph representation, built on demand
        self.task_graph = None

    @property
    def tasks(self):
        """Dictionary of Task objects keyed by ID"""
        return self.registry.tasks

    @property
    def start_id(self):
        return self.registry.start_id

    @property
    def end_id(self):
        return self.registry.end_id

    @property
    def is_anchored(self):
        """True once START or END has been attached to the task graph."""
        return self.registry.has_start or self.registry.has_end

    def _check_not_anchored(self):
        if self.is_anchored:
            raise ScheduleInvariantError(
                "The task graph is closed once START/END anchors are attached"
            )

    def add_task(self, task_id, duration, dependencies=None):
        """Add a task to the scheduler"""
        self._check_not_anchored()
        self.registry.insert(task_id, duration, dependencies)
        return self

    def add_entry(self, line):
        """Add a task from an input line such as ``"D 3 A,B"``"""
        record = parse_record(line)
        return self.add_task(record.id, record.duration, record.dependencies)

    def load(self, lines):
        """
        Add a task for every non-blank input line, in order.

        The first bad line stops loading; its error message carries the
        line number.
        """
        for lineno, record in iter_records(lines):
            try:
                self.add_task(record.id, record.duration, record.dependencies)
            except TaskError as e:
                tag_line_number(e, lineno)
                raise
        return self

    def build_dependency_graph(self):
        """
        Attach the START and END anchors to the task graph.

        Both anchor IDs are checked before either anchor is added, so a
        collision leaves the graph untouched.
        """
        self._check_not_anchored()
        for anchor_id in (self.start_id, self.end_id):
            if anchor_id in self.tasks:
                raise DuplicateIdError(anchor_id)
        add_start(self.registry)
        add_end(self.registry)
        return self.registry

    def calculate_baseline_schedule(self):
        """Calculate the baseline schedule (early/late start/finish) and critical path"""
        # Calculate early start/finish
        self.schedule_order = forward_pass(self.registry)

        # Calculate late start/finish
        backward_pass(self.registry)

        self.critical_path = find_critical_path(self.registry)
        self.is_scheduled = True

        return self.tasks

    def schedule(self):
        """
        Run the complete scheduling algorithm.

        Returns:
            dict: The tasks, the critical path and the project duration
        """
        self.build_dependency_graph()
        self.calculate_baseline_schedule()

        logger.info(
            "Scheduled %d task(s): duration %d, critical path %s",
            len(self.registry.real_tasks()),
            self.project_duration,
            " -> ".join(self.critical_path),
        )

        return {
            "tasks": self.tasks,
            "critical_path": self.critical_path,
            "project_duration": self.project_duration,
        }

    def reset_schedule(self):
        """
        Clear the calculated times, keeping tasks, edges and anchors.

        Call calculate_baseline_schedule() to run the passes again.
        """
        self.registry.reset_schedule()
        self.critical_path = []
        self.schedule_order = []
        self.is_scheduled = False
        self.task_graph = None
        return self

    @property
    def project_duration(self):
        end = self.registry.get(self.end_id)
        if end is None or not end.is_scheduled:
            return None
        return end.late_finish

    def get_slack(self, task_id):
        """Return the total float of a task, or None before scheduling"""
        if task_id not in self.tasks:
            raise ValueError(f"Task {task_id} not found in the project")
        return self.tasks[task_id].slack

    def rows(self):
        """(ID, ES, EF, LS, LF) for every task, anchors included, in schedule order."""
        if not self.is_scheduled:
            raise ScheduleInvariantError(
                "The schedule must be calculated before rows() is called"
            )
        return [self.tasks[task_id].to_row() for task_id in self.schedule_order]

    def get_task_graph(self):
        """Return the schedule as a networkx DiGraph, building it if needed."""
        if self.task_graph is None:
            self.task_graph = to_networkx(self.registry)
        return self.task_graph
