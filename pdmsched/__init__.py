"""
PDM Scheduler Package
=====================

Critical Path Method / Precedence Diagramming Method scheduling.

Available modules:
- domain: tasks, the task registry and the error hierarchy
- utils.graph: anchor injection, forward/backward propagation, critical path
- utils.parsing: input line parsing
- services.scheduler: the PDMScheduler facade
- services.report: text report
- visualization: network diagram and Gantt chart
"""

from pdmsched.domain.errors import (
    PDMError,
    TaskError,
    DuplicateIdError,
    InvalidDurationError,
    UnknownDependencyError,
    MalformedRecordError,
    ScheduleInvariantError,
)
from pdmsched.domain.registry import TaskRegistry, START_ID, END_ID
from pdmsched.domain.task import Task
from pdmsched.services.scheduler import PDMScheduler
from pdmsched.services.report import format_report
from pdmsched.visualization.gantt import create_gantt_chart
from pdmsched.visualization.network import create_network_diagram

__all__ = [
    "PDMError",
    "TaskError",
    "DuplicateIdError",
    "InvalidDurationError",
    "UnknownDependencyError",
    "MalformedRecordError",
    "ScheduleInvariantError",
    "TaskRegistry",
    "START_ID",
    "END_ID",
    "Task",
    "PDMScheduler",
    "format_report",
    "create_gantt_chart",
    "create_network_diagram",
]
