import logging
from collections import deque
from enum import Enum
from operator import attrgetter

import networkx as nx

from pdmsched.domain.errors import ScheduleInvariantError

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Which way a propagation pass walks the graph."""

    FORWARD = "forward"
    BACKWARD = "backward"


def add_start(registry):
    """
    Create the START anchor and make it the predecessor of every root task.

    Must run once, after all real tasks have been inserted.
    """
    roots = [task for task in registry if not task.predecessors]
    start = registry.add_anchor(registry.start_id)
    for task in roots:
        registry.link(start.id, task.id)
    logger.debug("Added %s before %d root task(s)", start.id, len(roots))
    return start


def add_end(registry):
    """Create the END anchor and make it the successor of every leaf task."""
    leaves = [task for task in registry if not task.successors]
    end = registry.add_anchor(registry.end_id)
    for task in leaves:
        registry.link(task.id, end.id)
    logger.debug("Added %s after %d leaf task(s)", end.id, len(leaves))
    return end


def _check_anchors(registry):
    if not (registry.has_start and registry.has_end):
        raise ScheduleInvariantError(
            "START and END anchors must be added before propagation"
        )


def _resolve_forward(registry, task):
    finishes = [registry[p].early_finish for p in task.predecessors]
    task.early_start = max(finishes, default=0)
    task.early_finish = task.early_start + task.duration


def _resolve_backward(registry, task):
    if task.id == registry.end_id:
        # Latest completion is the computed makespan, not a deadline
        task.early_finish = task.early_start
        task.late_start = task.early_start
        task.late_finish = task.early_start
        return

    starts = [registry[s].late_start for s in task.successors]
    if not starts or any(s is None for s in starts):
        raise ScheduleInvariantError(
            f"Task {task.id!r} reached before its successors were resolved"
        )
    late_finish = min(starts)
    late_start = late_finish - task.duration
    if late_start < 0:
        raise ScheduleInvariantError(
            f"Task {task.id!r} has duration {task.duration} but latest finish "
            f"{late_finish}; the graph is not wired correctly"
        )
    task.late_finish = late_finish
    task.late_start = late_start


def propagate(registry, direction):
    """
    Breadth-first pass over the registry in the given direction.

    The forward pass starts at START and sets earliest times; the backward
    pass starts at END and sets latest times. A task is queued only once all
    the tasks it depends on in that direction are resolved, so every task is
    processed exactly once.

    Args:
        registry: TaskRegistry with START and END anchors
        direction: Direction.FORWARD or Direction.BACKWARD

    Returns:
        list: Task IDs in the order they were resolved

    Raises:
        ScheduleInvariantError: If anchors are missing or some task could
            not be reached (a cycle or broken wiring)
    """
    _check_anchors(registry)

    if direction is Direction.FORWARD:
        seed = registry.start_id
        upstream = attrgetter("predecessors")
        downstream = attrgetter("successors")
        resolve = _resolve_forward
    else:
        seed = registry.end_id
        upstream = attrgetter("successors")
        downstream = attrgetter("predecessors")
        resolve = _resolve_backward

    pending = {task.id: len(upstream(task)) for task in registry}
    if pending[seed] != 0:
        raise ScheduleInvariantError(
            f"Anchor {seed!r} must not have incoming edges for a {direction.value} pass"
        )

    order = []
    worklist = deque([seed])
    while worklist:
        task = registry[worklist.popleft()]
        resolve(registry, task)
        order.append(task.id)
        for next_id in downstream(task):
            pending[next_id] -= 1
            if pending[next_id] == 0:
                worklist.append(next_id)

    if len(order) != len(registry):
        unresolved = sorted(set(pending) - set(order))
        raise ScheduleInvariantError(
            f"{direction.value.capitalize()} pass could not resolve tasks "
            f"{unresolved}; the dependency graph has a cycle or broken anchors"
        )

    logger.debug("%s pass resolved %d task(s)", direction.value, len(order))
    return order


def forward_pass(registry):
    """Calculate early start and early finish times"""
    order = propagate(registry, Direction.FORWARD)
    for index, task_id in enumerate(order):
        registry[task_id].topological_index = index
    return order


def backward_pass(registry):
    """Calculate late start and late finish times"""
    return propagate(registry, Direction.BACKWARD)


def find_critical_path(registry):
    """
    Return the IDs of the zero-slack tasks ordered by earliest start.

    Ties on earliest start keep the order the forward pass resolved the
    tasks in, so START comes first, END comes last, and the result only
    depends on the insertion order of the input.
    """
    tasks = list(registry)
    if any(not task.is_scheduled or task.topological_index is None for task in tasks):
        raise ScheduleInvariantError(
            "Both propagation passes must run before extracting the critical path"
        )
    critical = [task for task in tasks if task.is_critical]
    critical.sort(key=lambda task: (task.early_start, task.topological_index))
    return [task.id for task in critical]


def to_networkx(registry):
    """Build a networkx DiGraph carrying each task's schedule as node attributes."""
    G = nx.DiGraph()

    for task in registry:
        G.add_node(
            task.id,
            duration=task.duration,
            early_start=task.early_start,
            early_finish=task.early_finish,
            late_start=task.late_start,
            late_finish=task.late_finish,
            is_anchor=task.is_anchor,
            is_critical=task.is_critical,
        )

    for task in registry:
        for succ_id in task.successors:
            G.add_edge(task.id, succ_id)

    return G
