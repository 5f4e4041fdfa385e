class PDMError(Exception):
    """Base class for all errors raised by the PDM scheduler."""

    pass


class TaskError(PDMError):
    """Exception raised for invalid task data supplied by the caller."""

    pass


class DuplicateIdError(TaskError):
    """Raised when a task identifier is already present in the registry."""

    def __init__(self, task_id):
        self.task_id = task_id
        super().__init__(f"Duplicate task ID: {task_id!r}")


class InvalidDurationError(TaskError):
    """Raised when a duration is not a non-negative integer."""

    def __init__(self, duration, task_id=None):
        self.duration = duration
        self.task_id = task_id
        if task_id is None:
            message = f"Duration must be a non-negative integer, got {duration!r}"
        else:
            message = (
                f"Duration of task {task_id!r} must be a non-negative integer, "
                f"got {duration!r}"
            )
        super().__init__(message)


class UnknownDependencyError(TaskError):
    """Raised when a dependency refers to a task that has not been added yet."""

    def __init__(self, task_id, dependency_id):
        self.task_id = task_id
        self.dependency_id = dependency_id
        super().__init__(
            f"Task {task_id!r} depends on unknown task {dependency_id!r}"
        )


class MalformedRecordError(TaskError):
    """Raised when an input record is missing required fields."""

    pass


class ScheduleInvariantError(PDMError):
    """
    Raised when propagation finds the graph in a state that valid input
    can never produce, or when the scheduling steps are run out of order.

    This is not a TaskError: it signals a defect, not bad input.
    """

    pass
