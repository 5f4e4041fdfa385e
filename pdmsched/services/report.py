HEADER = "Node,ES,EF,LS,LF"


def format_table(rows):
    """Format (ID, ES, EF, LS, LF) rows as CSV lines under a header."""
    lines = [HEADER]
    for task_id, es, ef, ls, lf in rows:
        lines.append(f"{task_id},{es},{ef},{ls},{lf}")
    return "\n".join(lines)


def format_critical_path(critical_path):
    return "Critical Path: " + ",".join(critical_path)


def format_report(scheduler):
    """
    Generate the text report of a scheduled project.

    Args:
        scheduler: A PDMScheduler on which schedule() has been called

    Returns:
        str: The task table, a blank line and the critical path
    """
    report = []
    report.append(format_table(scheduler.rows()))
    report.append("")
    report.append(format_critical_path(scheduler.critical_path))
    return "\n".join(report)
