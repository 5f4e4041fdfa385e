import logging

import matplotlib.pyplot as plt
from matplotlib.patches import Patch

logger = logging.getLogger(__name__)


def create_gantt_chart(scheduler, filename=None, show=True, include_anchors=False):
    """
    Create a Gantt chart visualization of the schedule.

    Each task is drawn from its early start to its early finish. Slack is
    drawn as a hatched bar from early finish to late finish.

    Args:
        scheduler: A PDMScheduler on which schedule() has been called
        filename: Optional filename to save the chart
        show: Whether to display the chart (default: True)
        include_anchors: Whether to draw the START and END milestones

    Returns:
        The matplotlib figure
    """
    tasks = scheduler.tasks
    critical_path = scheduler.critical_path

    # Tasks in schedule order, first task at the top
    sorted_tasks = [tasks[task_id] for task_id in scheduler.schedule_order]
    if not include_anchors:
        sorted_tasks = [task for task in sorted_tasks if not task.is_anchor]

    fig, ax_gantt = plt.subplots(figsize=(14, max(3, 0.5 * len(sorted_tasks) + 2)))

    for i, task in enumerate(sorted_tasks):
        color = "red" if task.id in critical_path else "blue"

        if task.duration == 0:
            # Milestone
            ax_gantt.plot(task.early_start, i, marker="D", color=color, markersize=8)
        else:
            ax_gantt.barh(
                i,
                task.duration,
                left=task.early_start,
                color=color,
                alpha=0.8,
                edgecolor="black",
            )

        slack = task.slack or 0
        if slack > 0:
            ax_gantt.barh(
                i,
                slack,
                left=task.early_finish,
                color="white",
                edgecolor="gray",
                hatch="//",
                alpha=0.6,
            )
            ax_gantt.text(
                task.early_finish + slack / 2,
                i,
                f"{slack}",
                ha="center",
                va="center",
                fontsize=8,
            )

    ax_gantt.set_yticks(range(len(sorted_tasks)))
    ax_gantt.set_yticklabels([task.id for task in sorted_tasks])
    ax_gantt.invert_yaxis()

    project_duration = scheduler.project_duration or 0
    ax_gantt.axvline(x=project_duration, color="black", linestyle="--", linewidth=1)
    ax_gantt.set_xlim(0, max(project_duration, 1) + 1)
    ax_gantt.set_xlabel("Time")
    ax_gantt.set_title("Project Schedule", fontsize=14)
    ax_gantt.grid(axis="x", linestyle=":", alpha=0.5)

    legend_elements = [
        Patch(facecolor="red", alpha=0.8, label="Critical Task"),
        Patch(facecolor="blue", alpha=0.8, label="Non-Critical Task"),
        Patch(facecolor="white", edgecolor="gray", hatch="//", label="Slack"),
    ]
    ax_gantt.legend(handles=legend_elements, loc="upper right")

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=300, bbox_inches="tight")
        logger.info("Gantt chart saved to %s", filename)

    if show:
        plt.show()

    return fig
