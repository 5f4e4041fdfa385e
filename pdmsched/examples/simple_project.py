from pdmsched.services.report import format_report
from pdmsched.services.scheduler import PDMScheduler
from pdmsched.visualization.gantt import create_gantt_chart

SAMPLE_TASKS = [
    "A 2",
    "B 3",
    "C 2",
    "D 3 A",
    "E 2 B,C",
    "F 1 A,B",
    "G 4 A",
    "H 5 C",
    "I 3 D,F",
    "J 3 E,G",
    "K 2 I",
    "L 2 K",
]


def create_sample_project(chart_filename=None, show=False):
    # Create the scheduler and load the tasks
    scheduler = PDMScheduler()
    scheduler.load(SAMPLE_TASKS)

    # Run the scheduling algorithm
    scheduler.schedule()

    # Create visualization
    if chart_filename:
        create_gantt_chart(scheduler, chart_filename, show=show)

    return scheduler


if __name__ == "__main__":
    scheduler = create_sample_project("pdm_gantt_example.png")
    print("PDM Project Schedule Report")
    print("===========================")
    print(f"Project Duration: {scheduler.project_duration}")
    print()
    print(format_report(scheduler))
