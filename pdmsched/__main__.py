"""
PDM Scheduler
=============

Reads one task per line ("ID DURATION [DEP,DEP,...]"), prints the early and
late start/finish of every task and the critical path.
"""

import argparse
import logging
import sys

from pdmsched.domain.errors import TaskError
from pdmsched.domain.registry import END_ID, START_ID
from pdmsched.services.report import format_report
from pdmsched.services.scheduler import PDMScheduler
from pdmsched.visualization.gantt import create_gantt_chart
from pdmsched.visualization.network import create_network_diagram

logger = logging.getLogger("pdmsched")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pdmsched", description="Critical path schedule of a task list"
    )
    parser.add_argument("filename", help="Task file, one task per line")
    parser.add_argument(
        "--start-id", default=START_ID, help="ID of the synthetic start task"
    )
    parser.add_argument(
        "--end-id", default=END_ID, help="ID of the synthetic end task"
    )
    parser.add_argument(
        "--network", metavar="PNG", help="Save a network diagram to this file"
    )
    parser.add_argument("--gantt", metavar="PNG", help="Save a Gantt chart to this file")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        scheduler = PDMScheduler(start_id=args.start_id, end_id=args.end_id)
        with open(args.filename, encoding="utf-8") as f:
            scheduler.load(f)
        scheduler.schedule()
    except OSError as e:
        print(f"error: cannot read {args.filename}: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"error: {args.filename} is not valid UTF-8: {e}", file=sys.stderr)
        return 1
    except TaskError as e:
        logger.debug("Invalid input", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(format_report(scheduler))

    if args.network:
        create_network_diagram(scheduler, filename=args.network, show=False)
    if args.gantt:
        create_gantt_chart(scheduler, filename=args.gantt, show=False)

    return 0


if __name__ == "__main__":
    sys.exit(main())
