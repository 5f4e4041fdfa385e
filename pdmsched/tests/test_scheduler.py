import unittest

from pdmsched.domain.errors import (
    DuplicateIdError,
    MalformedRecordError,
    ScheduleInvariantError,
    UnknownDependencyError,
)
from pdmsched.domain.registry import END_ID, START_ID
from pdmsched.examples.simple_project import SAMPLE_TASKS, create_sample_project
from pdmsched.services.report import format_critical_path, format_report, format_table
from pdmsched.services.scheduler import PDMScheduler


class PDMSchedulerTestCase(unittest.TestCase):
    def setUp(self):
        self.scheduler = PDMScheduler()
        self.scheduler.load(SAMPLE_TASKS)

    def test_basic_scheduling(self):
        """Test that the basic scheduling workflow works end-to-end"""
        result = self.scheduler.schedule()

        self.assertIn("tasks", result)
        self.assertIn("critical_path", result)
        self.assertEqual(result["project_duration"], 12)
        self.assertEqual(
            result["critical_path"], [START_ID, "A", "D", "I", "K", "L", END_ID]
        )
        self.assertEqual(len(result["tasks"]), len(SAMPLE_TASKS) + 2)

        for task in self.scheduler.tasks.values():
            self.assertTrue(task.is_scheduled)

    def test_slack(self):
        self.assertIsNone(self.scheduler.get_slack("B"))
        self.scheduler.schedule()
        self.assertEqual(self.scheduler.get_slack("A"), 0)
        self.assertEqual(self.scheduler.get_slack("B"), 1)
        self.assertEqual(self.scheduler.get_slack("H"), 5)
        with self.assertRaises(ValueError):
            self.scheduler.get_slack("nope")

    def test_rows(self):
        with self.assertRaises(ScheduleInvariantError):
            self.scheduler.rows()

        self.scheduler.schedule()
        rows = self.scheduler.rows()
        self.assertEqual(len(rows), len(SAMPLE_TASKS) + 2)
        self.assertEqual(rows[0], (START_ID, 0, 0, 0, 0))
        self.assertEqual(rows[-1], (END_ID, 12, 12, 12, 12))
        self.assertIn(("H", 2, 7, 7, 12), rows)

    def test_cannot_add_after_schedule(self):
        self.scheduler.schedule()
        with self.assertRaises(ScheduleInvariantError):
            self.scheduler.add_task("Z", 1)
        with self.assertRaises(ScheduleInvariantError):
            self.scheduler.schedule()

    def test_recalculate_is_idempotent(self):
        self.scheduler.schedule()
        before = self.scheduler.rows()
        path = list(self.scheduler.critical_path)

        self.scheduler.reset_schedule()
        self.assertIsNone(self.scheduler.project_duration)
        self.assertEqual(self.scheduler.critical_path, [])
        with self.assertRaises(ScheduleInvariantError):
            self.scheduler.rows()

        self.scheduler.calculate_baseline_schedule()

        self.assertEqual(self.scheduler.rows(), before)
        self.assertEqual(self.scheduler.project_duration, 12)
        self.assertEqual(self.scheduler.critical_path, path)
        self.assertTrue(
            format_report(self.scheduler).endswith("Critical Path: START,A,D,I,K,L,END")
        )

    def test_reset_keeps_graph_closed(self):
        self.scheduler.schedule()
        self.scheduler.reset_schedule()
        with self.assertRaises(ScheduleInvariantError):
            self.scheduler.add_task("Z", 1)
        with self.assertRaises(ScheduleInvariantError):
            self.scheduler.schedule()

    def test_task_graph(self):
        self.scheduler.schedule()
        G = self.scheduler.get_task_graph()
        self.assertIs(G, self.scheduler.get_task_graph())
        self.assertEqual(G.number_of_nodes(), len(SAMPLE_TASKS) + 2)


class PDMSchedulerInputTestCase(unittest.TestCase):
    def test_single_task(self):
        scheduler = PDMScheduler().add_task("A", 2)
        scheduler.schedule()
        self.assertEqual(scheduler.critical_path, [START_ID, "A", END_ID])
        self.assertEqual(scheduler.project_duration, 2)

    def test_empty_project(self):
        scheduler = PDMScheduler()
        scheduler.schedule()
        self.assertEqual(scheduler.critical_path, [START_ID, END_ID])
        self.assertEqual(scheduler.project_duration, 0)

    def test_load_reports_line_number(self):
        scheduler = PDMScheduler()
        with self.assertRaises(UnknownDependencyError) as ctx:
            scheduler.load(["A 2", "# comment", "B 1 C"])
        self.assertEqual(ctx.exception.lineno, 3)
        self.assertIn("line 3", str(ctx.exception))

        with self.assertRaises(DuplicateIdError):
            scheduler.load(["A 4"])
        self.assertEqual(scheduler.tasks["A"].duration, 2)

    def test_add_entry(self):
        scheduler = PDMScheduler()
        scheduler.add_entry("A 2")
        scheduler.add_entry("B 1 A")
        self.assertEqual(scheduler.tasks["B"].predecessors, ["A"])
        with self.assertRaises(MalformedRecordError):
            scheduler.add_entry("C")

    def test_anchor_collision(self):
        scheduler = PDMScheduler().add_task(START_ID, 1)
        with self.assertRaises(DuplicateIdError):
            scheduler.schedule()

    def test_end_collision_leaves_graph_untouched(self):
        scheduler = PDMScheduler().add_task("A", 2).add_task(END_ID, 1, ["A"])
        with self.assertRaises(DuplicateIdError) as ctx:
            scheduler.schedule()
        self.assertEqual(ctx.exception.task_id, END_ID)
        self.assertNotIn(START_ID, scheduler.tasks)
        self.assertEqual(scheduler.tasks["A"].predecessors, [])
        self.assertFalse(scheduler.is_anchored)

        # A second attempt reports the same collision
        with self.assertRaises(DuplicateIdError) as ctx:
            scheduler.schedule()
        self.assertEqual(ctx.exception.task_id, END_ID)

    def test_custom_anchor_ids(self):
        scheduler = PDMScheduler(start_id="begin", end_id="finish")
        scheduler.add_task("START", 1).add_task("END", 2, ["START"])
        scheduler.schedule()
        self.assertEqual(scheduler.critical_path, ["begin", "START", "END", "finish"])
        self.assertEqual(scheduler.project_duration, 3)


class ReportTestCase(unittest.TestCase):
    def test_format_table(self):
        text = format_table([("START", 0, 0, 0, 0), ("A", 0, 2, 0, 2)])
        self.assertEqual(text, "Node,ES,EF,LS,LF\nSTART,0,0,0,0\nA,0,2,0,2")

    def test_format_critical_path(self):
        self.assertEqual(
            format_critical_path(["START", "A", "END"]),
            "Critical Path: START,A,END",
        )

    def test_format_report(self):
        scheduler = create_sample_project()
        lines = format_report(scheduler).splitlines()
        self.assertEqual(lines[0], "Node,ES,EF,LS,LF")
        self.assertEqual(lines[1], "START,0,0,0,0")
        self.assertIn("I,5,8,5,8", lines)
        self.assertEqual(lines[-2], "")
        self.assertEqual(lines[-1], "Critical Path: START,A,D,I,K,L,END")


if __name__ == "__main__":
    unittest.main()
