# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tests for workflow template matching and instantiation.
"""

from datetime import datetime

import pytest

from proforma.core.primitives import RecordTypeEnum, TaskStatusEnum
from proforma.workflow import (
    StatusChange,
    TemplateTask,
    WorkflowEngine,
    WorkflowTemplate,
    compute_progress,
    normalize_project_type,
    record_type_for_table,
    resolve_role_assignments,
    resolve_task_status,
)

TRIGGER_DATE = datetime(2026, 3, 2, 9, 0)


@pytest.fixture
def closing_tasks():
    return [
        TemplateTask(
            id="t1", name="Order title", assigned_role="closing_coordinator",
            due_days=3, sort_order=1,
        ),
        TemplateTask(
            id="t2", name="Schedule survey", assigned_role="pm", due_days=5, sort_order=2
        ),
        TemplateTask(
            id="t3", name="Principal approval", assigned_role="principal",
            is_gate=True, due_days=7, sort_order=3,
        ),
        TemplateTask(
            id="t4", name="Fund closing", assigned_role="acq_mgr", due_days=14, sort_order=4
        ),
        TemplateTask(
            id="t5", name="Record deed", assigned_role="closing_coordinator",
            depends_on="t4", due_days=21, sort_order=5,
        ),
    ]


@pytest.fixture
def engine(closing_tasks):
    return WorkflowEngine(
        templates=[
            WorkflowTemplate(
                id="wf-closing",
                name="Lot Closing",
                trigger_table="opportunities",
                trigger_value="Under Contract",
                project_type="scattered_lot",
                tasks=closing_tasks,
            ),
            WorkflowTemplate(
                id="wf-kickoff",
                name="Deal Kickoff",
                trigger_table="opportunities",
                trigger_value="Under Contract",
                project_type="all",
                tasks=closing_tasks[:2],
            ),
            WorkflowTemplate(
                id="wf-retired",
                name="Old Closing",
                trigger_table="opportunities",
                trigger_value="Under Contract",
                is_active=False,
                tasks=closing_tasks,
            ),
            WorkflowTemplate(
                id="wf-empty",
                name="Placeholder",
                trigger_table="opportunities",
                trigger_value="Under Contract",
                tasks=[],
            ),
        ]
    )


def status_change(**overrides) -> StatusChange:
    values = dict(
        table_name="opportunities",
        record_id="opp-42",
        new_status="Under Contract",
        project_type="Scattered Lot",
        trigger_date=TRIGGER_DATE,
    )
    values.update(overrides)
    return StatusChange(**values)


class TestTemplateMatching:
    def test_active_compatible_templates(self, engine):
        names = [t.name for t in engine.matching_templates(status_change())]
        assert names == ["Lot Closing", "Deal Kickoff", "Placeholder"]

    def test_project_type_filter(self, engine):
        names = [
            t.name
            for t in engine.matching_templates(status_change(project_type="Lot Purchase"))
        ]
        assert "Lot Closing" not in names
        assert "Deal Kickoff" in names

    def test_trigger_value_must_match(self, engine):
        assert engine.matching_templates(status_change(new_status="Closed")) == []

    def test_normalize_project_type(self):
        assert normalize_project_type("Community Development") == "community_development"
        assert normalize_project_type("lot-purchase") == "lot_purchase"
        assert normalize_project_type(None) == ""


class TestInstantiation:
    def test_one_instance_per_template_with_tasks(self, engine):
        instances = engine.instantiate(status_change())
        assert [i.name for i in instances] == ["Lot Closing", "Deal Kickoff"]
        assert instances[0].record_type == RecordTypeEnum.OPPORTUNITY
        assert instances[0].record_id == "opp-42"

    def test_task_status(self, engine):
        tasks = engine.instantiate(status_change())[0].tasks
        statuses = {t.name: t.status for t in tasks}
        assert statuses["Order title"] == TaskStatusEnum.ACTIVE
        assert statuses["Schedule survey"] == TaskStatusEnum.ACTIVE
        assert statuses["Principal approval"] == TaskStatusEnum.ACTIVE
        assert statuses["Fund closing"] == TaskStatusEnum.BLOCKED
        assert statuses["Record deed"] == TaskStatusEnum.BLOCKED

    def test_due_dates(self, engine):
        tasks = engine.instantiate(status_change())[0].tasks
        assert tasks[0].due_date == datetime(2026, 3, 5, 9, 0)
        assert tasks[-1].due_date == datetime(2026, 3, 23, 9, 0)

    def test_assignees(self, engine):
        roles = {"pm": "user-pm", "principal": "user-ceo"}
        tasks = engine.instantiate(status_change(), role_assignments=roles)[0].tasks
        assignees = {t.name: t.assigned_to for t in tasks}
        assert assignees["Schedule survey"] == "user-pm"
        assert assignees["Principal approval"] == "user-ceo"
        assert assignees["Order title"] is None

    def test_unsupported_table(self, engine):
        with pytest.raises(ValueError, match="Unsupported table: invoices"):
            engine.instantiate(status_change(table_name="invoices"))

    def test_progress_starts_at_zero(self, engine):
        instance = engine.instantiate(status_change())[0]
        assert instance.progress_pct == 0
        assert len(instance.tasks_df()) == 5


class TestHelpers:
    @pytest.mark.parametrize(
        "table, record_type",
        [
            ("opportunities", RecordTypeEnum.OPPORTUNITY),
            ("projects", RecordTypeEnum.PROJECT),
            ("jobs", RecordTypeEnum.JOB),
            ("dispositions", RecordTypeEnum.DISPOSITION),
        ],
    )
    def test_record_type_for_table(self, table, record_type):
        assert record_type_for_table(table) == record_type

    def test_task_behind_gate_is_blocked(self, closing_tasks):
        assert resolve_task_status(closing_tasks[3], closing_tasks) == TaskStatusEnum.BLOCKED
        assert resolve_task_status(closing_tasks[2], closing_tasks) == TaskStatusEnum.ACTIVE

    def test_role_assignments_first_match_wins(self):
        members = [
            ("u1", "Senior Project Manager"),
            ("u2", "Acquisitions"),
            ("u3", "Owner"),
            ("u4", "Project Management Team"),
            ("u5", "Title & Closing"),
        ]
        assignments = resolve_role_assignments(members)
        assert assignments == {
            "pm": "u1",
            "acq_mgr": "u2",
            "principal": "u3",
            "closing_coordinator": "u5",
        }

    def test_progress(self, engine):
        tasks = engine.instantiate(status_change())[0].tasks
        done = [t.model_copy(update={"status": TaskStatusEnum.COMPLETED}) for t in tasks[:2]]
        assert compute_progress(done + tasks[2:]) == 40.0
        assert compute_progress([]) == 0.0
