# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Workflow template and instance models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

import pandas as pd
from pydantic import Field

from ..core.primitives import Model, RecordTypeEnum, TaskStatusEnum


class TemplateTask(Model):
    """A task definition within a workflow template."""

    id: str
    name: str
    description: Optional[str] = None
    phase: Optional[str] = None
    assigned_role: str
    due_days: int = Field(default=0, ge=0)
    is_gate: bool = False
    depends_on: Optional[str] = None
    sort_order: int = 0


class WorkflowTemplate(Model):
    """
    A workflow launched when a record's status changes.

    ``project_type`` is a snake-case project type code (``scattered_lot``)
    or ``all``; ``None`` applies to every project type.
    """

    id: str
    name: str
    trigger_table: str
    trigger_value: str
    is_active: bool = True
    project_type: Optional[str] = None
    tasks: List[TemplateTask] = Field(default_factory=list)

    @property
    def ordered_tasks(self) -> List[TemplateTask]:
        return sorted(self.tasks, key=lambda t: t.sort_order)


class StatusChange(Model):
    """A record status transition that may trigger workflows."""

    table_name: str
    record_id: str
    new_status: str
    old_status: Optional[str] = None
    project_type: Optional[str] = None
    project_id: Optional[str] = None
    entity_id: Optional[str] = None
    trigger_date: datetime = Field(default_factory=datetime.now)


class TaskInstance(Model):
    template_task_id: str
    name: str
    description: Optional[str] = None
    phase: Optional[str] = None
    status: TaskStatusEnum
    assigned_to: Optional[str] = None
    assigned_role: str
    due_date: datetime
    is_gate: bool = False
    sort_order: int = 0


class WorkflowInstance(Model):
    """A launched workflow and its tasks for one record."""

    id: UUID = Field(default_factory=uuid4)
    template_id: str
    name: str
    record_type: RecordTypeEnum
    record_id: str
    project_id: Optional[str] = None
    entity_id: Optional[str] = None
    trigger_date: datetime
    tasks: List[TaskInstance] = Field(default_factory=list)

    @property
    def progress_pct(self) -> float:
        return compute_progress(self.tasks)

    def tasks_df(self) -> pd.DataFrame:
        """Task instances as a DataFrame in sort order."""
        return pd.DataFrame([t.model_dump(mode="json") for t in self.tasks])


def compute_progress(tasks: List[TaskInstance]) -> float:
    """Percentage (0-100) of tasks completed; 0 for an empty workflow."""
    if not tasks:
        return 0.0
    completed = sum(1 for t in tasks if t.status == TaskStatusEnum.COMPLETED)
    return round(100 * completed / len(tasks), 1)
