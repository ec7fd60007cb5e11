# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Workflow Engine

Turns a record status change into workflow instances:

1. Match active templates on trigger table and trigger value
2. Keep templates compatible with the record's project type
3. Resolve each task's assignee from the role assignments of the record team
4. Create task instances with their initial status and due date

Tasks start ``blocked`` when they depend on another task or sit behind a
gate task; otherwise they start ``active``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..core.primitives import RecordTypeEnum, TaskStatusEnum
from .models import (
    StatusChange,
    TaskInstance,
    TemplateTask,
    WorkflowInstance,
    WorkflowTemplate,
)

logger = logging.getLogger(__name__)

TABLE_TO_RECORD_TYPE: Dict[str, RecordTypeEnum] = {
    "opportunities": RecordTypeEnum.OPPORTUNITY,
    "projects": RecordTypeEnum.PROJECT,
    "jobs": RecordTypeEnum.JOB,
    "dispositions": RecordTypeEnum.DISPOSITION,
}

# Role codes matched against team and profile names by substring
ROLE_PATTERNS: Dict[str, List[str]] = {
    "pm": ["project manag", "pm"],
    "acq_mgr": ["acquisition", "acq"],
    "director": ["director"],
    "principal": ["principal", "executive", "owner"],
    "closing_coordinator": ["closing", "title", "coordinator"],
}

ALL_PROJECT_TYPES = "all"

_SEPARATOR_PATTERN = re.compile(r"[\s-]+")


def record_type_for_table(table_name: str) -> RecordTypeEnum:
    """Map a triggering table to its record type; unsupported tables raise ValueError."""
    try:
        return TABLE_TO_RECORD_TYPE[table_name]
    except KeyError:
        raise ValueError(f"Unsupported table: {table_name}") from None


def normalize_project_type(raw: Optional[str]) -> str:
    """``"Scattered Lot"`` -> ``"scattered_lot"``; ``None`` -> ``""``."""
    if not raw:
        return ""
    return _SEPARATOR_PATTERN.sub("_", raw.lower())


def is_project_type_compatible(template: WorkflowTemplate, project_type: Optional[str]) -> bool:
    if not template.project_type or template.project_type == ALL_PROJECT_TYPES:
        return True
    return template.project_type == normalize_project_type(project_type)


def resolve_task_status(task: TemplateTask, all_tasks: Iterable[TemplateTask]) -> TaskStatusEnum:
    if task.depends_on:
        return TaskStatusEnum.BLOCKED
    if any(t.is_gate and t.sort_order < task.sort_order for t in all_tasks):
        return TaskStatusEnum.BLOCKED
    return TaskStatusEnum.ACTIVE


def resolve_role_assignments(
    members: Iterable[Tuple[str, str]],
    patterns: Mapping[str, List[str]] = ROLE_PATTERNS,
) -> Dict[str, str]:
    """
    Map role codes to user ids.

    Args:
        members: ``(user_id, role_or_team_name)`` pairs in priority order
        patterns: Role code to name fragments

    Returns:
        Role code -> user id; the first matching member wins each role
    """
    assignments: Dict[str, str] = {}
    for user_id, name in members:
        lowered = (name or "").lower()
        for role_code, fragments in patterns.items():
            if role_code in assignments:
                continue
            if any(fragment in lowered for fragment in fragments):
                assignments[role_code] = user_id
    return assignments


@dataclass
class WorkflowEngine:
    """
    Instantiates workflow templates for record status changes.

    Attributes:
        templates: All known workflow templates (active and inactive)
    """

    templates: List[WorkflowTemplate] = field(default_factory=list)

    def matching_templates(self, event: StatusChange) -> List[WorkflowTemplate]:
        """Active, project-type compatible templates triggered by ``event``."""
        triggered = [
            t
            for t in self.templates
            if t.is_active
            and t.trigger_table == event.table_name
            and t.trigger_value == event.new_status
        ]
        compatible = [t for t in triggered if is_project_type_compatible(t, event.project_type)]
        if triggered and not compatible:
            logger.debug(
                f"{len(triggered)} template(s) triggered by {event.table_name}."
                f"{event.new_status} but none match project type {event.project_type!r}"
            )
        return compatible

    def instantiate(
        self,
        event: StatusChange,
        role_assignments: Optional[Mapping[str, str]] = None,
    ) -> List[WorkflowInstance]:
        """
        Create workflow instances for a status change.

        Args:
            event: The status transition
            role_assignments: Role code -> user id (see ``resolve_role_assignments``)

        Returns:
            One instance per matching template that defines tasks

        Raises:
            ValueError: If the triggering table is not supported
        """
        record_type = record_type_for_table(event.table_name)
        role_assignments = role_assignments or {}

        instances = []
        for template in self.matching_templates(event):
            template_tasks = template.ordered_tasks
            if not template_tasks:
                logger.warning(f"Workflow template {template.name!r} has no tasks; skipping")
                continue
            tasks = [
                TaskInstance(
                    template_task_id=task.id,
                    name=task.name,
                    description=task.description,
                    phase=task.phase,
                    status=resolve_task_status(task, template_tasks),
                    assigned_to=role_assignments.get(task.assigned_role),
                    assigned_role=task.assigned_role,
                    due_date=event.trigger_date + timedelta(days=task.due_days),
                    is_gate=task.is_gate,
                    sort_order=task.sort_order,
                )
                for task in template_tasks
            ]
            instances.append(
                WorkflowInstance(
                    template_id=template.id,
                    name=template.name,
                    record_type=record_type,
                    record_id=event.record_id,
                    project_id=event.project_id,
                    entity_id=event.entity_id,
                    trigger_date=event.trigger_date,
                    tasks=tasks,
                )
            )

        logger.info(
            f"Created {len(instances)} workflow instance(s) for "
            f"{record_type.value} {event.record_id}"
        )
        return instances
