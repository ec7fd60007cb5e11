# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Workflow templates launched by record status changes.
"""

from .engine import (
    ROLE_PATTERNS,
    TABLE_TO_RECORD_TYPE,
    WorkflowEngine,
    is_project_type_compatible,
    normalize_project_type,
    record_type_for_table,
    resolve_role_assignments,
    resolve_task_status,
)
from .models import (
    StatusChange,
    TaskInstance,
    TemplateTask,
    WorkflowInstance,
    WorkflowTemplate,
    compute_progress,
)

__all__ = [
    "ROLE_PATTERNS",
    "TABLE_TO_RECORD_TYPE",
    "StatusChange",
    "TaskInstance",
    "TemplateTask",
    "WorkflowEngine",
    "WorkflowInstance",
    "WorkflowTemplate",
    "compute_progress",
    "is_project_type_compatible",
    "normalize_project_type",
    "record_type_for_table",
    "resolve_role_assignments",
    "resolve_task_status",
]
