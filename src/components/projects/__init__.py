"""
Projects component - Portfolio project management.
"""

from ._impl import ProjectConfig, ProjectService, validate_project_data
from .component import run, run_create, run_delete, run_get, run_list, run_reorder, run_update
from .models import (
    CreateProjectInput,
    DeleteProjectInput,
    GetProjectInput,
    ListProjectsInput,
    ProjectListOutput,
    ProjectOutput,
    ProjectValidationError,
    ReorderProjectsInput,
    UpdateProjectInput,
)
from .ports import ProjectRepoPort, VisitCleanupPort

__all__ = [
    # Entry points
    "run",
    "run_create",
    "run_delete",
    "run_get",
    "run_list",
    "run_reorder",
    "run_update",
    # Input models
    "CreateProjectInput",
    "DeleteProjectInput",
    "GetProjectInput",
    "ListProjectsInput",
    "ReorderProjectsInput",
    "UpdateProjectInput",
    # Output models
    "ProjectListOutput",
    "ProjectOutput",
    "ProjectValidationError",
    # Ports
    "ProjectRepoPort",
    "VisitCleanupPort",
    # Service
    "ProjectConfig",
    "ProjectService",
    "validate_project_data",
]
