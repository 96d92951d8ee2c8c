"""Requirement extraction and checklist generation."""

from .checklist import (
    ChecklistItem,
    ClassifiedRequirements,
    ImplementationChecklist,
    classify_requirements,
    filter_by_role,
    generate_checklist,
    generate_checklist_markdown,
    get_checklist_stats,
)
from .requirements import RequirementFilter, extract_requirements, parse_requirement_components

__all__ = [
    # Requirements
    "RequirementFilter",
    "extract_requirements",
    "parse_requirement_components",
    # Checklist
    "ChecklistItem",
    "ClassifiedRequirements",
    "ImplementationChecklist",
    "classify_requirements",
    "filter_by_role",
    "generate_checklist",
    "generate_checklist_markdown",
    "get_checklist_stats",
]
