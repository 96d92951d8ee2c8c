"""Implementation checklist generation.

Groups requirements into mandatory / recommended / optional buckets,
optionally narrowed to one implementation role, and renders them as a
Markdown task list.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ...models.enums import RequirementLevel, Role
from ..core.document import Requirement

MUST_LEVELS = frozenset(
    {
        RequirementLevel.MUST,
        RequirementLevel.MUST_NOT,
        RequirementLevel.REQUIRED,
        RequirementLevel.SHALL,
        RequirementLevel.SHALL_NOT,
    }
)
SHOULD_LEVELS = frozenset(
    {
        RequirementLevel.SHOULD,
        RequirementLevel.SHOULD_NOT,
        RequirementLevel.RECOMMENDED,
        RequirementLevel.NOT_RECOMMENDED,
    }
)
MAY_LEVELS = frozenset({RequirementLevel.MAY, RequirementLevel.OPTIONAL})


@dataclass
class ClassifiedRequirements:
    must: list[Requirement] = field(default_factory=list)
    should: list[Requirement] = field(default_factory=list)
    may: list[Requirement] = field(default_factory=list)


@dataclass
class ChecklistItem:
    id: str
    requirement: Requirement
    checked: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "requirement": self.requirement.to_dict(), "checked": self.checked}


@dataclass
class ImplementationChecklist:
    """Checklist for one RFC and role."""

    rfc: int
    title: str
    role: Role
    must: list[ChecklistItem] = field(default_factory=list)
    should: list[ChecklistItem] = field(default_factory=list)
    may: list[ChecklistItem] = field(default_factory=list)
    generated_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict[str, Any]:
        return {
            "rfc": self.rfc,
            "title": self.title,
            "role": str(self.role),
            "must": [item.to_dict() for item in self.must],
            "should": [item.to_dict() for item in self.should],
            "may": [item.to_dict() for item in self.may],
            "generatedAt": self.generated_at,
        }


def classify_requirements(requirements: list[Requirement]) -> ClassifiedRequirements:
    """Split requirements into MUST / SHOULD / MAY buckets, keeping order."""
    classified = ClassifiedRequirements()
    for requirement in requirements:
        if requirement.level in MUST_LEVELS:
            classified.must.append(requirement)
        elif requirement.level in SHOULD_LEVELS:
            classified.should.append(requirement)
        elif requirement.level in MAY_LEVELS:
            classified.may.append(requirement)
    return classified


def filter_by_role(requirements: list[Requirement], role: Role | None = None) -> list[Requirement]:
    """Keep requirements that apply to ``role``.

    A requirement applies when its subject names the role, or does not name
    the opposite role. Requirements without a subject apply to both.
    """
    if role is None or role == Role.BOTH:
        return list(requirements)

    other = Role.SERVER if role == Role.CLIENT else Role.CLIENT
    kept = []
    for requirement in requirements:
        subject = (requirement.subject or "").lower()
        if role.value in subject or other.value not in subject:
            kept.append(requirement)
    return kept


def generate_checklist(
    rfc_number: int,
    title: str,
    requirements: list[Requirement],
    role: Role = Role.BOTH,
) -> ImplementationChecklist:
    """Build a checklist from extracted requirements."""
    classified = classify_requirements(filter_by_role(requirements, role))

    def items(bucket: list[Requirement]) -> list[ChecklistItem]:
        return [ChecklistItem(id=r.id, requirement=r) for r in bucket]

    return ImplementationChecklist(
        rfc=rfc_number,
        title=title,
        role=role,
        must=items(classified.must),
        should=items(classified.should),
        may=items(classified.may),
    )


_MARKDOWN_SECTIONS = (
    ("must", "Mandatory Requirements (MUST / REQUIRED / SHALL)"),
    ("should", "Recommended Requirements (SHOULD / RECOMMENDED)"),
    ("may", "Optional Requirements (MAY / OPTIONAL)"),
)


def generate_checklist_markdown(checklist: ImplementationChecklist) -> str:
    """Render the checklist as a Markdown task list. Empty buckets are omitted."""
    lines = [f"# RFC {checklist.rfc} Implementation Checklist", "", f"**{checklist.title}**", ""]
    if checklist.role != Role.BOTH:
        lines.extend([f"Role: {checklist.role.value}", ""])
    lines.extend([f"Generated: {checklist.generated_at}", ""])

    for bucket, heading in _MARKDOWN_SECTIONS:
        items: list[ChecklistItem] = getattr(checklist, bucket)
        if not items:
            continue
        lines.extend([f"## {heading}", ""])
        for item in items:
            lines.append(f"- [ ] {item.requirement.text} ({item.requirement.section})")
        lines.append("")

    return "\n".join(lines)


def get_checklist_stats(checklist: ImplementationChecklist) -> dict[str, int]:
    """Count items per bucket; ``total`` is their sum."""
    must, should, may = len(checklist.must), len(checklist.should), len(checklist.may)
    return {"must": must, "should": should, "may": may, "total": must + should + may}
