"""
Display grouping for a day's task list.

Sections are re-derived from the flat list on every call; assigning or
unassigning a template changes that list underneath any caller, so nothing
here keeps state between calls.

Section order is part of the contract: the custom section first (only when
custom tasks exist), then one section per template ordered by template name
and id. Tasks inside a section follow their stored ``order``.
"""

from app.modules.tasks.models import SourceType
from app.modules.tasks.schemas import DailyTaskResponse, TaskSection
from typing import Dict, List, Sequence

CUSTOM_SECTION_KEY = "custom"
UNKNOWN_TEMPLATE_TITLE = "Template"


def _task_sort_key(task: DailyTaskResponse):
    return (task.order, task.created_at, task.id)


def group_tasks_for_display(tasks: Sequence[DailyTaskResponse], custom_title: str = "My Tasks") -> List[TaskSection]:
    custom: List[DailyTaskResponse] = []
    by_template: Dict[str, List[DailyTaskResponse]] = {}
    for task in tasks:
        if task.source_type == SourceType.TEMPLATE.value and task.template_id:
            by_template.setdefault(task.template_id, []).append(task)
        else:
            custom.append(task)

    sections: List[TaskSection] = []
    if custom:
        sections.append(TaskSection(
            key=CUSTOM_SECTION_KEY,
            title=custom_title,
            source_type=SourceType.CUSTOM.value,
            tasks=sorted(custom, key=_task_sort_key),
        ))

    template_sections = []
    for template_id, members in by_template.items():
        # Every member carries the same template summary when one is attached
        summary = next((t.template for t in members if t.template is not None), None)
        template_sections.append(TaskSection(
            key=template_id,
            title=summary.name if summary else UNKNOWN_TEMPLATE_TITLE,
            source_type=SourceType.TEMPLATE.value,
            template_id=template_id,
            color=summary.color if summary else None,
            tasks=sorted(members, key=_task_sort_key),
        ))
    template_sections.sort(key=lambda s: (s.title.casefold(), s.template_id))
    sections.extend(template_sections)
    return sections
