from typing import Optional

from todo_service.domain.entities import TodoPriority
from todo_service.libs.result import Error

PRIORITY_VALUES = [p.value for p in TodoPriority]


def validate_priority(priority: Optional[str]) -> Optional[Error]:
    if priority is None or priority in PRIORITY_VALUES:
        return None
    return Error(
        "VALIDATION_ERROR",
        f"Priority must be one of: {', '.join(PRIORITY_VALUES)}",
    )
