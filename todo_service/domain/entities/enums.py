from enum import Enum


class TodoPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
