from enum import Enum


class GoalCategory(str, Enum):
    fitness = "fitness"
    nutrition = "nutrition"
    mental_health = "mental_health"
    sleep = "sleep"
    other = "other"


class GoalStatus(str, Enum):
    active = "active"
    completed = "completed"
    paused = "paused"
    abandoned = "abandoned"
