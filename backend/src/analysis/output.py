from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class Severity(str, Enum):
    MINOR = "minor"
    MEDIUM = "medium"
    MAJOR = "major"


class Requirement(BaseModel):
    name: str
    percent: float


class Rule(BaseModel):
    name: str
    description: str
    display_order: int = 0
    target: float = 95
    requirements: List[Requirement] = Field(default_factory=list)

    @property
    def percent(self):
        if not self.requirements:
            return 0
        return sum(r.percent for r in self.requirements) / len(self.requirements)

    @property
    def passed(self):
        return self.percent >= self.target


class Suggestion(BaseModel):
    icon: Optional[str] = None
    content: str
    severity: Severity
    why: str


class TieredSuggestion(BaseModel):
    icon: Optional[str] = None
    content: str
    tiers: Dict[int, Severity]
    value: int
    why: str
    severity: Optional[Severity] = None

    @model_validator(mode="after")
    def _resolve_severity(self):
        # highest threshold reached wins
        self.severity = None
        for threshold in sorted(self.tiers):
            if self.value >= threshold:
                self.severity = self.tiers[threshold]
        return self


class PieChartRow(BaseModel):
    label: str
    value: int
    percent: str
    color: str


class PieChartStatistic(BaseModel):
    headings: List[str]
    data: List[PieChartRow]


class Checklist:
    def __init__(self):
        self.rules: List[Rule] = []

    def add(self, rule: Rule):
        self.rules.append(rule)

    def report(self):
        return [
            {**rule.model_dump(), "percent": rule.percent, "passed": rule.passed}
            for rule in sorted(self.rules, key=lambda r: r.display_order)
        ]


class Suggestions:
    def __init__(self):
        self.suggestions = []

    def add(self, suggestion):
        self.suggestions.append(suggestion)

    def report(self):
        return [suggestion.model_dump(mode="json") for suggestion in self.suggestions]


class Statistics:
    def __init__(self):
        self.statistics: List[PieChartStatistic] = []

    def add(self, statistic: PieChartStatistic):
        self.statistics.append(statistic)

    def report(self):
        return [statistic.model_dump() for statistic in self.statistics]


class ReportSink:
    def __init__(self):
        self.checklist = Checklist()
        self.suggestions = Suggestions()
        self.statistics = Statistics()

    def report(self):
        return {
            "checklist": self.checklist.report(),
            "suggestions": self.suggestions.report(),
            "statistics": self.statistics.report(),
        }
