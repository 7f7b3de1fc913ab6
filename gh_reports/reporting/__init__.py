"""Roadmap report building and publishing."""

from .aggregate import aggregate
from .markdown import NO_CONTENT_AVAILABLE, Table, UnorderedList
from .reconciler import (
    IssueReconciler,
    ReconcileAction,
    ReconcileResult,
    ReconcileState,
)
from .reports import BaseReport, MonthlyRoadmapReport, WeeklyRoadmapReport
from .templates import MonthlyRoadmapTemplate, RenderedReport, WeeklyRoadmapTemplate

__all__ = [
    "NO_CONTENT_AVAILABLE",
    "BaseReport",
    "IssueReconciler",
    "MonthlyRoadmapReport",
    "MonthlyRoadmapTemplate",
    "ReconcileAction",
    "ReconcileResult",
    "ReconcileState",
    "RenderedReport",
    "Table",
    "UnorderedList",
    "WeeklyRoadmapReport",
    "WeeklyRoadmapTemplate",
    "aggregate",
]
