"""Recruiting pipeline core: stage transitions and hiring analytics."""

from recruiting.domains.analytics import build, build_overview, DateRange, ReportResult, ReportType, Snapshot
from recruiting.domains.stages import Application, Stage, move_application, new_application, transition
