"""Recruiting analytics domain.

Funnel conversion, source mix, time-to-hire and per-job performance
computed from an immutable snapshot, plus the pipeline board and the
dashboard overview.
"""

from recruiting.domains.analytics.models import DateRange, ReportResult, ReportType, Snapshot
from recruiting.domains.analytics.metrics import bucket_by, date_window_filter, percentage, rank_descending
from recruiting.domains.analytics.sources import source_distribution
from recruiting.domains.analytics.funnel import application_funnel
from recruiting.domains.analytics.time_to_hire import time_to_hire
from recruiting.domains.analytics.job_performance import job_performance
from recruiting.domains.analytics.board import board_summary, filter_board, stage_counts
from recruiting.domains.analytics.overview import build_overview
from recruiting.domains.analytics.builder import build
