"""Shared fixtures: a small hiring snapshot spanning March and April 2024.

Within the March window there are seven applications across three jobs:
three hires (20, 10 and 7 days), one offer, one interview, one screening
and one rejection.  One more application lands in April.
"""

import pandas as pd
import pytest

from recruiting.domains.analytics import DateRange, Snapshot
from recruiting.domains.stages import Application, Stage


def make_application(
    application_id: str,
    stage: str = "applied",
    *,
    candidate_id: str = "c1",
    job_id: str = "j1",
    applied: str = "2024-03-01 09:00:00",
    updated: str | None = None,
    status: str | None = "active",
) -> dict:
    return {
        "application_id": application_id,
        "candidate_id": candidate_id,
        "job_id": job_id,
        "current_stage": stage,
        "status": status,
        "application_date": applied,
        "updated_at": updated,
    }


@pytest.fixture
def jobs() -> list[dict]:
    return [
        {"job_id": "j1", "title": "Backend Engineer", "department": "Engineering",
         "location": "Remote", "status": "active", "created_at": "2024-02-01"},
        {"job_id": "j2", "title": "Product Designer", "department": "Design",
         "location": "Berlin", "status": "closed", "created_at": "2024-02-03"},
        {"job_id": "j3", "title": "Data Analyst", "department": "Analytics",
         "location": "London", "status": "Active", "created_at": "2024-02-10"},
    ]


@pytest.fixture
def candidates() -> list[dict]:
    return [
        {"candidate_id": "c1", "first_name": "Ada", "last_name": "Lovelace",
         "email": "ada@example.com", "source": "LinkedIn"},
        {"candidate_id": "c2", "first_name": "Grace", "last_name": "Hopper",
         "email": "grace@navy.example", "source": "Referral"},
        {"candidate_id": "c3", "first_name": "Alan", "last_name": "Turing",
         "email": "alan@example.com", "source": None},
        {"candidate_id": "c4", "first_name": "Edsger", "last_name": "Dijkstra",
         "email": "ewd@example.com", "source": ""},
        {"candidate_id": "c5", "first_name": "Barbara", "last_name": "Liskov",
         "email": "liskov@example.com", "source": "LinkedIn"},
    ]


@pytest.fixture
def applications() -> list[dict]:
    return [
        make_application("a1", "hired", candidate_id="c1", job_id="j1",
                         applied="2024-03-01 09:00:00", updated="2024-03-21 09:00:00", status="hired"),
        make_application("a2", "interview", candidate_id="c2", job_id="j1",
                         applied="2024-03-02 09:00:00"),
        make_application("a3", "rejected", candidate_id="c3", job_id="j2",
                         applied="2024-03-03 09:00:00", updated="2024-03-06 12:00:00", status="rejected"),
        make_application("a4", "offer", candidate_id="c4", job_id="j2",
                         applied="2024-03-04 09:00:00", updated="2024-03-20 09:00:00", status="offer_extended"),
        make_application("a5", "hired", candidate_id="c5", job_id="j1",
                         applied="2024-03-05 09:00:00", updated="2024-03-15 09:00:00", status="hired"),
        make_application("a6", "screening", candidate_id="c1", job_id="j3",
                         applied="2024-03-10 09:00:00"),
        make_application("a7", "hired", candidate_id="c2", job_id="j2",
                         applied="2024-03-11 09:00:00", updated="2024-03-18 09:00:00", status="hired"),
        make_application("a8", "applied", candidate_id="c3", job_id="j1",
                         applied="2024-04-15 09:00:00"),
    ]


@pytest.fixture
def interviews() -> list[dict]:
    return [
        {"application_id": "a1", "scheduled_date": "2024-03-08 14:00:00", "status": "completed"},
        {"application_id": "a2", "scheduled_date": "2024-03-12 10:00:00", "status": "scheduled"},
        {"application_id": "a4", "scheduled_date": "2024-03-09 16:00:00", "status": "completed"},
        {"application_id": "a8", "scheduled_date": "2024-04-20 11:00:00", "status": "scheduled"},
    ]


@pytest.fixture
def snapshot(applications, candidates, jobs, interviews) -> Snapshot:
    return Snapshot.from_records(
        applications=applications,
        candidates=candidates,
        jobs=jobs,
        interviews=interviews,
    )


@pytest.fixture
def march() -> DateRange:
    return DateRange(start="2024-03-01", end="2024-03-31")


@pytest.fixture
def offer_application() -> Application:
    return Application(
        application_id="a4",
        candidate_id="c4",
        job_id="j2",
        current_stage=Stage.OFFER,
        status="offer_extended",
        application_date=pd.Timestamp("2024-03-04 09:00:00"),
        updated_at=pd.Timestamp("2024-03-20 09:00:00"),
    )
