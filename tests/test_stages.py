"""Stage engine and record store tests."""

import pandas as pd
import pytest

from recruiting.domains.stages import (
    Application,
    InMemoryApplicationStore,
    Stage,
    STATUS_BY_STAGE,
    is_terminal,
    move_application,
    new_application,
    parse_stage,
    status_for,
    transition,
)
from recruiting.errors import (
    ConcurrentModificationError,
    InvalidApplicationError,
    InvalidStageError,
    NotFoundError,
)


class TestApplicationRecord:

    def test_ids_are_stringified(self):
        app = Application(1, 2, 3, "applied", "active", "2024-03-01")
        assert (app.application_id, app.candidate_id, app.job_id) == ("1", "2", "3")

    def test_updated_at_defaults_to_application_date(self):
        app = Application("a1", "c1", "j1", Stage.APPLIED, "active", "2024-03-01 09:00")
        assert app.updated_at == app.application_date == pd.Timestamp("2024-03-01 09:00")

    def test_updated_before_application_date_is_rejected(self):
        with pytest.raises(InvalidApplicationError):
            Application("a1", "c1", "j1", "screening", "active", "2024-03-05", "2024-03-01")

    def test_unknown_stage_is_not_representable(self):
        with pytest.raises(InvalidStageError):
            Application("a1", "c1", "j1", "archived", "active", "2024-03-01")

    def test_aware_timestamps_are_normalised_to_utc(self):
        app = Application("a1", "c1", "j1", "applied", None, "2024-03-01T10:00:00+02:00")
        assert app.application_date == pd.Timestamp("2024-03-01 08:00:00")
        assert app.application_date.tzinfo is None

    def test_from_record_round_trip(self, offer_application):
        record = offer_application.to_record()
        assert record["current_stage"] == "offer"
        assert Application.from_record(record) == offer_application

    def test_from_frame_row_with_empty_updated_at(self, snapshot):
        frame = snapshot.applications.copy()
        frame.loc[frame["application_id"] == "a2", "updated_at"] = pd.NaT
        record = frame.set_index("application_id", drop=False).loc["a2"].to_dict()

        app = Application.from_record(record)

        assert app.updated_at == app.application_date == pd.Timestamp("2024-03-02 09:00")

    @pytest.mark.parametrize("missing", [None, float("nan"), pd.NaT])
    def test_missing_updated_at_values(self, missing):
        app = Application("a1", "c1", "j1", "applied", "active", "2024-03-01", missing)
        assert app.updated_at == pd.Timestamp("2024-03-01")

    def test_from_record_missing_field(self):
        with pytest.raises(InvalidApplicationError, match="job_id"):
            Application.from_record({
                "application_id": "a1",
                "candidate_id": "c1",
                "current_stage": "applied",
                "application_date": "2024-03-01",
            })

    def test_new_application_starts_applied(self):
        app = new_application("a9", "c1", "j1", application_date="2024-03-01")
        assert app.current_stage is Stage.APPLIED
        assert app.status == "active"
        assert app.updated_at == app.application_date

    def test_missing_id_is_rejected(self):
        with pytest.raises(InvalidApplicationError):
            Application("", "c1", "j1", "applied", None, "2024-03-01")


class TestParseStage:

    @pytest.mark.parametrize("raw", ["hired", "HIRED", "  Hired ", Stage.HIRED])
    def test_accepts_case_and_whitespace(self, raw):
        assert parse_stage(raw) is Stage.HIRED

    @pytest.mark.parametrize("raw", ["archived", "", None, 3, "offer_extended"])
    def test_rejects_unknown_values(self, raw):
        with pytest.raises(InvalidStageError):
            parse_stage(raw)

    def test_terminal_stages(self):
        assert is_terminal("hired")
        assert is_terminal(Stage.REJECTED)
        assert not is_terminal("offer")


class TestTransition:

    @pytest.mark.parametrize(
        "stage, expected",
        [
            ("applied", "active"),
            ("screening", "active"),
            ("interview", "active"),
            ("offer", "offer_extended"),
            ("hired", "hired"),
            ("rejected", "rejected"),
        ],
    )
    def test_status_follows_stage(self, stage, expected):
        app = new_application("a1", "c1", "j1", application_date="2024-03-01")
        moved = transition(app, stage, now="2024-03-02")
        assert moved.current_stage == stage
        assert moved.status == expected

    def test_status_is_always_derived_from_stage(self):
        app = new_application("a1", "c1", "j1", application_date="2024-03-01", status="in_review")
        for stage in [*Stage, *reversed(Stage)]:
            app = transition(app, stage)
            assert app.status == status_for(stage, app.status)
            if stage in STATUS_BY_STAGE:
                assert app.status == str(STATUS_BY_STAGE[stage])

    def test_offer_to_hired(self, offer_application):
        hired = transition(offer_application, "hired")
        assert hired.current_stage is Stage.HIRED
        assert hired.status == "hired"
        assert hired.updated_at > offer_application.updated_at

    def test_only_stage_fields_change(self, offer_application):
        hired = transition(offer_application, Stage.HIRED, now="2024-03-25")
        assert hired.application_id == offer_application.application_id
        assert hired.candidate_id == offer_application.candidate_id
        assert hired.job_id == offer_application.job_id
        assert hired.application_date == offer_application.application_date
        assert hired.updated_at == pd.Timestamp("2024-03-25")

    def test_original_record_is_untouched(self, offer_application):
        transition(offer_application, "rejected")
        assert offer_application.current_stage is Stage.OFFER
        assert offer_application.status == "offer_extended"

    def test_same_stage_still_bumps_updated_at(self, offer_application):
        again = transition(offer_application, "offer")
        assert again.current_stage is Stage.OFFER
        assert again.updated_at > offer_application.updated_at

    def test_stale_clock_still_moves_forward(self, offer_application):
        moved = transition(offer_application, "hired", now="2024-03-10")
        assert moved.updated_at == offer_application.updated_at + pd.Timedelta(microseconds=1)

    def test_terminal_stage_can_be_left_explicitly(self):
        app = new_application("a1", "c1", "j1", application_date="2024-03-01")
        rejected = transition(app, "rejected", now="2024-03-02")
        reopened = transition(rejected, "screening", now="2024-03-03")
        assert reopened.current_stage is Stage.SCREENING
        assert reopened.status == "rejected"

    def test_unknown_stage(self, offer_application):
        with pytest.raises(InvalidStageError):
            transition(offer_application, "onboarding")

    def test_requires_application_record(self):
        with pytest.raises(InvalidApplicationError):
            transition({"application_id": "a1", "current_stage": "applied"}, "screening")


class TestApplicationStore:

    def test_move_persists_transition(self, offer_application):
        store = InMemoryApplicationStore([offer_application])
        saved = move_application(store, "a4", "hired", now="2024-03-25")
        assert saved.status == "hired"
        assert store.get("a4") == saved
        assert len(store) == 1

    def test_unknown_application(self, offer_application):
        store = InMemoryApplicationStore([offer_application])
        with pytest.raises(NotFoundError):
            move_application(store, "missing", "hired")

    def test_stale_write_is_refused(self, offer_application):
        store = InMemoryApplicationStore([offer_application])
        stale = store.get("a4")

        move_application(store, "a4", "hired", now="2024-03-25")

        with pytest.raises(ConcurrentModificationError) as excinfo:
            store.save(transition(stale, "rejected"), expected_updated_at=stale.updated_at)
        assert excinfo.value.application_id == "a4"
        assert store.get("a4").current_stage is Stage.HIRED

    def test_duplicate_ids_are_rejected(self, offer_application):
        store = InMemoryApplicationStore([offer_application])
        with pytest.raises(ValueError):
            store.add(offer_application)

    def test_all_returns_every_record(self, offer_application):
        other = new_application("a9", "c1", "j1", application_date="2024-03-01")
        store = InMemoryApplicationStore([offer_application, other])
        assert [app.application_id for app in store.all()] == ["a4", "a9"]
