import math

import pytest

from scalemap.events import SESSION_RESET
from scalemap.project_types import neutral_projection
from scalemap.session import (
    MODE_LAWS,
    BaselineSession,
    HistorySession,
    QuantityMode,
    SessionBook,
)


class TestBaselineSession:
    def test_starts_unset(self):
        session = BaselineSession(QuantityMode.DIAMETER)
        assert not session.is_set
        assert session.scale_factor is None
        assert session.project(100.0) == neutral_projection()

    def test_set_and_project(self):
        session = BaselineSession(QuantityMode.DIAMETER)
        scale = session.set_baseline(12_742_000, 0.20)
        assert scale == pytest.approx(0.20 / 12_742_000)
        assert session.scale_factor == scale
        assert session.project(3_474_800)["radius_meters"] == pytest.approx(0.02727, rel=1e-3)

    @pytest.mark.parametrize("real", [0, -5, math.nan])
    def test_failed_set_clears_previous_baseline(self, real):
        session = BaselineSession(QuantityMode.MASS)
        assert session.set_baseline(1.0, 1000.0) is not None

        assert session.set_baseline(real, 100) is None
        assert not session.is_set
        assert session.baseline_real_value is None
        assert session.project(4.0) == neutral_projection()

    def test_new_baseline_fully_replaces_old(self):
        session = BaselineSession(QuantityMode.AREA)
        session.set_baseline(1.0, 1000.0)
        session.set_baseline(4.0, 200.0)
        assert session.baseline_real_value == 4.0
        assert session.baseline_map_diameter == 200.0
        assert session.project(16.0)["radius_meters"] == pytest.approx(200.0)

    def test_reset(self):
        session = BaselineSession(QuantityMode.MONEY)
        session.set_baseline(100.0, 10.0)
        session.reset()
        assert not session.is_set
        assert session.project(50.0) == neutral_projection()

    def test_mode_binds_law(self):
        assert BaselineSession(QuantityMode.DISTANCE).law is MODE_LAWS[QuantityMode.DISTANCE]
        assert BaselineSession(QuantityMode.LUMINOSITY).law.name == "square_root"


class TestHistorySession:
    def test_years_are_measured_from_reference(self):
        session = HistorySession(reference_year=2000)
        assert session.years_from_reference(1000) == 1000
        assert session.years_from_reference(-500) == 2500
        assert session.years_from_reference(2024) == 24

    def test_time_linear_scenario(self):
        session = HistorySession(reference_year=2000)
        assert session.set_baseline_year(1000, 1000) == pytest.approx(0.5)
        assert session.project_year(1500)["radius_meters"] == pytest.approx(250.0)

    def test_baseline_in_reference_year_is_invalid(self):
        session = HistorySession(reference_year=2000)
        assert session.set_baseline_year(2000, 1000) is None
        assert not session.is_set

    def test_defaults_to_current_year(self):
        from datetime import datetime

        assert HistorySession().reference_year == datetime.now().year


class TestSessionBook:
    def test_one_session_per_mode(self):
        book = SessionBook()
        assert {session.mode for session in book} == set(QuantityMode)
        assert isinstance(book[QuantityMode.HISTORY], HistorySession)
        assert book.history() is book[QuantityMode.HISTORY]

    def test_history_uses_reference_year(self):
        book = SessionBook(reference_year=1900)
        assert book.history().reference_year == 1900

    def test_sessions_are_independent(self):
        book = SessionBook()
        book[QuantityMode.DIAMETER].set_baseline(10.0, 100.0)
        assert book[QuantityMode.DIAMETER].is_set
        assert not book[QuantityMode.LINEAR_LENGTH].is_set
        assert not book[QuantityMode.MONEY].is_set

    def test_reset_signal_clears_every_session(self, bus):
        book = SessionBook(bus)
        book[QuantityMode.DIAMETER].set_baseline(10.0, 100.0)
        book.history().set_baseline(100.0, 100.0)

        bus.emit(SESSION_RESET)

        assert not any(session.is_set for session in book)

    def test_custom_limit_reaches_laws(self):
        book = SessionBook(limit_meters=100.0)
        session = book[QuantityMode.DIAMETER]
        session.set_baseline(1.0, 100.0)
        result = session.project(3.0)
        assert result["too_large"] is True
        assert result["required_baseline_meters"] == pytest.approx(2 * 100.0 / 3.0)
