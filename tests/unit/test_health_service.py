import pytest

from spending_tracker.services.health_service import format_uptime, health_status


@pytest.mark.parametrize(
    "ms,expected",
    [
        (0, "0s"),
        (4_999, "4s"),
        (184_000, "3m 4s"),
        (7_384_000, "2h 3m 4s"),
        (93_784_000, "1d 2h 3m"),
    ],
)
def test_format_uptime(ms, expected):
    assert format_uptime(ms) == expected


def test_health_status_reports_database_state():
    status = health_status(lambda: False)
    assert status["status"] == "ok"
    assert status["database"] == "unavailable"
    assert status["environment"] == "test"
    assert status["uptime"] >= 0
    assert status["memory"]["max_rss_kb"] > 0
    assert health_status(lambda: True)["database"] == "ok"
