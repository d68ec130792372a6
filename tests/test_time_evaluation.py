import pytest

from autoredshift.common.enums import DaySection
from autoredshift.errors import WaketimeParseError
from autoredshift.evaluation.display import calculate_display_settings
from autoredshift.evaluation.time import (
    MAX_REDSHIFT,
    TimeEvaluation,
    Waketime,
    classify,
    evaluate_time,
)

N_HOURS_GRID = [0.5, 1.0, 2.0, 3.0, 4.0, 5.5, 8.0]
WAKETIMES = [Waketime(hours=h, minutes=m) for h, m in [(0, 0), (6, 0), (7, 45), (13, 10), (23, 59)]]


def _evaluate_shifted(shifted: int, n_hours: float, wake: Waketime) -> TimeEvaluation:
    minute_of_day = (wake.minute_of_day + shifted) % (24 * 60)
    return evaluate_time(minute_of_day // 60, minute_of_day % 60, wake, n_hours)


# ── Waketime parsing ────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    ("text", "hours", "minutes"),
    [("06:00", 6, 0), ("6:5", 6, 5), ("23:59", 23, 59), (" 00:00 ", 0, 0)],
)
def test_waketime_parse(text: str, hours: int, minutes: int) -> None:
    wake = Waketime.parse(text)
    assert (wake.hours, wake.minutes) == (hours, minutes)


@pytest.mark.parametrize("text", ["", "6", "06-00", "aa:bb", "6:00:00", "24:00", "12:60", "-1:30"])
def test_waketime_parse_rejects(text: str) -> None:
    with pytest.raises(WaketimeParseError):
        Waketime.parse(text)


def test_waketime_parse_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        Waketime.parse("noon")


def test_waketime_str_and_minute_of_day() -> None:
    wake = Waketime(hours=7, minutes=5)
    assert str(wake) == "07:05"
    assert wake.minute_of_day == 425


# ── classification ─────────────────────────────────────────────────────────
@pytest.mark.parametrize(
    ("shifted", "section"),
    [
        (0, DaySection.MORNING),
        (150, DaySection.MORNING),
        (151, DaySection.DAY),
        (630, DaySection.DAY),
        (631, DaySection.EVENING),
        (960, DaySection.EVENING),
        (961, DaySection.NIGHT),
        (1200, DaySection.NIGHT),
        (1201, DaySection.MORNING),
        (1439, DaySection.MORNING),
    ],
)
def test_classify_boundaries(shifted: int, section: DaySection) -> None:
    assert classify(shifted) is section


def test_minutes_since_wake_wraps_midnight(waketime: Waketime) -> None:
    assert evaluate_time(5, 59, waketime, 4.0).minutes_since_wake == 1439
    assert evaluate_time(6, 0, waketime, 4.0).minutes_since_wake == 0
    assert evaluate_time(0, 0, waketime, 4.0).minutes_since_wake == 18 * 60


# ── redshift properties ────────────────────────────────────────────────────
@pytest.mark.parametrize("n_hours", N_HOURS_GRID)
@pytest.mark.parametrize("wake", WAKETIMES, ids=str)
def test_redshift_properties(n_hours: float, wake: Waketime) -> None:
    previous_evening = 0.0
    for shifted in range(0, 24 * 60):
        evaluation = _evaluate_shifted(shifted, n_hours, wake)
        assert evaluation.minutes_since_wake == shifted
        assert 0.0 <= evaluation.redshift <= MAX_REDSHIFT

        section = evaluation.day_section
        if section in (DaySection.MORNING, DaySection.DAY):
            assert evaluation.redshift == 0.0
        elif section is DaySection.NIGHT:
            assert evaluation.redshift == MAX_REDSHIFT
        else:
            assert evaluation.redshift >= previous_evening
            previous_evening = evaluation.redshift


@pytest.mark.parametrize("n_hours", [1.0, 2.0, 4.0])
def test_evening_ramp_reaches_max_at_night_boundary(waketime: Waketime, n_hours: float) -> None:
    evaluation = _evaluate_shifted(960, n_hours, waketime)
    assert evaluation.day_section is DaySection.EVENING
    assert evaluation.redshift == MAX_REDSHIFT


def test_evening_before_ramp_is_zero(waketime: Waketime) -> None:
    assert _evaluate_shifted(720, 4.0, waketime).redshift == 0.0
    assert _evaluate_shifted(700, 8.0, waketime).redshift == 0.0


def test_short_transition_never_negative(waketime: Waketime) -> None:
    # ramp starts at hour 15 after wake; 13h after wake is still zero
    assert _evaluate_shifted(13 * 60, 1.0, waketime).redshift == 0.0
    assert _evaluate_shifted(15 * 60 + 30, 1.0, waketime).redshift == pytest.approx(10.0)


def test_evaluate_is_idempotent(waketime: Waketime) -> None:
    first = evaluate_time(19, 17, waketime, 3.5)
    second = evaluate_time(19, 17, waketime, 3.5)
    assert first == second
    assert first is not second


@pytest.mark.parametrize("n_hours", [0.0, -1.0])
def test_non_positive_n_hours_rejected(waketime: Waketime, n_hours: float) -> None:
    with pytest.raises(ValueError):
        evaluate_time(20, 0, waketime, n_hours)


# ── golden table ───────────────────────────────────────────────────────────
EXPECTED_12_TO_24 = """\
12:00 -> section=day     , redshift= 0.00, temp=  6500K, brightness=1.00
12:30 -> section=day     , redshift= 0.00, temp=  6500K, brightness=1.00
13:00 -> section=day     , redshift= 0.00, temp=  6500K, brightness=1.00
13:30 -> section=day     , redshift= 0.00, temp=  6500K, brightness=1.00
14:00 -> section=day     , redshift= 0.00, temp=  6500K, brightness=1.00
14:30 -> section=day     , redshift= 0.00, temp=  6500K, brightness=1.00
15:00 -> section=day     , redshift= 0.00, temp=  6500K, brightness=1.00
15:30 -> section=day     , redshift= 0.00, temp=  6500K, brightness=1.00
16:00 -> section=day     , redshift= 0.00, temp=  6500K, brightness=1.00
16:30 -> section=day     , redshift= 0.00, temp=  6500K, brightness=1.00
17:00 -> section=evening , redshift= 0.00, temp=  6500K, brightness=1.00
17:30 -> section=evening , redshift= 0.00, temp=  6500K, brightness=1.00
18:00 -> section=evening , redshift= 0.00, temp=  6500K, brightness=1.00
18:30 -> section=evening , redshift= 2.50, temp=  6000K, brightness=0.94
19:00 -> section=evening , redshift= 5.00, temp=  5500K, brightness=0.88
19:30 -> section=evening , redshift= 7.50, temp=  5000K, brightness=0.81
20:00 -> section=evening , redshift=10.00, temp=  4500K, brightness=0.75
20:30 -> section=evening , redshift=12.50, temp=  4000K, brightness=0.69
21:00 -> section=evening , redshift=15.00, temp=  3500K, brightness=0.62
21:30 -> section=evening , redshift=17.50, temp=  3000K, brightness=0.56
22:00 -> section=evening , redshift=20.00, temp=  2500K, brightness=0.50
22:30 -> section=night   , redshift=20.00, temp=  2500K, brightness=0.50
23:00 -> section=night   , redshift=20.00, temp=  2500K, brightness=0.50
23:30 -> section=night   , redshift=20.00, temp=  2500K, brightness=0.50
00:00 -> section=night   , redshift=20.00, temp=  2500K, brightness=0.50
"""


def test_time_evaluation_12h_to_24h(waketime: Waketime) -> None:
    """Snapshot from 12:00 to midnight with waketime 06:00 and a 4h ramp."""
    slots = [(hour, minute) for hour in range(12, 24) for minute in (0, 30)] + [(0, 0)]

    lines = []
    for hour, minute in slots:
        evaluation = evaluate_time(hour, minute, waketime, 4.0)
        display = calculate_display_settings(evaluation.redshift, (0.5, 1.0), (2500, 6500))
        lines.append(
            f"{hour:02}:{minute:02} -> section={str(evaluation.day_section):8}, "
            f"redshift={evaluation.redshift:5.2f}, temp={display.temperature:6.0f}K, "
            f"brightness={display.brightness:.2f}\n"
        )

    assert "".join(lines) == EXPECTED_12_TO_24
