import pytest

from packages.executions.utils.status import normalize_status


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("RUNNING", "Running"),
        ("running", "Running"),
        ("ContinuedAsNew", "ContinuedAsNew"),
        ("continuedasnew", "ContinuedAsNew"),
        ("TIMEDOUT", "TimedOut"),
        ("canceled", "Canceled"),
    ],
)
def test_known_aliases_map_to_canonical_tokens(raw, expected):
    assert normalize_status(raw) == expected


def test_unknown_status_passes_through_unchanged():
    assert normalize_status("Weird") == "Weird"
    assert normalize_status("wEiRd") == "wEiRd"


def test_none_stays_none():
    assert normalize_status(None) is None
