"""Tests for support-status classification."""

import logging
from datetime import UTC, datetime, timedelta

from hypothesis import given
from hypothesis import strategies as st

from buildcat.config import SupportPolicy
from buildcat.core.classifier import (
    classify_superseded,
    classify_versions,
    normalize_as_of,
    order_versions,
    pick_recommended,
)
from buildcat.models import DATED_STATUSES, SupportStatus
from conftest import AS_OF, days_ago, make_version


def _history(flagged_recommended: bool = True):
    versions = [
        make_version("100", days_ago(1)),
        make_version("99", days_ago(10)),
        make_version("98", days_ago(20)),
        make_version("97", days_ago(30)),
        make_version("96", days_ago(100)),
        make_version("95", days_ago(200)),
    ]
    return versions, ({"99"} if flagged_recommended else set())


class TestNormalizeAsOf:
    """Tests for normalize_as_of function."""

    def test_naive_taken_as_utc(self) -> None:
        assert normalize_as_of(AS_OF.replace(tzinfo=None)) == AS_OF

    def test_none_is_now(self) -> None:
        assert normalize_as_of(None).tzinfo is not None


class TestOrderVersions:
    """Tests for order_versions function."""

    def test_numeric_not_lexical(self) -> None:
        versions = [make_version("9"), make_version("10"), make_version("100")]
        assert [v.raw for v in order_versions(versions)] == ["100", "10", "9"]

    def test_equal_numbers_break_on_publication(self) -> None:
        older = make_version("1.0", days_ago(5), numeric_parts=(1, 0))
        newer = make_version("v1.0", days_ago(1), numeric_parts=(1, 0))
        assert order_versions([older, newer])[0].raw == "v1.0"

    def test_equal_numbers_and_dates_break_on_raw(self) -> None:
        a = make_version("1.0", days_ago(1), numeric_parts=(1, 0))
        b = make_version("v1.0", days_ago(1), numeric_parts=(1, 0))
        assert [v.raw for v in order_versions([a, b])] == ["v1.0", "1.0"]
        assert [v.raw for v in order_versions([b, a])] == ["v1.0", "1.0"]


class TestClassifySuperseded:
    """Tests for classify_superseded function."""

    def test_active_within_window(self) -> None:
        result = classify_superseded(days_ago(10), SupportPolicy(), AS_OF)
        assert result.status == SupportStatus.ACTIVE
        assert result.support_ends == days_ago(10) + timedelta(days=42)

    def test_active_window_boundary_is_inclusive(self) -> None:
        result = classify_superseded(days_ago(14), SupportPolicy(), AS_OF)
        assert result.status == SupportStatus.ACTIVE

    def test_deprecated_after_active_window(self) -> None:
        result = classify_superseded(days_ago(20), SupportPolicy(), AS_OF)
        assert result.status == SupportStatus.DEPRECATED

    def test_deprecation_boundary_is_inclusive(self) -> None:
        result = classify_superseded(days_ago(42), SupportPolicy(), AS_OF)
        assert result.status == SupportStatus.DEPRECATED
        assert result.support_ends == AS_OF

    def test_eol_after_deprecation_window(self) -> None:
        result = classify_superseded(days_ago(43), SupportPolicy(), AS_OF)
        assert result.status == SupportStatus.EOL
        assert result.support_ends < AS_OF

    def test_support_end_clamped_at_calendar_end(self) -> None:
        replaced_at = datetime(9999, 12, 31, tzinfo=UTC)
        result = classify_superseded(replaced_at, SupportPolicy(), AS_OF)
        assert result.status == SupportStatus.ACTIVE
        assert result.support_ends == datetime.max.replace(tzinfo=UTC)

    def test_custom_windows(self) -> None:
        policy = SupportPolicy(active_window_days=1, deprecation_window_days=3)
        assert classify_superseded(days_ago(2), policy, AS_OF).status == SupportStatus.DEPRECATED
        assert classify_superseded(days_ago(4), policy, AS_OF).status == SupportStatus.EOL


class TestPickRecommended:
    """Tests for pick_recommended function."""

    def test_falls_back_to_latest(self) -> None:
        versions, _ = _history()
        dated = order_versions(versions)
        assert pick_recommended(dated, set(), SupportPolicy(), AS_OF).raw == "100"

    def test_newest_flag_wins(self) -> None:
        versions, _ = _history()
        dated = order_versions(versions)
        assert pick_recommended(dated, {"97", "99"}, SupportPolicy(), AS_OF).raw == "99"

    def test_lapsed_flag_skipped(self) -> None:
        """A flag older than the threshold gives way to the next flagged build."""
        versions, _ = _history()
        dated = order_versions(versions)
        policy = SupportPolicy(recommendation_threshold_days=5)
        # 99's successor is 1 day old, 97's successor is 20 days old
        assert pick_recommended(dated, {"99", "97"}, policy, AS_OF).raw == "99"
        assert pick_recommended(dated, {"97"}, policy, AS_OF).raw == "100"


class TestClassifyVersions:
    """Tests for classify_versions function."""

    def test_full_history(self) -> None:
        versions, flagged = _history()
        result = classify_versions(versions, SupportPolicy(), flagged=flagged, as_of=AS_OF)

        assert result["100"].status == SupportStatus.LATEST
        assert result["100"].recommended is False
        assert result["99"].status == SupportStatus.RECOMMENDED
        assert result["99"].recommended is True
        assert result["99"].support_ends is None
        assert result["98"].status == SupportStatus.ACTIVE
        assert result["98"].support_ends == days_ago(10) + timedelta(days=42)
        assert result["97"].status == SupportStatus.DEPRECATED
        assert result["96"].status == SupportStatus.DEPRECATED
        assert result["95"].status == SupportStatus.EOL

    def test_without_flag_latest_is_recommended(self) -> None:
        versions, _ = _history()
        result = classify_versions(versions, SupportPolicy(), as_of=AS_OF)

        assert result["100"].status == SupportStatus.LATEST
        assert result["100"].recommended is True
        assert result["99"].status == SupportStatus.ACTIVE
        assert not any(c.status == SupportStatus.RECOMMENDED for c in result.values())

    def test_flag_on_latest(self) -> None:
        versions, _ = _history()
        result = classify_versions(versions, SupportPolicy(), flagged={"100"}, as_of=AS_OF)
        assert result["100"].status == SupportStatus.LATEST
        assert result["100"].recommended is True
        assert sum(c.recommended for c in result.values()) == 1

    def test_extra_flags_ignored_with_warning(self, caplog) -> None:
        versions, _ = _history()
        with caplog.at_level(logging.WARNING, logger="buildcat.core.classifier"):
            result = classify_versions(
                versions, SupportPolicy(), flagged={"99", "97"}, as_of=AS_OF
            )
        assert result["99"].status == SupportStatus.RECOMMENDED
        assert result["97"].status == SupportStatus.DEPRECATED
        assert "97" in caplog.text

    def test_lapsed_recommendation_is_reclassified(self) -> None:
        versions, flagged = _history()
        policy = SupportPolicy(recommendation_threshold_days=0)
        result = classify_versions(versions, policy, flagged=flagged, as_of=AS_OF)

        assert result["100"].recommended is True
        assert result["99"].status == SupportStatus.ACTIVE
        assert result["99"].support_ends == days_ago(1) + timedelta(days=42)

    def test_undated_versions_are_unknown(self) -> None:
        versions = [
            make_version("101"),
            make_version("100", days_ago(1)),
            make_version("99", days_ago(60)),
        ]
        result = classify_versions(versions, SupportPolicy(), as_of=AS_OF)

        assert result["101"].status == SupportStatus.UNKNOWN
        assert result["101"].support_ends is None
        assert result["101"].recommended is False
        assert result["100"].status == SupportStatus.LATEST
        # 99 was replaced by 100, not by the undated 101
        assert result["99"].status == SupportStatus.ACTIVE

    def test_all_undated(self) -> None:
        """With no dates at all the newest identifier is still latest and recommended."""
        result = classify_versions(
            [make_version("1"), make_version("3"), make_version("2")],
            SupportPolicy(),
            as_of=AS_OF,
        )
        assert result["3"].status == SupportStatus.LATEST
        assert result["3"].recommended is True
        assert result["3"].support_ends is None
        assert result["2"].status == SupportStatus.UNKNOWN
        assert result["1"].status == SupportStatus.UNKNOWN
        assert result["2"].support_ends is None

    def test_all_undated_honours_flag(self) -> None:
        result = classify_versions(
            [make_version("1"), make_version("2")], SupportPolicy(), flagged={"1"}, as_of=AS_OF
        )
        assert result["2"].status == SupportStatus.LATEST
        assert result["2"].recommended is False
        assert result["1"].status == SupportStatus.RECOMMENDED
        assert result["1"].recommended is True

    def test_successor_at_end_of_calendar(self) -> None:
        """A successor dated in year 9999 keeps its predecessor active without overflowing."""
        far_future = datetime(9999, 12, 31, tzinfo=UTC)
        versions = [make_version("2", far_future), make_version("1", days_ago(1))]
        result = classify_versions(versions, SupportPolicy(), as_of=AS_OF)
        assert result["2"].status == SupportStatus.LATEST
        assert result["1"].status == SupportStatus.ACTIVE
        assert result["1"].support_ends == datetime.max.replace(tzinfo=UTC)

    def test_empty(self) -> None:
        assert classify_versions([], SupportPolicy(), as_of=AS_OF) == {}

    def test_single_version(self) -> None:
        versions = [make_version("7290", days_ago(400))]
        result = classify_versions(versions, SupportPolicy(), as_of=AS_OF)
        assert result["7290"].status == SupportStatus.LATEST
        assert result["7290"].recommended is True

    def test_input_order_irrelevant(self) -> None:
        versions, flagged = _history()
        forward = classify_versions(versions, SupportPolicy(), flagged=flagged, as_of=AS_OF)
        backward = classify_versions(
            list(reversed(versions)), SupportPolicy(), flagged=flagged, as_of=AS_OF
        )
        assert forward == backward

    @given(
        st.lists(
            st.tuples(
                st.integers(min_value=1, max_value=500),
                st.one_of(st.none(), st.integers(min_value=0, max_value=400)),
            ),
            max_size=15,
            unique_by=lambda item: item[0],
        ),
        st.sets(st.integers(min_value=1, max_value=500), max_size=4),
    )
    def test_classification_invariants(self, items, flagged_numbers) -> None:
        """One latest and one recommended per non-empty history; end dates on dated statuses."""
        versions = [
            make_version(str(number), days_ago(age) if age is not None else None)
            for number, age in items
        ]
        flagged = {str(n) for n in flagged_numbers}
        result = classify_versions(versions, SupportPolicy(), flagged=flagged, as_of=AS_OF)

        assert set(result) == {v.raw for v in versions}
        latest = [raw for raw, c in result.items() if c.status == SupportStatus.LATEST]
        recommended = [raw for raw, c in result.items() if c.recommended]
        expected = 1 if versions else 0
        assert len(latest) == expected
        assert len(recommended) == expected
        for c in result.values():
            assert (c.support_ends is not None) == (c.status in DATED_STATUSES)
