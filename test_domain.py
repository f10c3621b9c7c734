# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Tests for the pure membership rules: package policy, expiry arithmetic,
status correction, the read-time derived fields, config parsing and the
JSON log format.
"""

import json
import logging
import sys
from datetime import datetime, timedelta, timezone

import pytest

from membership_service.core.config import _parse_pairs
from membership_service.core.logging import JSONFormatter
from membership_service.models.domain import (
    PackagePolicy,
    as_utc,
    compute_expiry,
    correct_status,
    days_remaining,
    is_expired,
    with_derived_fields,
)

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _record(expiry, status="active"):
    return {"id": "m1", "membership_status": status, "expiry_date": expiry}


# ============================================
# PackagePolicy
# ============================================
class TestPackagePolicy:
    @pytest.mark.parametrize("package,days", [
        ("trial", 7), ("basic", 30), ("premium", 90), ("elite", 365),
    ])
    def test_known_durations(self, policy, package, days):
        assert policy.duration_days(package) == days

    def test_unknown_tier_falls_back_to_default(self, policy):
        assert policy.duration_days("platinum") == 30

    def test_missing_tier_falls_back_to_default(self, policy):
        assert policy.duration_days(None) == 30

    def test_injected_table_overrides_durations(self):
        custom = PackagePolicy({"trial": 3}, default_days=14)
        assert custom.duration_days("trial") == 3
        assert custom.duration_days("basic") == 14

    def test_price_lookup(self, policy):
        assert policy.price("premium") == 5000
        assert policy.price("platinum") is None

    def test_packages_listed_in_table_order(self, policy):
        assert policy.packages == ("trial", "basic", "premium", "elite")


# ============================================
# Expiry arithmetic
# ============================================
class TestComputeExpiry:
    def test_trial_from_new_year(self, policy):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert compute_expiry(base, "trial", policy) == datetime(2024, 1, 8, tzinfo=timezone.utc)

    def test_elite_spans_leap_year(self, policy):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert compute_expiry(base, "elite", policy) == datetime(2024, 12, 31, tzinfo=timezone.utc)

    def test_naive_base_treated_as_utc(self, policy):
        assert compute_expiry(datetime(2024, 1, 1), "basic", policy) == datetime(
            2024, 1, 31, tzinfo=timezone.utc
        )


class TestAsUtc:
    def test_converts_offset_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        assert as_utc(datetime(2024, 1, 1, 2, 0, tzinfo=plus_two)) == datetime(
            2024, 1, 1, 0, 0, tzinfo=timezone.utc
        )


# ============================================
# Status correction
# ============================================
class TestCorrectStatus:
    def test_active_past_expiry_becomes_expired(self):
        assert correct_status(_record(NOW - timedelta(days=1)), NOW)["membership_status"] == "expired"

    def test_active_future_expiry_unchanged(self):
        assert correct_status(_record(NOW + timedelta(days=1)), NOW)["membership_status"] == "active"

    @pytest.mark.parametrize("status", ["inactive", "suspended", "expired"])
    def test_non_active_statuses_untouched(self, status):
        record = _record(NOW - timedelta(days=10), status=status)
        assert correct_status(record, NOW)["membership_status"] == status

    def test_expiry_exactly_now_is_not_expired(self):
        assert correct_status(_record(NOW), NOW)["membership_status"] == "active"

    def test_idempotent(self):
        record = _record(NOW - timedelta(days=3))
        once = correct_status(record, NOW)
        assert correct_status(once, NOW) == once

    def test_does_not_mutate_input(self):
        record = _record(NOW - timedelta(days=3))
        correct_status(record, NOW)
        assert record["membership_status"] == "active"


# ============================================
# Derived fields
# ============================================
class TestDerivedFields:
    def test_days_remaining_rounds_up(self):
        assert days_remaining(_record(NOW + timedelta(days=2, hours=1)), NOW) == 3

    def test_days_remaining_exact_days(self):
        assert days_remaining(_record(NOW + timedelta(days=5)), NOW) == 5

    def test_days_remaining_negative_after_expiry(self):
        assert days_remaining(_record(NOW - timedelta(days=4)), NOW) == -4

    def test_is_expired(self):
        assert is_expired(_record(NOW - timedelta(seconds=1)), NOW) is True
        assert is_expired(_record(NOW + timedelta(seconds=1)), NOW) is False

    def test_with_derived_fields_keeps_persisted_status(self):
        enriched = with_derived_fields(_record(NOW - timedelta(days=1)), NOW)
        assert enriched["is_expired"] is True
        assert enriched["days_remaining"] == -1
        assert enriched["membership_status"] == "active"


# ============================================
# Config parsing
# ============================================
class TestParsePairs:
    def test_parses_int_pairs(self):
        assert _parse_pairs("trial:7, basic:30", int) == {"trial": 7, "basic": 30}

    def test_skips_malformed_pairs(self):
        assert _parse_pairs("trial:7,broken,,elite:365", int) == {"trial": 7, "elite": 365}


# ============================================
# JSON log lines
# ============================================
class TestJSONFormatter:
    def test_line_names_module_and_request(self):
        record = logging.LogRecord(
            "membership_service.services.lifecycle_service", logging.INFO,
            __file__, 1, "Member deleted id=%s", ("m1",), None,
        )
        record.request_id = "req-1"
        line = json.loads(JSONFormatter().format(record))
        assert line["logger"] == "membership_service.services.lifecycle_service"
        assert line["message"] == "Member deleted id=m1"
        assert line["request_id"] == "req-1"
        assert line["service"] == "membership-service"

    def test_error_details(self):
        try:
            raise ValueError("boom")
        except ValueError:
            exc_info = sys.exc_info()
        record = logging.LogRecord("membership", logging.ERROR, __file__, 1, "failed", (), exc_info)
        line = json.loads(JSONFormatter().format(record))
        assert line["error"] == "boom"
        assert line["error_type"] == "ValueError"
        assert "request_id" not in line
