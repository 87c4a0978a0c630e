"""Tests for the string enums used in logs and records.

Python 3.13+.
"""

from langhelper import MissReason, SelectionOrigin, SourceKind


class TestStrEnums:
    def test_source_kind_str(self) -> None:
        assert str(SourceKind.ASSET) == "asset"
        assert f"{SourceKind.NETWORK} source" == "network source"

    def test_miss_reason_values(self) -> None:
        assert {reason.value for reason in MissReason} == {
            "unsupported_code",
            "missing_translation",
            "condition_param_missing",
            "conditional_branch_miss",
        }

    def test_selection_origin_compares_to_str(self) -> None:
        assert SelectionOrigin.CACHE == "cache"
