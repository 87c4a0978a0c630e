"""Tests for LanguageCode.

Python 3.13+.
"""

import pytest
from hypothesis import given

from langhelper import LanguageCode, UnknownLanguageCodeError
from langhelper.diagnostics import DiagnosticCode
from tests.strategies import language_code_strings


class TestLookup:
    """lookup() never raises."""

    def test_known_code(self) -> None:
        code = LanguageCode.lookup("vi")
        assert code is not None
        assert code.code == "vi"

    def test_hyphenated_input_normalized(self) -> None:
        code = LanguageCode.lookup("en-us")
        assert code is not None
        assert code.code == "en_US"

    @pytest.mark.parametrize("value", ["xx", "", "../en", "not a code"])
    def test_unknown_returns_none(self, value: str) -> None:
        assert LanguageCode.lookup(value) is None

    def test_non_string_returns_none(self) -> None:
        assert LanguageCode.lookup(42) is None  # type: ignore[arg-type]

    def test_language_code_passthrough(self) -> None:
        vi = LanguageCode.parse("vi")
        assert LanguageCode.lookup(vi) == vi

    def test_hand_built_code_revalidated(self) -> None:
        assert LanguageCode.lookup(LanguageCode("xx_YY")) is None
        with pytest.raises(UnknownLanguageCodeError):
            LanguageCode.parse(LanguageCode("xx_YY"))

    def test_hand_built_code_gets_names(self) -> None:
        code = LanguageCode.lookup(LanguageCode("vi"))
        assert code is not None
        assert code.name == "Vietnamese"

    @given(code=language_code_strings())
    def test_pool_codes_resolve(self, code: str) -> None:
        assert LanguageCode.lookup(code) is not None


class TestParse:
    """parse() raises for unknown codes."""

    def test_unknown_raises(self) -> None:
        with pytest.raises(UnknownLanguageCodeError) as exc_info:
            LanguageCode.parse("xx")
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.UNKNOWN_LANGUAGE_CODE

    def test_unknown_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="Unknown language code"):
            LanguageCode.parse("xx")


class TestDisplayNames:
    """Display names come from CLDR."""

    def test_english_and_native_names(self) -> None:
        vi = LanguageCode.parse("vi")
        assert vi.name == "Vietnamese"
        assert vi.native_name == "Tiếng Việt"

    def test_regional_name(self) -> None:
        assert LanguageCode.parse("en_US").name == "English (United States)"


class TestIdentity:
    """Equality and hashing use the code only."""

    def test_names_ignored_in_equality(self) -> None:
        assert LanguageCode("vi") == LanguageCode.parse("vi")

    def test_hash_matches(self) -> None:
        assert hash(LanguageCode("vi")) == hash(LanguageCode.parse("vi"))

    def test_usable_as_dict_key(self) -> None:
        table = {LanguageCode.parse("vi"): 1}
        assert table[LanguageCode("vi")] == 1

    def test_str(self) -> None:
        assert str(LanguageCode.parse("en_US")) == "en_US"


class TestSubtags:
    """language, territory and base accessors."""

    def test_language(self) -> None:
        assert LanguageCode.parse("pt_BR").language == "pt"

    def test_territory(self) -> None:
        assert LanguageCode.parse("en_US").territory == "US"
        assert LanguageCode.parse("en").territory is None

    def test_territory_of_unknown_code(self) -> None:
        assert LanguageCode("xx_YY").territory == "YY"
        assert LanguageCode("../x").territory is None

    def test_base(self) -> None:
        assert LanguageCode.parse("fr_CA").base == LanguageCode.parse("fr")
        assert LanguageCode.parse("fr").base is None


class TestAll:
    """all() enumerates the CLDR universe."""

    def test_contains_common_codes(self) -> None:
        universe = LanguageCode.all()
        assert LanguageCode.parse("en") in universe
        assert LanguageCode.parse("vi") in universe

    def test_excludes_root(self) -> None:
        assert all(code.code != "root" for code in LanguageCode.all())

    def test_sorted(self) -> None:
        codes = [code.code for code in LanguageCode.all()]
        assert codes == sorted(codes)
