"""Tests for merchant name normalization."""

import pytest

from spendwise.domain.merchant import core_name, description_key, normalize_merchant


def test_strips_processor_prefix_and_location():
    core, prefix = normalize_merchant("SQ *JOES PIZZA 123 MAIN ST NY")
    assert core == "joes pizza"
    assert prefix == "sq"


def test_same_merchant_at_two_locations_shares_core_name():
    assert core_name("SQ *JOES PIZZA 456 OAK ST CA") == core_name("SQ *JOES PIZZA 123 MAIN ST NY")


@pytest.mark.parametrize(
    "description,expected",
    [
        ("TST* THE PUBLIC HOUSE", "the public house"),
        ("PAYPAL *SPOTIFY", "spotify"),
        ("CLV*HAPPY BONES", "happy bones"),
    ],
)
def test_recognized_prefixes(description, expected):
    assert core_name(description) == expected


def test_no_prefix_returns_none():
    core, prefix = normalize_merchant("Whole Foods Market")
    assert core == "whole foods market"
    assert prefix is None


def test_strips_store_number_and_state():
    assert core_name("Starbucks Store #123 NY") == "starbucks store"


def test_strips_bare_trailing_number():
    assert core_name("STARBUCKS STORE 123") == "starbucks store"


def test_strips_trailing_phone_number():
    assert core_name("COMCAST CABLE 800-266-2278 PA") == "comcast cable"


def test_strips_trailing_city():
    assert core_name("BLUE BOTTLE COFFEE SAN FRANCISCO CA") == "blue bottle coffee"


def test_collapses_whitespace():
    assert core_name("  Trader   Joe's   ") == "trader joe's"


def test_unknown_two_letter_suffix_is_kept():
    assert core_name("CAFE ZZ") == "cafe zz"


def test_returns_trimmed_input_when_everything_would_be_stripped():
    assert core_name(" #123 ") == "#123"


@pytest.mark.parametrize("description", ["", "   ", None])
def test_empty_input(description):
    assert normalize_merchant(description) == ("", None)


def test_description_key_ignores_case_punctuation_and_location():
    assert description_key("STARBUCKS STORE 123") == description_key("Starbucks Store #123 NY")
    assert description_key("STARBUCKS STORE 123") == "starbucksstore"


def test_description_key_is_truncated():
    key = description_key("The Very Long Merchant Name Incorporated")
    assert key == "theverylongmerchantn"
    assert len(key) == 20
