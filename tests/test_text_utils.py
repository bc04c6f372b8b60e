"""
Tests for the shared canonicalization helpers
"""
import pytest

from showmatch.text_utils import (
    canonical_tokens,
    extract_title_text,
    is_parenthetical_variant,
    make_query_string,
    parse_year,
    replace_punctuation,
    strip_parenthetical_suffix,
)


@pytest.mark.parametrize("raw, expected", [
    ("The.Night.Manager", "The Night Manager"),
    ("Marvel's Agents of S.H.I.E.L.D.", "Marvels Agents of S H I E L D"),
    ("Law & Order: SVU", "Law and Order SVU"),
    ("Some_Show  -  2010", "Some Show 2010"),
    ("", ""),
    (None, ""),
])
def test_replace_punctuation(raw, expected):
    assert replace_punctuation(raw) == expected


def test_canonical_tokens_lowercases_and_collapses():
    assert canonical_tokens("  Mr.   Robot ") == "mr robot"
    assert canonical_tokens("Doctor Who (2005)") == "doctor who 2005"


def test_make_query_string_is_idempotent():
    once = make_query_string("The.Office.(US)")
    assert once == "the office us"
    assert make_query_string(once) == once


@pytest.mark.parametrize("text, year", [
    ("Archer (2010)", 2010),
    ("Some Show 2011", 2011),
    ("2005 Doctor Who", 2005),
    ("Show2011", None),
    ("Show 20111", None),
    ("Show 1899", None),
    ("", None),
    (None, None),
])
def test_parse_year(text, year):
    assert parse_year(text) == year


def test_strip_parenthetical_suffix():
    assert strip_parenthetical_suffix("The Office (US)") == "The Office"
    assert strip_parenthetical_suffix("The Office") == "The Office"
    assert strip_parenthetical_suffix(None) == ""


def test_is_parenthetical_variant():
    assert is_parenthetical_variant("The Night Manager (IN)", "The Night Manager")
    assert is_parenthetical_variant("the night manager (CN)", "The Night Manager")
    assert not is_parenthetical_variant("The Night Manager", "The Night Manager")
    assert not is_parenthetical_variant("The Night Managers (IN)", "The Night Manager")
    assert not is_parenthetical_variant("The Night Manager ()", "The Night Manager")
    assert not is_parenthetical_variant("", "The Night Manager")


def test_extract_title_text_standard_marker():
    assert extract_title_text("CHiPs.S03E18.Off.Road.1080p.WEBRip", 3, 18) == "Off Road"


def test_extract_title_text_with_known_resolution():
    assert extract_title_text("Show.S01E02.Pilot.Part.2.720p.x264", 1, 2, resolution="720p") == "Pilot Part 2"


def test_extract_title_text_alternate_marker():
    assert extract_title_text("Show.3x18.Crash.Diet.HDTV", 3, 18) == "Crash Diet"


def test_extract_title_text_strips_codec_tags():
    assert extract_title_text("Show_S02E05_Rainy_Day_WEB-DL_AAC", 2, 5) == "Rainy Day"


def test_extract_title_text_nothing_left():
    assert extract_title_text("Show.S02E05.1080p.WEBRip", 2, 5) is None


def test_extract_title_text_missing_inputs():
    assert extract_title_text(None, 1, 1) is None
    assert extract_title_text("Show.S01E01.Pilot", None, 1) is None
    assert extract_title_text("Show.S01E01.Pilot", 2, 1) is None
