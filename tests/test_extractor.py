# File: tests/test_extractor.py
import pytest

from lead_miner.crawler.models import PageResult
from lead_miner.extractor import (
    BOILERPLATE_PHRASES,
    extract,
    find_emails,
    find_names,
    find_phones,
    is_boilerplate,
)


def test_contact_line_yields_email_and_phone():
    result = extract("Contact: jane@acme.com or 415-555-0199")
    assert result.emails == ["jane@acme.com"]
    assert result.phones == ["415-555-0199"]
    assert result.names == []
    assert result.links is None


def test_extract_is_deterministic():
    text = "Jane Doe <jane@acme.com> (415) 555-0199, John Smith john@acme.com"
    assert extract(text) == extract(text)


def test_empty_text_gives_empty_result():
    assert extract("") == PageResult()
    assert extract("nothing to see here") == PageResult()


@pytest.mark.parametrize("repeat", [1, 2, 5])
def test_repeated_email_reported_once(repeat):
    text = " ".join(["write to name@domain.com"] * repeat)
    assert find_emails(text) == ["name@domain.com"]


def test_emails_keep_first_seen_order_and_strip_trailing_dot():
    text = "b@second.org, a@first.com and info@example.co.uk."
    assert find_emails(text) == ["b@second.org", "a@first.com", "info@example.co.uk"]


def test_email_requires_alpha_tld():
    assert find_emails("user@host.c1 user@localhost") == []


@pytest.mark.parametrize(
    "text,expected",
    [
        ("Call 415-555-0199 now", "415-555-0199"),
        ("Call (415) 555-0199 now", "(415) 555-0199"),
        ("Call 415.555.0199 now", "415.555.0199"),
        ("Call 1-415-555-0199 now", "1-415-555-0199"),
        ("Call +1 (415) 555-0199 ext. 12 now", "+1 (415) 555-0199 ext. 12"),
        ("Call 212 555 0100 x204", "212 555 0100 x204"),
        ("Call 555-0199 now", "555-0199"),
    ],
)
def test_valid_nanp_numbers(text, expected):
    assert find_phones(text) == [expected]


@pytest.mark.parametrize(
    "text",
    [
        "Call 115-555-0199 now",  # area code starts with 1
        "Call 055-555-0199 now",  # area code starts with 0
        "Call 415-155-0199 now",  # exchange starts with 1
        "Call 415-311-0199 now",  # N11 exchange
        "Order 4155550199123 shipped",
    ],
)
def test_invalid_numbers_are_not_reported(text):
    assert find_phones(text) == []


def test_phone_duplicates_collapse():
    assert find_phones("415-555-0199 / 415-555-0199") == ["415-555-0199"]


def test_names_are_two_capitalized_words():
    assert find_names("Our team: Jane Doe, John Smith and Al Bo.") == ["Jane Doe", "John Smith"]


def test_names_filter_boilerplate():
    text = "Read our Cookie Policy and Return Policy. Signed, Mary Jones"
    assert find_names(text) == ["Mary Jones"]


@pytest.mark.parametrize(
    "candidate", ["ALL RIGHTS RESERVED", "privacy policy", "See Terms Of Service Today", "Contact Us"]
)
def test_is_boilerplate_ignores_case(candidate):
    assert is_boilerplate(candidate)


def test_is_boilerplate_accepts_real_names():
    assert not is_boilerplate("Jane Doe")


def test_every_denylisted_phrase_is_filtered():
    for phrase in BOILERPLATE_PHRASES:
        assert is_boilerplate(phrase.upper())
