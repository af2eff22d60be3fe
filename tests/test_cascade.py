"""Tests for the ordered-rule cascade driver."""

import re

from parsing.cascade import NO_MATCH, OutcomeKind, apply_rule, run_cascade
from parsing.patterns import ALBUM_RULES, TRACK_RULES, PatternRule


def make_rule(name, pattern):
    return PatternRule(name, re.compile(pattern))


RULES = (
    make_rule("never", r"(?P<a>zzz)"),
    make_rule("second", r"(?P<b>abc)"),
    make_rule("third", r"(?P<c>ab)"),
)


def test_first_matching_rule_wins():
    outcome = run_cascade(RULES, "abc")

    assert outcome.kind is OutcomeKind.MATCHED
    assert outcome.matched
    assert outcome.rule.name == "second"
    assert outcome.match.group('b') == "abc"


def test_no_rule_matching_gives_no_match():
    outcome = run_cascade(RULES, "xyz")

    assert outcome is NO_MATCH
    assert not outcome.matched


def test_invalid_match_stops_the_cascade():
    seen = []

    def reject_everything(match, text):
        seen.append(match.re.pattern)
        return "bad date"

    outcome = run_cascade(RULES, "abc", reject_everything)

    assert outcome.kind is OutcomeKind.MATCHED_INVALID
    assert outcome.rule.name == "second"
    assert outcome.reason == "bad date"
    assert seen == [r"(?P<b>abc)"]


def test_apply_rule_without_date_check():
    assert apply_rule(RULES[0], "abc") is NO_MATCH
    assert apply_rule(RULES[2], "xab").matched


def test_rule_slots_are_named_groups():
    assert RULES[1].slots() == frozenset({'b'})
    assert {'artist', 'album', 'releaseyear'} <= ALBUM_RULES[-1].slots()
    assert 'trackNumber' in TRACK_RULES[0].slots()


def test_rule_tables_are_ordered_and_complete():
    assert len(TRACK_RULES) == 5
    assert len(ALBUM_RULES) == 20
    assert ALBUM_RULES[0].name == "rutracker discography"
    assert ALBUM_RULES[-1].name == "artist-year-album"
