import pytest

from nyaya_lite.analyzer.scoring import build_query, relevance_reason, score, score_record
from nyaya_lite.models import EntitySignals, RelevanceReason


def _score(text, law):
    return score_record(build_query(text), law)


def test_phrase_keyword_bonus_plus_stemmed_keyword(theft_law):
    # "stolen" sits inside the matched phrase (+20) and is a query token (+10)
    assert _score("my phone stolen yesterday", theft_law) == 30


def test_phrase_in_title(law_factory):
    law = law_factory("Hit and Run Accident", "Road Accident")
    # phrase in title (+25) plus title tokens hit/and/run (+5 each)
    assert _score("it was a hit and run", law) == 25 + 15


def test_stemmed_keyword_match(law_factory):
    law = law_factory("Intimidation", "Harassment", ["threatening"])
    assert _score("he threatens me", law) == 10


def test_fuzzy_keyword_tolerates_one_typo(law_factory):
    law = law_factory("Theft", "Property Crime", ["theft"])
    assert _score("someone did theift of my bag", law) == 8


def test_fuzzy_counts_every_near_miss_token(law_factory):
    law = law_factory("Theft", "Property Crime", ["theft"])
    assert _score("thef theift", law) == 16


def test_fuzzy_skipped_when_stem_matches(law_factory):
    law = law_factory("Theft", "Property Crime", ["theft"])
    # exact stem hit scores +10 and the title token +5; no fuzzy bonus on top
    assert _score("theft", law) == 15


def test_title_token_points(law_factory):
    law = law_factory("Cheating and Fraud", "Cyber Crime")
    assert _score("fraud by cheating", law) == 10


def test_description_token_points(law_factory):
    law = law_factory("Notice", "Civil", description="Tenant eviction without notice")
    assert _score("eviction of tenant", law) == 2


def test_workplace_employment(law_factory):
    law = law_factory("Unpaid Dues", "Employment")
    assert _score("my manager", law) == 15


def test_workplace_rules_stack(law_factory):
    law = law_factory("Unpaid Dues", "Employment Harassment")
    assert _score("my manager", law) == 25


def test_family_harassment(law_factory):
    law = law_factory("Cruelty", "Family Harassment")
    assert _score("my husband", law) == 25


def test_student_ragging_title(law_factory):
    law = law_factory("Ragging", "Education")
    assert _score("trouble at college", law) == 20


def test_category_needle_is_case_sensitive(law_factory):
    law = law_factory("Dues", "employment")
    assert _score("my manager", law) == 0


def test_child_category_boost(law_factory):
    law = law_factory("Abuse", "Child Protection")
    assert _score("my baby", law) == 15


def test_unrelated_query_scores_zero(theft_law):
    assert _score("asdkjasd qweqwe", theft_law) == 0


def test_score_wrapper_extracts_missing_signals(theft_law):
    assert score("my phone stolen yesterday", theft_law) == 30


def test_score_wrapper_uses_supplied_signals(law_factory):
    law = law_factory("Abuse", "Child Protection")
    assert score("nothing relevant", law, entities=EntitySignals(involves_child=True)) == 15
    assert score("nothing relevant", law, phrases=[], contexts=[], entities=EntitySignals()) == 0


@pytest.mark.parametrize("points,expected", [
    (0, None),
    (1, RelevanceReason.PARTIAL),
    (10, RelevanceReason.PARTIAL),
    (11, RelevanceReason.GOOD),
    (20, RelevanceReason.GOOD),
    (21, RelevanceReason.STRONG),
])
def test_relevance_reason_thresholds(points, expected):
    assert relevance_reason(points) == expected
