import json

import pytest

from nyaya_lite.analyzer import analyze
from nyaya_lite.errors import InvalidArgumentError
from nyaya_lite.models import RelevanceReason, Severity, UrgencyLevel


@pytest.mark.parametrize("query", ["", "   ", "\n\t"])
def test_blank_query_returns_sentinel(query, small_corpus):
    result = analyze(query, small_corpus)
    assert result.is_empty_query
    assert result.matches == []
    assert result.to_dict() == {"matches": [], "analysis": {}}


def test_non_string_query(small_corpus):
    with pytest.raises(InvalidArgumentError):
        analyze(None, small_corpus)
    with pytest.raises(ValueError):
        analyze(42, small_corpus)


@pytest.mark.parametrize("corpus", [None, 5, "theft", {"title": "Theft"}])
def test_non_sequence_corpus(corpus):
    with pytest.raises(InvalidArgumentError):
        analyze("my phone was stolen", corpus)


def test_empty_corpus_still_has_analysis():
    result = analyze("my phone was stolen", [])
    assert not result.is_empty_query
    assert result.matches == []
    assert result.analysis.primary_issue == "General"


def test_stolen_phone_on_the_street(small_corpus):
    result = analyze("my phone was stolen on the street by a stranger", small_corpus)
    assert result.matches[0].title == "Theft"
    assert result.scored[0].score == 10
    assert result.scored[0].relevance_reason == RelevanceReason.PARTIAL
    assert result.analysis.primary_issue == "Property Crime"
    assert result.analysis.contexts == ["public"]
    assert result.analysis.phrases_matched == []


def test_stolen_phone_phrase_bonus(small_corpus):
    result = analyze("phone stolen on the street", small_corpus)
    top = result.scored[0]
    assert top.record.title == "Theft"
    assert top.score == 30
    assert top.relevance_reason == RelevanceReason.STRONG
    assert result.analysis.phrases_matched == ["phone stolen"]
    assert "public" in result.analysis.contexts


def test_threat_with_knife_at_work_is_emergency(small_corpus):
    result = analyze("my boss is threatening me with a knife, please help immediately", small_corpus)
    analysis = result.analysis
    assert analysis.entities_detected.has_danger is True
    assert analysis.entities_detected.time_urgent is True
    assert analysis.contexts == ["workplace"]
    assert analysis.primary_issue == "Harassment"
    top = result.matches[0]
    assert top.title == "Workplace Harassment"
    assert top.severity == Severity.EMERGENCY
    assert analysis.urgency_level == UrgencyLevel.EMERGENCY
    # salary record rides on the workplace/Employment context rule
    assert analysis.related_issues == ["Employment"]


def test_gibberish_matches_nothing(small_corpus):
    result = analyze("asdkjasd qweqwe", small_corpus)
    assert result.matches == []
    assert result.analysis.primary_issue == "General"
    assert result.analysis.related_issues == []
    assert result.analysis.urgency_level == UrgencyLevel.NORMAL
    assert result.to_dict()["analysis"]["primary_issue"] == "General"


def test_top_five_cap_and_stable_ties(law_factory):
    corpus = [law_factory(f"Law {i}", "Property Crime", ["theft"]) for i in range(8)]
    result = analyze("theft", corpus)
    assert len(result.matches) == 5
    assert [m.title for m in result.matches] == [f"Law {i}" for i in range(5)]


def test_sorted_by_score_descending(law_factory):
    corpus = [
        law_factory("Minor", "A", ["wallet"]),
        law_factory("Major", "B", ["wallet", "theft"]),
    ]
    result = analyze("wallet theft", corpus)
    assert [m.title for m in result.matches] == ["Major", "Minor"]
    assert [m.score for m in result.scored] == sorted((m.score for m in result.scored), reverse=True)


def test_zero_scores_are_dropped(small_corpus):
    result = analyze("my salary is unpaid", small_corpus)
    assert all(m.score > 0 for m in result.scored)
    assert "Theft" not in [m.title for m in result.matches]


def test_related_issues_from_ranks_two_and_three(law_factory):
    corpus = [
        law_factory("One", "Property Crime", ["theft"]),
        law_factory("Two", "Property Crime", ["theft"]),
        law_factory("Three", "Cyber Crime", ["theft"]),
        law_factory("Four", "Family", ["theft"]),
    ]
    analysis = analyze("theft", corpus).analysis
    assert analysis.primary_issue == "Property Crime"
    assert analysis.related_issues == ["Cyber Crime"]


def test_deterministic(small_corpus):
    query = "my boss is threatening me with a knife, please help immediately"
    first = json.dumps(analyze(query, small_corpus).to_dict(), sort_keys=True)
    second = json.dumps(analyze(query, small_corpus).to_dict(), sort_keys=True)
    assert first == second


def test_single_emergency_match(law_factory):
    corpus = [law_factory("Theft", "Property Crime", ["theft"], severity=Severity.HIGH)]
    result = analyze("theft happening now", corpus)
    assert result.matches[0].severity == Severity.EMERGENCY
    assert result.analysis.urgency_level == UrgencyLevel.EMERGENCY


def test_low_only_is_normal(law_factory):
    corpus = [law_factory("Salary", "Employment", ["salary"], severity=Severity.LOW)]
    assert analyze("salary", corpus).analysis.urgency_level == UrgencyLevel.NORMAL


def test_input_records_not_mutated(theft_law):
    result = analyze("someone stole my phone, it was theft with a knife", [theft_law])
    assert result.matches[0].severity == Severity.HIGH
    assert theft_law.severity == Severity.MEDIUM
    assert result.matches[0] is not theft_law


def test_mapping_records_are_validated():
    corpus = [{"title": "Theft", "category": "Property Crime", "keywords": ["theft"], "severity": "Low"}]
    result = analyze("theft", corpus)
    assert result.matches[0].title == "Theft"
    assert result.matches[0].severity == Severity.LOW


def test_bad_records_are_skipped(theft_law):
    corpus = [
        {"keywords": ["theft"]},
        {"title": "", "category": "Property Crime", "keywords": ["theft"]},
        {"title": "Theft", "category": "Property Crime", "severity": "Catastrophic"},
        "junk",
        theft_law,
    ]
    result = analyze("theft", corpus)
    assert [m.id for m in result.matches] == ["theft"]


def test_extra_payload_is_carried_through():
    corpus = [{"title": "Theft", "category": "Property Crime", "keywords": ["theft"],
               "ipc_sections": ["379"], "helpline": "112"}]
    record = analyze("theft", corpus).to_dict()["matches"][0]
    assert record["ipc_sections"] == ["379"]
    assert record["helpline"] == "112"


def test_null_optional_fields_still_score():
    corpus = [{"title": "Theft", "category": "Property Crime", "keywords": None,
               "description": None, "severity": None, "steps": None}]
    result = analyze("theft", corpus)
    assert [m.title for m in result.matches] == ["Theft"]
    # title token only; null keywords/description contribute nothing
    assert result.scored[0].score == 5
    assert result.matches[0].severity == Severity.MEDIUM
    assert result.matches[0].keywords == []
