from nyaya_lite.analyzer.entities import (
    detect_contexts,
    extract,
    extract_entities,
    match_phrases,
)
from nyaya_lite.models import EntitySignals


def test_blank_input_yields_empty_signals():
    for text in ("", "   "):
        entities, contexts, phrases = extract(text)
        assert entities == EntitySignals()
        assert contexts == []
        assert phrases == []


def test_money_in_rupees():
    assert extract_entities("I lost 5000 rupees to a scammer").money_amount == "5000"


def test_rs_abbreviation_case_insensitive():
    assert extract_entities("He took 200 Rs. from me").money_amount == "200"


def test_lakh_first_match_only():
    assert extract_entities("paid 10 lakh and then 20 rupees more").money_amount == "10"


def test_rupee_symbol():
    assert extract_entities("charged 750 ₹ extra").money_amount == "750"


def test_no_money_amount():
    assert extract_entities("they took my money").money_amount is None


def test_danger_substring():
    entities = extract_entities("He keeps threatening me")
    assert entities.has_danger is True
    assert entities.involves_child is False
    assert entities.time_urgent is False


def test_child_and_urgency():
    entities = extract_entities("My daughter is missing, please help ASAP")
    assert entities.involves_child is True
    assert entities.time_urgent is True
    assert entities.has_danger is False


def test_no_signal_terms():
    assert extract_entities("my landlord will not return the deposit") == EntitySignals()


def test_multiple_contexts_in_fixed_order():
    assert detect_contexts("My husband's boss came to the office") == ["workplace", "family"]


def test_public_context():
    assert detect_contexts("a stranger on the street") == ["public"]


def test_student_context():
    assert detect_contexts("Seniors at my COLLEGE") == ["student"]


def test_no_context():
    assert detect_contexts("asdkjasd qweqwe") == []


def test_phrases_in_list_order():
    assert match_phrases("Account hacked right after an OTP fraud call") == ["otp fraud", "account hacked"]


def test_phrase_must_be_verbatim():
    assert match_phrases("my phone was stolen") == []
    assert match_phrases("my phone stolen today") == ["phone stolen"]
