# ===============================================
# tests/test_intent.py
# Intent scoring, persona weighting and entity extraction
# ===============================================

import pytest

from eyogi_bot.classify import Intent, IntentClassifier, Persona, PersonaDetector
from eyogi_bot.classify.intent import phrase_score

classifier = IntentClassifier()


@pytest.mark.parametrize("message", ["", "   ", "\t\n", "?!...", "--- ,,, ;;", "!!! ???"])
def test_blank_or_punctuation_falls_back_to_general_question(message):
    result = classifier.classify(message, Persona.GENERAL_VISITOR)
    assert result.intent == Intent.GENERAL_QUESTION
    assert result.confidence == 0.5
    assert result.entities == {}


def test_phrase_score_counts_words_and_whole_phrase():
    # how(1) + to(1) + enroll(2) + whole phrase(3)
    assert phrase_score("how to enroll", "how to enroll now") == 7


def test_enrollment_outranks_course_inquiry_for_prospective_student():
    message = "How do I enroll in a course?"
    raw = classifier.raw_scores(message)
    # enroll(5) + enroll in(6) against a course(6)
    assert raw[Intent.ENROLLMENT_PROCESS] == 11
    assert raw[Intent.COURSE_INQUIRY] == 6

    result = classifier.classify(message, Persona.PROSPECTIVE_STUDENT)
    assert result.intent == Intent.ENROLLMENT_PROCESS
    assert result.confidence == 1.0


def test_equal_scores_keep_declaration_order():
    # "refund" and "cost" both score 5; pricing_fees is declared before payment_issues
    result = classifier.classify("refund cost", Persona.GENERAL_VISITOR)
    assert result.intent == Intent.PRICING_FEES
    assert result.confidence == pytest.approx(0.5)


@pytest.mark.parametrize(
    "message, expected",
    [
        ("I need a refund for my course", Intent.PAYMENT_ISSUES),
        ("certificate for my course", Intent.CERTIFICATE_INFO),
        ("payment for the course", Intent.PRICING_FEES),
    ],
)
def test_mentioning_a_course_does_not_hijack_other_intents(message, expected):
    assert classifier.classify(message, Persona.GENERAL_VISITOR).intent == expected


@pytest.mark.parametrize("message", ["please send feedback", "I love coffee"])
def test_words_containing_fee_are_not_pricing(message):
    assert classifier.classify(message, Persona.GENERAL_VISITOR).intent == Intent.GENERAL_QUESTION


def test_fee_question_resolves_to_pricing_with_gurukul_entity():
    message = "what is the fee for sanskrit"
    persona = PersonaDetector().detect(message)
    result = classifier.classify(message, persona)
    assert result.intent == Intent.PRICING_FEES
    assert result.confidence == 1.0
    assert result.entities == {"gurukul": "sanskrit"}


def test_student_persona_boosts_progress():
    visitor = classifier.classify("my progress", Persona.GENERAL_VISITOR)
    student = classifier.classify("my progress", Persona.STUDENT)
    assert visitor.intent == student.intent == Intent.STUDENT_PROGRESS
    assert visitor.confidence == pytest.approx(0.6)
    assert student.confidence == pytest.approx(0.9)


def test_confidence_is_capped_at_one():
    result = classifier.classify("what courses are in the course catalog", Persona.GENERAL_VISITOR)
    assert result.intent == Intent.COURSE_INQUIRY
    assert result.confidence == 1.0


def test_classification_is_idempotent():
    message = "Which yoga course suits a 12 year old?"
    first = classifier.classify(message, Persona.PARENT)
    second = classifier.classify(message, Persona.PARENT)
    assert first == second


def test_entity_extraction_first_and_last_match_rules():
    entities = classifier.extract_entities(
        "Is C1234 or M5678 good for a 9 years old at intermediate or advanced level, about yoga and sanskrit?"
    )
    # regex entities keep the first match
    assert entities["course_number"] == "C1234"
    assert entities["age"] == "9"
    # vocabulary entities keep the last hit in vocabulary order
    assert entities["gurukul"] == "yoga"
    assert entities["level"] == "advanced"


def test_course_code_is_case_sensitive():
    assert "course_number" not in classifier.extract_entities("tell me about c1234")


def test_age_pattern_variants():
    assert classifier.extract_entities("my son is 7 years old")["age"] == "7"
    assert classifier.extract_entities("for a 12 Year Old")["age"] == "12"
