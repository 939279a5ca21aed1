from parley.annotations import AnnotationParser
from parley.types import Citation


def test_plain_text_passes_through() -> None:
    parsed = AnnotationParser().parse("  The sky is blue.  ")

    assert parsed.display_text == "The sky is blue."
    assert parsed.citations == ()
    assert parsed.following_steps == ()
    assert parsed.followup_questions == ()


def test_citations_are_numbered_by_first_appearance() -> None:
    parsed = AnnotationParser().parse("Refunds take 5 days [policy.pdf]. Fees apply [fees.pdf] [policy.pdf].")

    assert parsed.display_text == "Refunds take 5 days [1]. Fees apply [2] [1]."
    assert parsed.citations == (Citation(1, "policy.pdf"), Citation(2, "fees.pdf"))


def test_followup_questions_are_extracted_in_order() -> None:
    raw = "You can cancel any time.\n\nNext questions:\n<<How do I cancel?>>\n<<Is there a fee?>>"

    parsed = AnnotationParser().parse(raw)

    assert parsed.display_text == "You can cancel any time."
    assert parsed.followup_questions == ("How do I cancel?", "Is there a fee?")


def test_numbered_steps_after_lead_in_are_extracted() -> None:
    raw = "To book a rental:\n1. Search listings [guide.pdf]\n2. Pick dates\n3. Pay\nEnjoy your stay."

    parsed = AnnotationParser().parse(raw)

    assert parsed.display_text == "To book a rental:\nEnjoy your stay."
    assert parsed.following_steps == ("Search listings [1]", "Pick dates", "Pay")
    assert parsed.citations == (Citation(1, "guide.pdf"),)


def test_numbered_lines_without_lead_in_stay_in_text() -> None:
    raw = "1. First point\n2. Second point"

    parsed = AnnotationParser().parse(raw)

    assert parsed.display_text == raw
    assert parsed.following_steps == ()
