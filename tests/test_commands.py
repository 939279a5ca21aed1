from parley.commands import (
    CopyLastAnswer,
    ResetSession,
    SelectPrompt,
    SubmitQuestion,
    ToggleDefaultPrompts,
    is_quit,
    parse_command,
    selectable_prompts,
)
from parley.transcript import Transcript
from parley.types import Message, SessionState, SessionStatus

PROMPTS = ("first prompt", "second prompt")


def _answered_state() -> SessionState:
    transcript = (
        Transcript()
        .append(Message(text="q", timestamp="1:00 PM", is_user_message=True))
        .append(Message(text="a", timestamp="1:00 PM", is_user_message=False, followup_questions=("why?", "how?")))
    )
    return SessionState(
        status=SessionStatus.ANSWERED,
        transcript=transcript,
        chat_started=True,
        default_prompts_visible=False,
        default_prompts=PROMPTS,
    )


def test_slash_commands() -> None:
    state = SessionState(default_prompts=PROMPTS)

    assert parse_command("/reset", state) == ResetSession()
    assert parse_command(" /COPY ", state) == CopyLastAnswer()
    assert parse_command("/prompts", state) == ToggleDefaultPrompts()


def test_blank_and_quit_lines_produce_no_command() -> None:
    state = SessionState()

    assert parse_command("   ", state) is None
    assert parse_command("/quit", state) is None
    assert is_quit("/exit")
    assert is_quit(" /QUIT ")
    assert not is_quit("/exit plan")


def test_bare_quit_words_are_ordinary_questions() -> None:
    state = SessionState()

    for word in ("quit", "exit", "q"):
        assert not is_quit(word)
        assert parse_command(word, state) == SubmitQuestion(word)


def test_free_text_is_submitted_trimmed() -> None:
    assert parse_command("  what is the refund policy?  ", SessionState()) == SubmitQuestion("what is the refund policy?")


def test_pick_default_prompt_by_number() -> None:
    state = SessionState(default_prompts=PROMPTS)

    assert selectable_prompts(state) == list(PROMPTS)
    assert parse_command("#2", state) == SelectPrompt("second prompt")
    assert parse_command("#3", state) is None
    assert parse_command("#0", state) is None


def test_pick_followup_after_answer() -> None:
    state = _answered_state()

    assert selectable_prompts(state) == ["why?", "how?"]
    assert parse_command("#1", state) == SelectPrompt("why?")
