from parley.transcript import Transcript
from parley.types import Message


def _message(text: str, *, user: bool = True) -> Message:
    return Message(text=text, timestamp="9:00 AM", is_user_message=user)


def test_append_returns_new_snapshot() -> None:
    empty = Transcript()
    first = empty.append(_message("one"))
    second = first.append(_message("two", user=False))

    assert len(empty) == 0
    assert [m.text for m in first] == ["one"]
    assert [m.text for m in second] == ["one", "two"]
    assert second.last() == _message("two", user=False)


def test_last_on_empty_is_none() -> None:
    assert Transcript().last() is None


def test_clear_empties_without_touching_original() -> None:
    transcript = Transcript().append(_message("one"))
    cleared = transcript.clear()

    assert len(cleared) == 0
    assert len(transcript) == 1
    assert transcript[0].text == "one"
    assert transcript != cleared
