import importlib

from typer.testing import CliRunner

from parley.clipboard import MemoryClipboard
from parley.config import Settings
from parley.dispatcher import DispatchResult
from parley.errors import ConfigurationError, ServiceRejectedError
from parley.session import SessionController

cli_app_module = importlib.import_module("parley.cli.app")


class _Dispatcher:
    def __init__(self, result: DispatchResult) -> None:
        self.result = result
        self.calls: list[str] = []

    async def send(self, question: str) -> DispatchResult:
        self.calls.append(question)
        return self.result


def _patch_controller(monkeypatch, result: DispatchResult, captured: dict[str, object]) -> _Dispatcher:
    dispatcher = _Dispatcher(result)

    def _fake_build_controller(*, url=None, timeout_seconds=None, clipboard=None):
        captured["url"] = url
        captured["timeout_seconds"] = timeout_seconds
        return SessionController(dispatcher=dispatcher, settings=Settings(), clipboard=clipboard or MemoryClipboard())

    monkeypatch.setattr(cli_app_module, "build_controller", _fake_build_controller)
    return dispatcher


def test_ask_prints_answer(monkeypatch) -> None:
    captured: dict[str, object] = {}
    dispatcher = _patch_controller(monkeypatch, DispatchResult(answer="The sky is blue [sky.pdf]."), captured)

    runner = CliRunner()
    result = runner.invoke(
        cli_app_module.app,
        ["ask", "Why is the sky blue?", "--url", "http://answers.test/chat", "--timeout", "5"],
    )

    assert result.exit_code == 0
    assert "The sky is blue [1]." in result.output
    assert "sky.pdf" in result.output
    assert dispatcher.calls == ["Why is the sky blue?"]
    assert captured == {"url": "http://answers.test/chat", "timeout_seconds": 5.0}


def test_ask_exits_non_zero_on_service_error(monkeypatch) -> None:
    _patch_controller(monkeypatch, DispatchResult(error=ServiceRejectedError(500, "Internal Server Error")), {})

    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["ask", "hello"])

    assert result.exit_code == 1
    assert "hello" in result.output
    assert Settings().api_error_message in result.output


def test_ask_rejects_blank_question(monkeypatch) -> None:
    dispatcher = _patch_controller(monkeypatch, DispatchResult(answer="unused"), {})

    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["ask", "   "])

    assert result.exit_code == 2
    assert dispatcher.calls == []


def test_invalid_configuration_exits(monkeypatch) -> None:
    def _broken_build_controller(**_kwargs):
        raise ConfigurationError("invalid answer service url: 'nope'")

    monkeypatch.setattr(cli_app_module, "build_controller", _broken_build_controller)

    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["ask", "hello", "--url", "nope"])

    assert result.exit_code == 1


def test_chat_command_runs_interactive_loop(monkeypatch) -> None:
    called: dict[str, object] = {}
    _patch_controller(monkeypatch, DispatchResult(answer="ok"), called)

    async def _fake_run_chat(controller, renderer) -> None:
        called["controller"] = controller
        called["renderer"] = renderer

    monkeypatch.setattr(cli_app_module, "run_chat", _fake_run_chat)

    runner = CliRunner()
    result = runner.invoke(cli_app_module.app, ["chat"])

    assert result.exit_code == 0
    assert isinstance(called["controller"], SessionController)
    assert called["url"] is None
