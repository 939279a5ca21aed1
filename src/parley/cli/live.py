"""Interactive chat loop."""

from __future__ import annotations

from loguru import logger

from parley.commands import (
    Command,
    CopyLastAnswer,
    ResetSession,
    SelectPrompt,
    SubmitQuestion,
    ToggleDefaultPrompts,
    is_quit,
    parse_command,
)
from parley.session import SessionController

from .render import Renderer


async def run_chat(controller: SessionController, renderer: Renderer) -> None:
    renderer.welcome()
    renderer.default_prompts(controller.state)
    while True:
        try:
            line = await renderer.get_user_input(default=controller.state.pending_question)
        except (KeyboardInterrupt, EOFError):
            break
        if is_quit(line):
            break
        command = parse_command(line, controller.state)
        if command is None:
            continue
        await handle_command(controller, renderer, command)
    renderer.info("Goodbye!")


async def handle_command(controller: SessionController, renderer: Renderer, command: Command) -> None:
    if isinstance(command, SubmitQuestion):
        with renderer.loading():
            accepted = await controller.dispatch(command)
        if accepted:
            renderer.exchange(controller.state)
        return

    result = await controller.dispatch(command)
    if isinstance(command, ResetSession):
        renderer.reset()
        renderer.default_prompts(controller.state)
    elif isinstance(command, CopyLastAnswer):
        if result:
            renderer.copied()
        else:
            renderer.error("Nothing to copy yet.")
    elif isinstance(command, ToggleDefaultPrompts):
        renderer.default_prompts(controller.state)
    elif isinstance(command, SelectPrompt):
        renderer.selected(result)
    else:
        logger.warning("cli.command.unhandled command={}", type(command).__name__)
