"""Operator input."""

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt


class Prompter:
    """Reads one line of operator input per question.

    An empty answer is returned as ``""`` so callers decide what the default
    means; nothing here retries or validates. Questions are printed literally,
    so hints such as ``[y/N]`` are never taken for markup.
    """

    def __init__(self, console: Console, prompt_cls=Prompt, stream=None):
        self.console = console
        self.prompt_cls = prompt_cls
        self.stream = stream

    def ask(self, question: str, password: bool = False) -> str:
        answer = self.prompt_cls.ask(
            escape(question),
            console=self.console,
            default="",
            show_default=False,
            password=password,
            stream=self.stream,
        )
        return (answer or "").strip()
