"""Interactive numbered menu."""

import logging
from typing import Callable, Dict, Tuple

from rich.console import Console

logger = logging.getLogger("chatwootctl")

EXIT_CHOICE = "5"


class MenuDispatcher:
    """Prints the menu, reads one choice and runs it until the operator exits.

    ``ManagerError`` is not caught here: dependency or privilege failures end
    the session.
    """

    def __init__(self, manager, prompter, console: Console):
        self.manager = manager
        self.prompter = prompter
        self.console = console
        self.actions: Dict[str, Tuple[str, Callable]] = {
            "1": ("🌍 Install / update Chatwoot", manager.install_or_update),
            "2": ("📊 Show status", manager.show_status),
            "3": ("🔄 Restart services", manager.restart_service),
            "4": ("🧹 Uninstall Chatwoot", manager.uninstall_all),
        }

    def show_menu(self):
        self.console.print()
        self.console.print(f"[green]========= {self.manager.preset.title} =========[/green]")
        for key, (label, _action) in self.actions.items():
            self.console.print(f"{key}) {label}", markup=False)
        self.console.print(f"{EXIT_CHOICE}) ❌ Exit", markup=False)

    def dispatch(self, choice: str) -> bool:
        """Run ``choice``; return False when the loop should stop."""
        if choice == EXIT_CHOICE:
            return False

        entry = self.actions.get(choice)
        if entry is None:
            self.console.print("[yellow]⚠ Invalid choice, please try again[/yellow]")
            return True

        label, action = entry
        logger.debug("Menu choice %s: %s", choice, label)
        action()
        return True

    def run(self) -> int:
        while True:
            self.show_menu()
            try:
                choice = self.prompter.ask(f"Select [1-{EXIT_CHOICE}]")
            except EOFError:
                return 0
            except KeyboardInterrupt:
                self.console.print()
                self.console.print("[bold red]Operation cancelled by user.[/bold red]")
                return 130

            if not self.dispatch(choice):
                return 0
