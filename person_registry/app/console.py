"""A text front end for the record management screen.

The console reads one command per line and drives a
:class:`ScreenController`.  Commands are processed one at a time: a
command that talks to the remote service is awaited to completion
before the next line is read.

Available commands::

    list                     show the people matching the current search
    search [text]            filter by name or email (no text clears it)
    new                      open the form for a new person
    edit <id>                open the form on an existing person
    set <field> <value>      fill a form field (name, email, phone_number,
                             birth_date as DD-MM-YYYY, gender)
    form                     show the form and its validation messages
    submit                   validate and save the form
    cancel                   close the form without saving
    delete <id>              delete a person
    reload                   fetch the collection again
    help                     show this help
    quit                     leave
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, List, Optional

from .core.config import Settings, settings as default_settings
from .core.dates import display_from_interchange, get_timezone
from .core.errors import FormStateError, NotFoundError
from .core.logging_config import setup_logging
from .schemas.person import Person
from .services.form_controller import FIELD_NAMES
from .services.notifications import Notification, Notifier
from .services.person_service import PersonService
from .services.screen_controller import ScreenController


logger = logging.getLogger(__name__)

COLUMNS = ("ID", "Name", "Email", "Gender", "Birth date", "Phone")


class PersonConsole:
    """Line oriented driver for a :class:`ScreenController`."""

    def __init__(self, screen: ScreenController, *, output: Callable[[str], None] = print) -> None:
        self.screen = screen
        self.output = output
        self.running = True
        self.screen.notifier.listener = self._show_notification
        self.handlers: Dict[str, Callable[[str], object]] = {
            "list": self._handle_list,
            "search": self._handle_search,
            "new": self._handle_new,
            "edit": self._handle_edit,
            "set": self._handle_set,
            "form": self._handle_form,
            "submit": self._handle_submit,
            "cancel": self._handle_cancel,
            "delete": self._handle_delete,
            "reload": self._handle_reload,
            "help": self._handle_help,
            "quit": self._handle_quit,
            "exit": self._handle_quit,
        }

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _show_notification(self, notification: Notification) -> None:
        marker = "✅" if notification.level == "success" else "❌"
        self.output(f"{marker} {notification.text}")

    def render_rows(self, people: List[Person]) -> List[List[str]]:
        return [
            [
                str(person.id),
                person.name,
                person.email,
                person.gender.value,
                display_from_interchange(person.birth_date, self.screen.tz),
                person.phone_number,
            ]
            for person in people
        ]

    def render_table(self) -> str:
        rows = self.render_rows(list(self.screen.people))
        if not rows:
            return "No people to show."
        widths = [max(len(row[i]) for row in [list(COLUMNS)] + rows) for i in range(len(COLUMNS))]
        lines = ["  ".join(cell.ljust(width) for cell, width in zip(COLUMNS, widths))]
        for row in rows:
            lines.append("  ".join(cell.ljust(width) for cell, width in zip(row, widths)))
        return "\n".join(lines)

    def render_form(self) -> str:
        form = self.screen.form
        if not form.is_open:
            return "The form is closed."
        lines = [form.title + (f" #{form.target_id}" if form.target_id is not None else "")]
        for name in FIELD_NAMES:
            value = form.fields.get(name)
            if hasattr(value, "value"):
                value = value.value
            line = f"  {name}: {'' if value is None else value}"
            if name in form.errors:
                line += f"  <- {form.errors[name]}"
            lines.append(line)
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Command handlers
    # ------------------------------------------------------------------
    def _handle_list(self, args: str) -> None:
        self.output(self.render_table())

    def _handle_search(self, args: str) -> None:
        self.screen.search(args.strip())
        self.output(self.render_table())

    def _handle_new(self, args: str) -> None:
        self.screen.open_new()
        self.output(self.render_form())

    def _handle_edit(self, args: str) -> None:
        person_id = self._parse_id(args, "edit")
        if person_id is None:
            return
        self.screen.open_edit(person_id)
        self.output(self.render_form())

    def _handle_set(self, args: str) -> None:
        name, _, value = args.strip().partition(" ")
        if not name:
            self.output("Usage: set <field> <value>")
            return
        self.screen.form.set_field(name, value.strip() or None)

    def _handle_form(self, args: str) -> None:
        self.output(self.render_form())

    async def _handle_submit(self, args: str) -> None:
        person = await self.screen.submit_form()
        if person is None and self.screen.form.errors:
            self.output(self.render_form())

    def _handle_cancel(self, args: str) -> None:
        self.screen.close_form()

    async def _handle_delete(self, args: str) -> None:
        person_id = self._parse_id(args, "delete")
        if person_id is None:
            return
        await self.screen.delete(person_id)

    async def _handle_reload(self, args: str) -> None:
        if await self.screen.reload():
            self.output(self.render_table())

    def _handle_help(self, args: str) -> None:
        self.output(__doc__.split("Available commands::", 1)[1].rstrip())

    def _handle_quit(self, args: str) -> None:
        self.running = False

    def _parse_id(self, args: str, command: str) -> Optional[int]:
        try:
            return int(args.strip())
        except ValueError:
            self.output(f"Usage: {command} <id>")
            return None

    # ------------------------------------------------------------------
    # Dispatcher
    # ------------------------------------------------------------------
    async def dispatch(self, line: str) -> None:
        """Process a single command line."""
        command, _, args = line.strip().partition(" ")
        if not command:
            return
        handler = self.handlers.get(command.lower())
        if handler is None:
            self.output(f"Unknown command {command!r}. Type 'help' for the list of commands.")
            return
        try:
            result = handler(args)
            if asyncio.iscoroutine(result):
                await result
        except NotFoundError as exc:
            self.output(str(exc))
        except (FormStateError, KeyError) as exc:
            self.output(str(exc).strip("'\""))

    async def run(self) -> None:
        await self.screen.start()
        self.output(self.render_table())
        while self.running:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break
            await self.dispatch(line)


async def main(config: Optional[Settings] = None) -> None:
    """Run the console screen against the configured person service."""
    config = config or default_settings
    setup_logging(config.log_level, config.log_file)
    service = PersonService.from_settings(config)
    screen = ScreenController(service, notifier=Notifier(), tz=get_timezone(config.timezone))
    try:
        await PersonConsole(screen).run()
    finally:
        service.close()
