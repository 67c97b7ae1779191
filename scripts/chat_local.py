#!/usr/bin/env python3
"""
Interactive local chat harness (no HTTP).

Usage:
  python3 scripts/chat_local.py

What it does:
- Restores the persisted transcript through the same ChatSession the API uses
- Streams assistant replies into the terminal as they arrive
- Lets you browse, compare and "ask about" catalog products
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from insurance_guide.application.use_cases.chat_session import ChatSession  # noqa: E402
from insurance_guide.domain.entities.message import Message  # noqa: E402
from insurance_guide.domain.entities.product import ProductCategory  # noqa: E402
from insurance_guide.main import configure_logging  # noqa: E402
from insurance_guide.wiring.dependencies import get_chat_session  # noqa: E402

HELP = """Commands:
  /products [category]  -> list products (category: dental, ambulatorio, hospitalario, mybox, empresa)
  /ask <product_id>     -> ask the assistant about a product
  /compare <product_id> -> toggle a product in the comparison set
  /table                -> show the comparison table
  /history              -> show the transcript
  /clear                -> clear the transcript
  /quit                 -> exit"""

CATEGORY_ALIASES = {
    "dental": ProductCategory.DENTAL,
    "ambulatorio": ProductCategory.AMBULATORY,
    "hospitalario": ProductCategory.HOSPITAL,
    "mybox": ProductCategory.MYBOX,
    "empresa": ProductCategory.BUSINESS,
}


def _print_message(message: Message) -> None:
    who = "tú" if message.sender == "user" else "asistente"
    print(f"{who}: {message.text}")
    for i, source in enumerate(message.sources or (), start=1):
        print(f"    {i}. {source.title} <{source.uri}>")


class StreamPrinter:
    """Prints only the new suffix of the in-flight message."""

    def __init__(self) -> None:
        self._text = ""
        self.active = False

    def start(self) -> None:
        self._text = ""
        self.active = True

    def __call__(self, messages: list[Message]) -> None:
        last = messages[-1]
        if not self.active or last.sender != "assistant":
            return
        if not last.text.startswith(self._text):
            # replaced by the apology text
            print()
            self._text = ""
        print(last.text[len(self._text) :], end="", flush=True)
        self._text = last.text


async def _run_turn(session: ChatSession, printer: StreamPrinter, accepted: bool) -> None:
    if not accepted:
        print("(ignorado: mensaje vacío o respuesta en curso)")
        return
    print("asistente: ", end="", flush=True)
    printer.start()
    # chunks that arrived before start() are printed with the next one
    await session.wait()
    printer.active = False
    print()
    for i, source in enumerate(session.store.last.sources or (), start=1):
        print(f"    {i}. {source.title} <{source.uri}>")


def _show_products(session: ChatSession, arg: str) -> None:
    category = CATEGORY_ALIASES.get(arg.lower()) if arg else None
    if arg and category is None:
        print(f"Unknown category: {arg}")
        return
    session.selection.set_category_filter(category)
    for product in session.selection.visible_products():
        mark = "[x]" if session.selection.is_selected(product.id) else "[ ]"
        print(f"{mark} {product.id:<16} {product.name} ({product.category.value})")


def _show_table(session: ChatSession) -> None:
    if not session.selection.can_open_comparison:
        print("Selecciona al menos dos productos con /compare.")
        return
    table = session.comparison_table()
    print(" | ".join(("",) + table.product_names))
    for row in table.rows:
        cells = ["; ".join(c) if isinstance(c, tuple) else c for c in row.cells]
        print(" | ".join([row.title] + cells))


async def main() -> None:
    configure_logging()
    session = await get_chat_session()
    printer = StreamPrinter()
    session.store.subscribe(printer)

    print("\nLocal Chat Harness")
    print("-" * 60)
    for message in session.store.messages:
        _print_message(message)
    print("-" * 60)
    print("Type /help for commands.")

    while True:
        try:
            user_text = (await asyncio.to_thread(input, "\n> ")).strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        cmd, _, arg = user_text.partition(" ")
        cmd = cmd.lower()
        arg = arg.strip()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print(HELP)
        elif cmd == "/history":
            for message in session.store.messages:
                _print_message(message)
        elif cmd == "/clear":
            print("Historial borrado." if session.clear_history() else "Nada que borrar.")
        elif cmd == "/products":
            _show_products(session, arg)
        elif cmd == "/compare":
            if session.catalog.get_product(arg) is None:
                print(f"Unknown product: {arg}")
                continue
            selected = session.selection.toggle_compare(arg)
            summary = session.selection.summary()
            print(f"{'Añadido' if selected else 'Quitado'}. {summary.count} {summary.label}: {summary.names}")
        elif cmd == "/table":
            _show_table(session)
        elif cmd == "/ask":
            result = session.ask_about_product(arg)
            if result is None:
                print(f"Unknown product: {arg}")
                continue
            print(f"tú: {result.prompt}")
            await asyncio.sleep(0)  # let the session pick up the pending prompt
            await _run_turn(session, printer, session.is_loading)
        else:
            await _run_turn(session, printer, session.send(user_text) is not None)


if __name__ == "__main__":
    asyncio.run(main())
