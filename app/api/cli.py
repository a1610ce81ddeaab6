"""
Interactive terminal front-end for the generation dispatcher.

Architectural role:
- Terminal rendition of the interaction surface.
- Holds one `ChatSession` and forwards prompts to the dispatcher over HTTP.
- Prints history entries with `app.client.render`.

Interface responsibilities:
- Accept stdin prompts and print results to stdout.
- Handle local session control commands.

Request lifecycle (per user turn):
1. Read a single line from stdin.
2. Handle local commands (`exit`/`quit`, `/text`, `/image`, `/mode`,
   `/reasoning`, `/history`, `/help`).
3. Otherwise set it as the session prompt and call `ChatSession.submit`.
4. Print the inline error, or the new entry (and reasoning when shown).

Input validation behavior:
- Empty input is handed to the session, which reports the local validation
  error without calling the dispatcher.

Error handling strategy:
- Handles EOF and keyboard interrupts without traceback output.
- Dispatcher and transport errors are shown inline; the loop continues.
"""

import sys

from app.client.render import IMAGE, PLAIN, render_entry
from app.client.session import ChatSession
from app.client.transport import DispatcherTransport
from app.core.log_setup import configure_logging
from app.core.routing_types import Mode
from app.llm.provider_config import get_settings

MODE_LABELS = {
    Mode.TEXT: "Olympic Coder",
    Mode.IMAGE: "Image Generation",
}

HELP_TEXT = """
Commands:
 /text               switch to text generation
 /image              switch to image generation
 /mode <text|image>  switch mode explicitly
 /reasoning          show/hide reasoning of the last text answer
 /history            print all results, newest first
 exit | quit         leave
"""


# =========================================================
# UTF-8 SAFE OUTPUT
# Best-effort stdout encoding normalization for interactive terminals.
# =========================================================

if hasattr(sys.stdout, "reconfigure"):
    try:
        sys.stdout.reconfigure(encoding="utf-8", errors="ignore")
    except (AttributeError, ValueError):
        pass


# =========================================================
# RENDERING
# =========================================================

def format_entry(entry) -> str:
    rendered = render_entry(entry)

    if rendered.kind == IMAGE:
        body = f"[image] {rendered.body}"
    elif rendered.kind == PLAIN:
        body = rendered.body
    else:
        body = rendered.body.strip()

    return f"> {entry.prompt}\n\n{body}"


def print_reasoning(session: ChatSession, out=sys.stdout):
    if not session.reasoning:
        print("No reasoning available.", file=out)
        return
    marker = "v" if session.show_reasoning else "^"
    print(f"Reasoning {marker}", file=out)
    if session.show_reasoning:
        print(session.reasoning, file=out)


def handle_command(session: ChatSession, command: str, out=sys.stdout) -> bool:
    """
    Apply a local command.

    Returns:
        True when `command` was a local command (handled here), False when it
        should be submitted as a prompt.
    """
    lowered = command.lower()

    if lowered in ("/text", "/image"):
        session.set_mode(Mode(lowered[1:]))
        print(f"Mode: {MODE_LABELS[session.mode]}", file=out)
        return True

    if lowered.startswith("/mode"):
        parts = lowered.split()
        if len(parts) != 2 or parts[1] not in (m.value for m in Mode):
            print("Usage: /mode <text|image>", file=out)
            print(f"Current mode: {session.mode.value}", file=out)
            return True
        session.set_mode(Mode(parts[1]))
        print(f"Mode: {MODE_LABELS[session.mode]}", file=out)
        return True

    if lowered == "/reasoning":
        session.toggle_reasoning()
        print_reasoning(session, out=out)
        return True

    if lowered == "/history":
        if not session.history:
            print("No results yet.", file=out)
        for entry in session.history:
            print(format_entry(entry), file=out)
            print("-" * 60, file=out)
        return True

    if lowered in ("/help", "help"):
        print(HELP_TEXT, file=out)
        return True

    return False


def run_turn(session: ChatSession, text: str, out=sys.stdout):
    """Submit `text` and print the outcome."""
    session.prompt = text
    entry = session.submit()

    if session.error:
        print(f"\nError: {session.error}\n", file=out)
        return

    if entry is None:
        return

    print("\n" + format_entry(entry) + "\n", file=out)
    if session.reasoning and session.show_reasoning:
        print_reasoning(session, out=out)


# =========================================================
# MAIN
# =========================================================

def main():
    """
    Run the interactive loop.

    Error handling strategy:
    - EOF/interrupt end the session without stack traces.
    - Every other failure is reported inline by the session.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    session = ChatSession(DispatcherTransport(settings.dispatcher_url))

    print(f"{settings.app_title} started. (Type 'exit' to quit, '/help' for commands)")
    print(f"Dispatcher: {settings.dispatcher_url}")
    print(f"Mode: {MODE_LABELS[session.mode]}")
    print("-" * 60)

    while True:

        try:
            text = input("Prompt: ").strip()

        except EOFError:
            print()
            break

        except KeyboardInterrupt:
            print("\nOperation cancelled by user.")
            break

        if text.lower() in ("exit", "quit"):
            print("Shutting down.")
            break

        if handle_command(session, text):
            continue

        print("\nGenerating...")
        run_turn(session, text)
        print("-" * 60)


if __name__ == "__main__":
    main()
