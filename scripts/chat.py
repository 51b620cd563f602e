#!/usr/bin/env python3
"""
Terminal front-end for the support chat widget
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from aistudio.chat import ChatApp, ChatClient, FileSessionStore
from aistudio.config import settings

HELP = """Commands:
  /verify <email> <yyyy-mm-dd> <last4>   verify your identity
  /session                               show the current session id
  /quit                                  leave the chat"""


def print_new(widget, seen: int) -> int:
    for message in widget.messages[seen:]:
        if message.role == "assistant":
            stamp = message.timestamp.strftime("%H:%M")
            print(f"[{stamp}] assistant: {message.text}")
    return len(widget.messages)


async def main(api_url: str, session_file: Path, embedded: bool):
    client = ChatClient(api_url=api_url)
    app = ChatApp(client, FileSessionStore(session_file), embedded=embedded)

    try:
        widget = await app.start()
        print(f"Session: {widget.session_id}\n{HELP}\n")
        seen = print_new(widget, 0)

        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break

            line = line.strip()
            if line == "/quit":
                break
            if line == "/session":
                print(widget.session_id)
                continue
            if line.startswith("/verify"):
                parts = line.split()
                if len(parts) != 4 or len(parts[3]) != 4 or not parts[3].isdigit():
                    print(HELP)
                    continue
                if await widget.verify(parts[1], parts[2], parts[3]):
                    print(f"Verified. Session: {widget.session_id}")
                else:
                    print("Verification failed. Please check your credentials.")
                continue

            await widget.send(line)
            seen = print_new(widget, seen)
    finally:
        await client.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Chat with the support assistant")
    parser.add_argument("--api-url", default=settings.CHAT_API_URL, help="Chat API URL")
    parser.add_argument(
        "--session-file",
        type=Path,
        default=settings.CHAT_SESSION_FILE,
        help="File the session id is kept in",
    )
    parser.add_argument(
        "--embedded", action="store_true", help="Open through the floating widget"
    )

    args = parser.parse_args()
    try:
        asyncio.run(main(args.api_url, args.session_file, args.embedded))
    except KeyboardInterrupt:
        pass
