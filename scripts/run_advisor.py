#!/usr/bin/env python3
"""
Drive an advisor session from the terminal:
- browse and filter the catalog
- toggle products into the selection (persisted for the session id)
- generate a routine and chat with the relay

Usage (from repo root):
  python scripts/run_advisor.py --category cleanser
  python scripts/run_advisor.py --chat --session demo
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import shlex
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

from routine_builder.catalog.store import CatalogStore
from routine_builder.chatbot.relay import RelayClient
from routine_builder.chatbot.session import AdvisorSession
from routine_builder.database.kv_store import KeyValueStore
from routine_builder.errors import UnknownProductError
from routine_builder.integrations.clients import build_catalog_source
from routine_builder.utils.config_loader import load_advisor_config

# Commands that exit chat mode
CHAT_EXIT = frozenset({"quit", "exit", "q", "bye"})

HELP = """Commands:
  list [category] [search...]   filter the catalog ("-" for any category)
  toggle <id>                   select / deselect a product
  remove <id>                   remove a selected product
  clear                         clear the selection
  info <id>                     show product details
  routine                       generate a routine for the selection
  rtl                           toggle display direction
  anything else                 sent to the advisor as a chat message
  quit                          exit"""


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def print_view(view: dict) -> None:
    products = view["products"]
    print("\n### Products\n")
    if products["placeholder"]:
        print(products["placeholder"])
    for p in products["items"]:
        mark = "[x]" if p["selected"] else "[ ]"
        print(f"{mark} {p['id']:>3}  {p['name']} ({p['brand']}) - {p['category']}")

    selected = view["selected"]
    print("\n### Selected\n")
    if selected["placeholder"]:
        print(selected["placeholder"])
    for p in selected["items"]:
        print(f"  - {p['name']}")
    print()


def print_new_chat(view: dict, seen: int) -> int:
    chat = view["chat"]
    for entry in chat[seen:]:
        who = "You" if entry["role"] == "user" else "Advisor"
        print(f"{who}: {entry['text']}\n")
    return len(chat)


async def run_chat(session: AdvisorSession) -> None:
    print(HELP)
    seen = len(session.transcript)
    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not line:
            continue
        if line.lower() in CHAT_EXIT:
            break

        parts = shlex.split(line)
        cmd, args = parts[0].lower(), parts[1:]
        try:
            if cmd == "list":
                category = "" if not args or args[0] == "-" else args[0]
                print_view(await session.set_filters(category=category, search=" ".join(args[1:])))
            elif cmd == "toggle" and args:
                print_view(session.toggle(args[0]))
            elif cmd == "remove" and args:
                print_view(session.remove(args[0]))
            elif cmd == "clear":
                print_view(session.clear())
            elif cmd == "info" and args:
                details = session.product_details(args[0])
                print(f"\n{details['name']} - {details['brand']}\n{details['description']}\n")
            elif cmd == "routine":
                seen = print_new_chat(await session.generate_routine(), seen)
            elif cmd == "rtl":
                print("RTL on" if session.toggle_rtl()["rtl"] else "RTL off")
            elif cmd == "help":
                print(HELP)
            else:
                seen = print_new_chat(await session.send_chat(line), seen)
        except UnknownProductError as e:
            print(str(e))


def build_store(cfg):
    """Redis when REDIS_URL is set so the selection survives restarts, else in-memory."""
    url = os.getenv("REDIS_URL") or cfg.storage.url
    if url:
        from routine_builder.database.redis_store import RedisKeyValueStore

        return RedisKeyValueStore(url=url, key_prefix=cfg.storage.key_prefix)
    return KeyValueStore()


async def main() -> int:
    parser = argparse.ArgumentParser(description="Terminal routine advisor session")
    parser.add_argument("--config", type=Path, default=None, help="Path to advisor_config.yml")
    parser.add_argument("--session", default="terminal", help="Storage scope for the selection")
    parser.add_argument("--category", default=None, help="Show products for a category and exit")
    parser.add_argument("--search", default=None, help="Search term used with --category")
    parser.add_argument("--chat", action="store_true", help="Interactive session")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(args.verbose)
    cfg = load_advisor_config(args.config)

    session = AdvisorSession(
        session_id=args.session,
        catalog=CatalogStore(build_catalog_source(cfg.catalog)),
        store=build_store(cfg),
        relay=RelayClient(
            worker_url=cfg.relay.worker_url,
            model=cfg.relay.model,
            timeout_seconds=cfg.relay.timeout_seconds,
        ),
    )
    await session.start()
    if not session.catalog.loaded:
        print("Could not load the product catalog; see the log for details.")
        return 1

    if args.chat:
        await run_chat(session)
    else:
        print_view(await session.set_filters(category=args.category, search=args.search))
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
