#!/usr/bin/env python3
"""
countyfinder

Purpose:
  Look up the county (plus city, state and ZIP) for a US address from a terminal.
  - Types ADDRESS into the suggestion controller and waits for the debounced
    autocomplete request.
  - Picks suggestion --pick (1-based, default 1) and resolves it to a county.

Transport:
  --transport proxy   call the County Finder proxy at --proxy-url (default PROXY_BASE_URL)
  --transport direct  call Google directly; needs GOOGLE_API_KEY in the environment

Examples:
  countyfinder "600 Congress Ave, Austin"
  countyfinder "600 Congress Ave" --pick 2
  countyfinder "600 Congress Ave" --transport direct

Exit codes:
  0 = county shown
  1 = no suggestions, or the lookup failed with a message
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from .client.controller import LookupStage, SuggestionController
from .client.presenter import ResultPresenter
from .client.transport import build_transport
from .core.config import get_settings
from .core.logging import configure_logging


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Find the county for a US address.")
    p.add_argument("address", help="Address text, at least a few characters (e.g. '600 Congress Ave').")
    p.add_argument("--pick", type=int, default=1,
                   help="Which suggestion to resolve, 1-based (default: 1).")
    p.add_argument("--transport", choices=("proxy", "direct"), default=None,
                   help="Override CLIENT_TRANSPORT.")
    p.add_argument("--proxy-url", default=None,
                   help="Proxy base URL (default: PROXY_BASE_URL).")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Verbose logging to stderr.")
    return p.parse_args(argv)


async def run_lookup(
    controller: SuggestionController, address: str, pick: int
) -> int:
    presenter = controller.presenter
    controller.on_input(address)
    await controller.wait_idle()

    if controller.stage is not LookupStage.SUGGESTING:
        print(presenter.render_text() or f"No suggestions for {address!r}")
        return 1

    print(presenter.render_text())
    if not 1 <= pick <= len(controller.suggestions):
        print(f"--pick must be between 1 and {len(controller.suggestions)}", file=sys.stderr)
        return 1

    chosen = controller.select_index(pick - 1)
    print(f"\n{chosen.description}")
    await controller.wait_idle()
    print(presenter.render_text())
    return 0 if controller.stage is LookupStage.DONE else 1


async def _main(args: argparse.Namespace) -> int:
    settings = get_settings()
    transport = build_transport(settings, kind=args.transport, proxy_url=args.proxy_url)
    controller = SuggestionController.from_settings(settings, transport, ResultPresenter())
    try:
        return await run_lookup(controller, args.address, args.pick)
    finally:
        await controller.aclose()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(settings)
    logging.root.setLevel(logging.DEBUG if args.verbose else logging.WARNING)
    return asyncio.run(_main(args))


if __name__ == "__main__":
    sys.exit(main())
