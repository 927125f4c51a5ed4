#!/usr/bin/env python3
"""
Fill the payment form from the command line, submit it and print what the
user would see: field errors, the API response panel and the notification.

Usage (from repo root):
  python scripts/submit_payment.py --first-name Jane --last-name Doe \
      --zip-code 2000 --card-number "4111 1111 1111 1111"

Point it at the mock service with PAYMENT_API_URL (see payform/config.py);
serving it needs the `serve` extra (pip install -e ".[serve]"):
  uvicorn payform.api.mock_payments:app --port 8080
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from payform.config import load_settings
from payform.form.fields import CARD_NUMBER, FIRST_NAME, LABELS, LAST_NAME, ZIP_CODE
from payform.form.outcomes import OutcomeKind
from payform.session import FieldChanged, FormSession, SubmitRequested


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def print_stage(title: str, data: dict | list | str):
    """Print a stage header and data to the terminal."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)
    if isinstance(data, (dict, list)):
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    else:
        print(data)
    print()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Submit a cardholder payment form")
    parser.add_argument("--first-name", default="")
    parser.add_argument("--last-name", default="")
    parser.add_argument("--zip-code", default="")
    parser.add_argument("--card-number", default="")
    parser.add_argument("--env-file", default=None, help="Load settings from this .env file")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    session = FormSession(settings=load_settings(args.env_file))
    events = [
        FieldChanged(FIRST_NAME, args.first_name),
        FieldChanged(LAST_NAME, args.last_name),
        FieldChanged(ZIP_CODE, args.zip_code),
        FieldChanged(CARD_NUMBER, args.card_number),
    ]
    for event in events:
        await session.dispatch(event)
    print_stage("FORM", {LABELS[name]: value for name, value in session.snapshot().form.items()})

    outcome = await session.dispatch(SubmitRequested())
    view = session.snapshot()

    field_errors = {name: message for name, message in view.errors.items() if message}
    if field_errors:
        print_stage("FIELD ERRORS", {LABELS[name]: message for name, message in field_errors.items()})
    if view.response is not None:
        print_stage(f"API RESPONSE  {view.response.status_label}", view.response.body_text)
    if view.notification is not None:
        print_stage(f"NOTIFICATION ({view.notification.severity.value})", view.notification.message)

    return 0 if outcome.kind is OutcomeKind.SUCCEEDED else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
