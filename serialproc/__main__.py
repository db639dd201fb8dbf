# -*- coding: utf-8 -*-
"""
serialproc CLI - Headless process administration.

Usage::

    python -m serialproc groups
    python -m serialproc set --id Nightly_Sync order 3
    python -m serialproc vars
    python -m serialproc set-vars --on --timestamp 2026-10-19T08:30
    python -m serialproc seed records.json

License
-------
MIT License
Copyright (c) 2026 serialproc contributors
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from serialproc.core.notify import LoggingNotifier, RecordingNotifier, Severity


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="serialproc",
        description="serialproc — Administer serial process settings.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a config JSON file (default ~/.serialproc/config.json).",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("groups", help="Show process settings grouped by group.")

    set_cmd = sub.add_parser("set", help="Edit one field and save.")
    set_cmd.add_argument("--id", required=True, dest="record_id",
                         help="Record identifier (id or name).")
    set_cmd.add_argument("field", help="Field name, e.g. order or active.")
    set_cmd.add_argument("value", help="New value.")

    sub.add_parser("vars", help="Show the process variables.")

    vars_cmd = sub.add_parser("set-vars", help="Update the process variables.")
    toggle = vars_cmd.add_mutually_exclusive_group()
    toggle.add_argument("--on", action="store_true", dest="engine_on",
                        default=None, help="Turn the serial engine on.")
    toggle.add_argument("--off", action="store_false", dest="engine_on",
                        help="Turn the serial engine off.")
    vars_cmd.add_argument("--timestamp", default=None,
                          help="Local date-time YYYY-MM-DDTHH:MM ('' clears).")

    seed = sub.add_parser("seed", help="Load JSON records into the backend.")
    seed.add_argument("file", type=Path,
                      help="JSON list of records in backend field names.")
    return parser


def _print_groups(controller) -> None:
    if not controller.groups:
        print("No process settings.")
        return
    for group in controller.groups:
        print(f"{group.group_name}  [{group.status_text}, {group.status.value}]")
        for record in group.records:
            order = "-" if record.order is None else record.order
            mark = "x" if record.active else " "
            print(
                f"  [{mark}] {order:>3}  {record.name}  "
                f"{record.handler_class}  {record.target_object}"
            )


def _print_vars(controller) -> None:
    print(f"{controller.label_engine_on}: {controller.pill_label}")
    print(f"{controller.label_timestamp}: {controller.timestamp_display}")


def _failed(notifier: RecordingNotifier) -> bool:
    return Severity.ERROR in notifier.severities()


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    from serialproc.core.coercion import resolve_timezone
    from serialproc.core.config import load_config
    from serialproc.core.records import ConfigRecord
    from serialproc.core.staging import RecordLookupError, SettingsTableController
    from serialproc.core.variables import ProcessVariablesController
    from serialproc.service.base import ServiceError
    from serialproc.service.resolver import open_service

    config = load_config(args.config)
    recorder = RecordingNotifier()
    log_notifier = LoggingNotifier()

    def notify(notification):
        recorder(notification)
        log_notifier(notification)

    with open_service(config) as service:
        if args.command == "seed":
            try:
                with open(args.file, 'r', encoding='utf-8') as f:
                    payload = json.load(f)
                records = [ConfigRecord.from_wire(item) for item in payload]
                service.persist_config_records(records)
            except (OSError, ValueError, ServiceError) as e:
                print(f"Error: cannot seed from {args.file}: {e}",
                      file=sys.stderr)
                return 1
            print(f"Seeded {len(records)} process settings.")
            return 0

        if args.command in ("groups", "set"):
            controller = SettingsTableController(service, notifier=notify)
            if not controller.load():
                return 1
            if args.command == "set":
                try:
                    controller.apply_edit(args.record_id, args.field, args.value)
                except (RecordLookupError, ValueError) as e:
                    print(f"Error: {e}", file=sys.stderr)
                    return 1
                controller.commit_changes()
                if _failed(recorder):
                    return 1
            _print_groups(controller)
            return 0

        tz = resolve_timezone(config.display_timezone)
        controller = ProcessVariablesController(service, notifier=notify, tz=tz)
        controller.load()
        if _failed(recorder):
            return 1
        if args.command == "set-vars":
            if args.engine_on is not None:
                controller.set_engine_on(args.engine_on)
            if args.timestamp is not None:
                controller.set_timestamp(args.timestamp)
            if not controller.save():
                return 1
        _print_vars(controller)
        return 0


if __name__ == "__main__":
    sys.exit(main())
