"""Command-line front end for the form builder.

Every command loads the saved schema, applies one change and saves it back.

Usage:
    python -m formbuilder add text
    python -m formbuilder add radio --options 3
    python -m formbuilder list
    python -m formbuilder label <field-id> "Phone number"
    python -m formbuilder rules <field-id> --required --type phone
    python -m formbuilder condition <field-id> <other-id> yes
    python -m formbuilder remove <field-id> --yes
    python -m formbuilder validate answers.json
    python -m formbuilder export
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from formbuilder.constants import FieldType, NotifyKind, ValidationType
from formbuilder.lib.errors import FormBuilderError, InvalidInput
from formbuilder.lib.logging import setup_logging
from formbuilder.lib.storage import get_storage
from formbuilder.session import BuilderSession
from formbuilder.settings import BuilderSettings
from formbuilder.utils import editing
from formbuilder.utils.visibility import should_show

logger = logging.getLogger(__name__)


def _print_notification(message: str, kind: NotifyKind) -> None:
    # stdout carries command output only, so `export` can be redirected
    prefix = "Error: " if kind == NotifyKind.ERROR else ""
    print(f"{prefix}{message}", file=sys.stderr)


def _prompt_confirm(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formbuilder",
        description="Assemble, inspect and validate form schemas.",
    )
    parser.add_argument("--storage", help="Schema location (directory or s3:// URI)")
    parser.add_argument("--key", help="Storage key of the schema")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")

    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Add a field")
    add.add_argument("type", choices=[t.value for t in FieldType])
    add.add_argument("--options", type=int, default=None, help="Number of options for choice fields")

    sub.add_parser("list", help="List fields in form order")

    label = sub.add_parser("label", help="Set a field's label")
    label.add_argument("field_id")
    label.add_argument("text")

    rules = sub.add_parser("rules", help="Change a field's validation rules")
    rules.add_argument("field_id")
    rules.add_argument("--required", dest="required", action="store_true", default=None)
    rules.add_argument("--optional", dest="required", action="store_false")
    rules.add_argument("--min", dest="min_length", type=int)
    rules.add_argument("--max", dest="max_length", type=int)
    rules.add_argument("--type", dest="validation_type", choices=[t.value for t in ValidationType])
    rules.add_argument("--file-type", dest="file_type")
    rules.add_argument("--file-size", dest="file_size", type=float, help="Upload limit in MB")

    condition = sub.add_parser("condition", help="Show a field only when another has a value")
    condition.add_argument("field_id")
    condition.add_argument("dependent_field", nargs="?")
    condition.add_argument("dependent_value", nargs="?", default="")
    condition.add_argument("--clear", action="store_true", help="Remove the condition")

    remove = sub.add_parser("remove", help="Remove a field")
    remove.add_argument("field_id")
    remove.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    validate = sub.add_parser("validate", help="Validate submitted values from a JSON file")
    validate.add_argument("values_file", help="JSON object mapping field id to value")

    sub.add_parser("export", help="Print the schema as JSON")

    return parser


def _list_fields(session: BuilderSession) -> None:
    fields = session.store.list()
    if not fields:
        print("No fields.")
        return

    print(f"  {'Id':<32}  {'Type':<8}  {'Shown':<5}  Label")
    print(f"  {'-' * 32}  {'-' * 8}  {'-' * 5}  {'-' * 30}")
    for field in fields:
        shown = "yes" if should_show(field, fields) else "no"
        print(f"  {field.id:<32}  {field.type.value:<8}  {shown:<5}  {field.label}")
        for option in field.options:
            print(f"  {'':<32}  {'':<8}  {'':<5}    - {option}")


def _apply_rules(session: BuilderSession, args: argparse.Namespace) -> None:
    field = session.store.get(args.field_id)
    if args.required is not None:
        field = editing.set_required(field, args.required)
    if args.min_length is not None or args.max_length is not None:
        field = editing.set_length_bounds(
            field,
            args.min_length if args.min_length is not None else field.validation.min_length,
            args.max_length if args.max_length is not None else field.validation.max_length,
        )
    if args.validation_type is not None:
        field = editing.select_validation_type(field, args.validation_type)
    if args.file_type is not None:
        field = editing.select_file_type(field, args.file_type)
    if args.file_size is not None:
        field = editing.set_file_size(field, args.file_size)
    session.update_field(args.field_id, field)


def run(args: argparse.Namespace) -> int:
    settings = BuilderSettings.load()
    storage = get_storage(args.storage or settings.resolve_storage_path())
    confirm = (lambda prompt: True) if getattr(args, "yes", False) else _prompt_confirm
    session = BuilderSession(
        storage=storage,
        confirm=confirm,
        notify=_print_notification,
        key=args.key or settings.schema_key,
    )

    # Start from the saved schema when there is one
    if storage.exists(session.key) and not session.load():
        return 1

    if args.command == "add":
        try:
            field = session.add_field(args.type, args.options)
        except InvalidInput:
            # Already reported through notify
            return 1
        session.save()
        print(field.id)
    elif args.command == "list":
        _list_fields(session)
    elif args.command == "label":
        session.edit_field(args.field_id, editing.set_label, args.text)
        session.save()
    elif args.command == "rules":
        _apply_rules(session, args)
        session.save()
    elif args.command == "condition":
        if args.clear:
            session.edit_field(args.field_id, editing.clear_condition)
        elif not args.dependent_field:
            print("Error: condition needs a dependent field id or --clear", file=sys.stderr)
            return 2
        else:
            session.edit_field(
                args.field_id, editing.set_condition, args.dependent_field, args.dependent_value
            )
        session.save()
    elif args.command == "remove":
        if session.remove_field(args.field_id):
            session.save()
    elif args.command == "validate":
        try:
            with open(args.values_file, encoding="utf-8") as f:
                values = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            print(f"Error: cannot read {args.values_file}: {exc}", file=sys.stderr)
            return 1
        if not isinstance(values, dict):
            print("Error: submitted values must be a JSON object", file=sys.stderr)
            return 1
        result = session.submit(values)
        for line in result.messages():
            print(line)
        return 0 if result.is_valid else 1
    elif args.command == "export":
        print(session.export())

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, json_format=args.json_logs)

    try:
        return run(args)
    except FormBuilderError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
