#!/usr/bin/env python3
"""
Task management CLI

Usage:
    python -m src.tasks.cli [--db-path PATH] [--log-level LEVEL] COMMAND ...
    python -m src.tasks.cli list [--category CATEGORY] [--format json|text]
    python -m src.tasks.cli categories [--format json|text]
    python -m src.tasks.cli add --name NAME --category CATEGORY [--description TEXT]
    python -m src.tasks.cli update --id ID [--name NAME] [--description TEXT]
    python -m src.tasks.cli delete --id ID
    python -m src.tasks.cli delete-category --category CATEGORY
    python -m src.tasks.cli get --id ID [--format json|text]
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from src.taskyminder.logger import setup_logger

from .controller import derive_categories
from .exceptions import StoreError, TaskValidationError
from .models import Task, TaskDraft
from .store import TaskStore
from .validation import validate_new_task, validate_task_edit


def format_task_text(task: Task) -> str:
    description = task.description.strip() or "no description"
    return f"[{task.id}] {task.category} | {task.name} | {description}"


def _print_tasks(tasks: List[Task], output_format: str) -> None:
    if output_format == "json":
        print(json.dumps([task.to_dict() for task in tasks], ensure_ascii=False))
    elif not tasks:
        print("No tasks.")
    else:
        for task in tasks:
            print(format_task_text(task))


def cmd_list(store: TaskStore, category: Optional[str], output_format: str) -> int:
    if category is None:
        tasks = store.get_all_tasks().result()
    else:
        tasks = store.get_tasks_by_category(category).result()
    _print_tasks(tasks, output_format)
    return 0


def cmd_categories(store: TaskStore, output_format: str) -> int:
    categories = derive_categories(store.get_all_tasks().result())
    if output_format == "json":
        print(json.dumps(categories, ensure_ascii=False))
    elif not categories:
        print("No categories.")
    else:
        for category in categories:
            print(category)
    return 0


def cmd_add(
    store: TaskStore, name: str, description: str, category: str, output_format: str
) -> int:
    draft = TaskDraft(name=name, description=description, category=category)
    try:
        validate_new_task(draft)
    except TaskValidationError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    created = store.add_task(draft).result()
    if output_format == "json":
        print(json.dumps(created.to_dict(), ensure_ascii=False))
    else:
        print(f"Added: {format_task_text(created)}")
    return 0


def cmd_update(
    store: TaskStore,
    task_id: int,
    name: Optional[str],
    description: Optional[str],
    output_format: str,
) -> int:
    existing = store.get_task(task_id).result()
    if existing is None:
        print(f"Error: task {task_id} not found.", file=sys.stderr)
        return 1

    task = Task(
        id=existing.id,
        name=name if name is not None else existing.name,
        description=description if description is not None else existing.description,
        category=existing.category,
    )
    try:
        validate_task_edit(task)
    except TaskValidationError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    store.update_task(task).result()
    updated = store.get_task(task_id).result()
    if output_format == "json":
        print(json.dumps(updated.to_dict(), ensure_ascii=False))
    else:
        print(f"Updated: {format_task_text(updated)}")
    return 0


def cmd_delete(store: TaskStore, task_id: int, output_format: str) -> int:
    deleted = store.delete_task(task_id).result()
    if not deleted:
        print(f"Error: task {task_id} not found.", file=sys.stderr)
        return 1

    if output_format == "json":
        print(json.dumps({"deleted": True, "id": task_id}))
    else:
        print(f"Deleted: ID {task_id}")
    return 0


def cmd_delete_category(store: TaskStore, category: str, output_format: str) -> int:
    deleted = store.delete_tasks_by_category(category).result()
    if output_format == "json":
        print(json.dumps({"category": category, "deleted": deleted}, ensure_ascii=False))
    else:
        print(f"Deleted category {category!r} ({deleted} tasks)")
    return 0


def cmd_get(store: TaskStore, task_id: int, output_format: str) -> int:
    task = store.get_task(task_id).result()
    if task is None:
        print(f"Error: task {task_id} not found.", file=sys.stderr)
        return 1

    if output_format == "json":
        print(json.dumps(task.to_dict(), ensure_ascii=False))
    else:
        print(format_task_text(task))
    return 0


def _add_format_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="Output format (default: text)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Task management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="SQLite database file (default: $TASKYMINDER_DB_PATH or data/tasks.db)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for messages on stderr (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run", required=True)

    parser_list = subparsers.add_parser("list", help="List tasks")
    parser_list.add_argument("--category", help="Only tasks with exactly this category")
    _add_format_option(parser_list)

    parser_categories = subparsers.add_parser("categories", help="List categories")
    _add_format_option(parser_categories)

    parser_add = subparsers.add_parser("add", help="Add a task")
    parser_add.add_argument("--name", required=True, help="Task name")
    parser_add.add_argument("--description", default="", help="Task description")
    parser_add.add_argument("--category", required=True, help="Task category")
    _add_format_option(parser_add)

    parser_update = subparsers.add_parser(
        "update", help="Change name and description of a task"
    )
    parser_update.add_argument("--id", type=int, required=True, help="Task ID")
    parser_update.add_argument("--name", help="New name")
    parser_update.add_argument("--description", help="New description")
    _add_format_option(parser_update)

    parser_delete = subparsers.add_parser("delete", help="Delete a task")
    parser_delete.add_argument("--id", type=int, required=True, help="Task ID")
    _add_format_option(parser_delete)

    parser_delete_category = subparsers.add_parser(
        "delete-category", help="Delete every task in a category"
    )
    parser_delete_category.add_argument("--category", required=True, help="Category label")
    _add_format_option(parser_delete_category)

    parser_get = subparsers.add_parser("get", help="Show one task")
    parser_get.add_argument("--id", type=int, required=True, help="Task ID")
    _add_format_option(parser_get)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(args.log_level)

    with TaskStore(db_path=args.db_path) as store:
        try:
            store.initialize().result()
            if args.command == "list":
                return cmd_list(store, args.category, args.format)
            elif args.command == "categories":
                return cmd_categories(store, args.format)
            elif args.command == "add":
                return cmd_add(store, args.name, args.description, args.category, args.format)
            elif args.command == "update":
                return cmd_update(store, args.id, args.name, args.description, args.format)
            elif args.command == "delete":
                return cmd_delete(store, args.id, args.format)
            elif args.command == "delete-category":
                return cmd_delete_category(store, args.category, args.format)
            elif args.command == "get":
                return cmd_get(store, args.id, args.format)
            else:
                print(f"Error: unknown command: {args.command}", file=sys.stderr)
                return 1
        except StoreError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())
