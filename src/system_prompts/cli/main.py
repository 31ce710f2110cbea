"""
Command-line interface for managing system prompts.

Usage:
    system-prompts list [--tags t1,t2] [--detailed]
    system-prompts create NAME [--description D] [--content C | --file F]
                          [--tags t1,t2] [--model M] [--default]
    system-prompts show IDENTIFIER [--raw]
    system-prompts update IDENTIFIER [--name N] [--description D]
                          [--content C | --file F] [--tags t1,t2] [--model M]
    system-prompts delete IDENTIFIER [--yes]
    system-prompts set-default IDENTIFIER
    system-prompts import FILE NAME [--description D] [--tags t1,t2] [--model M]
    system-prompts export IDENTIFIER FILE
    system-prompts resolve MODEL [--raw]

IDENTIFIER is a prompt ID or, failing that, a prompt name.
Pass "--content -" to read the content from standard input.

Exit codes:
    0: Success (including a cancelled delete)
    1: Store or usage error
    2: Invalid arguments
"""

import argparse
import sys
from collections.abc import Callable
from pathlib import Path

from system_prompts.cli.formatting import SEPARATOR, format_details, format_table
from system_prompts.config import Settings
from system_prompts.models.prompt import SystemPrompt
from system_prompts.store.manager import SystemPromptManager
from system_prompts.utils.errors import (
    NotFoundError,
    PromptFileError,
    SystemPromptError,
    ValidationError,
)
from system_prompts.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def parse_tags(value: str) -> list[str]:
    """Split a comma-separated tag list, dropping blanks."""
    return [tag.strip() for tag in value.split(",") if tag.strip()]


def read_content(content: str | None, file: Path | None) -> str | None:
    """
    Resolve prompt content from ``--content`` or ``--file``.

    ``--content -`` reads standard input. Content read from stdin or a file is
    stripped of surrounding whitespace; literal ``--content`` is kept as is.

    Returns:
        The content, or None when neither option was given

    Raises:
        ValidationError: If both options were given
        PromptFileError: If the file cannot be read
    """
    if content is not None and file is not None:
        raise ValidationError("Cannot specify both --content and --file options")
    if content is not None:
        if content == "-":
            return sys.stdin.read().strip()
        return content
    if file is not None:
        try:
            return file.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            raise PromptFileError(str(file), "read", str(exc)) from exc
    return None


def cmd_list(manager: SystemPromptManager, args: argparse.Namespace) -> int:
    if args.tags is not None:
        prompts = manager.search_by_tags(args.tags)
    else:
        prompts = manager.list_prompts()

    if not prompts:
        print("No system prompts found.")
        return 0

    if args.detailed:
        for prompt in prompts:
            print(format_details(prompt))
            print(SEPARATOR)
    else:
        print(format_table(prompts))
    return 0


def cmd_create(manager: SystemPromptManager, args: argparse.Namespace) -> int:
    content = read_content(args.content, args.file)
    if content is None:
        raise ValidationError(
            "Content is required for creating a system prompt. Use --content or --file."
        )

    prompt = SystemPrompt.new(args.name, content)
    if args.description is not None:
        prompt = prompt.with_description(args.description)
    if args.tags is not None:
        prompt = prompt.with_tags(args.tags)
    if args.model is not None:
        prompt = prompt.with_model_specific(args.model)
    if args.default:
        prompt = prompt.set_as_default()

    created = manager.create_prompt(prompt)
    print(f"Created system prompt: {created.name} (ID: {created.id})")
    return 0


def cmd_show(manager: SystemPromptManager, args: argparse.Namespace) -> int:
    prompt = manager.find_prompt(args.identifier)
    print(prompt.content if args.raw else format_details(prompt))
    return 0


def cmd_update(manager: SystemPromptManager, args: argparse.Namespace) -> int:
    prompt_id = manager.find_prompt(args.identifier).id
    content = read_content(args.content, args.file)

    def apply_changes(prompt: SystemPrompt) -> None:
        if args.name is not None:
            prompt.name = args.name
        if args.description is not None:
            prompt.description = args.description
        if content is not None:
            prompt.update_content(content)
        if args.tags is not None:
            prompt.tags = args.tags
        if args.model is not None:
            prompt.model_specific = args.model

    manager.modify_prompt(prompt_id, apply_changes)
    print(f"Updated system prompt: {args.identifier}")
    return 0


def cmd_delete(manager: SystemPromptManager, args: argparse.Namespace) -> int:
    prompt = manager.find_prompt(args.identifier)

    if not args.yes:
        print(f"Are you sure you want to delete the system prompt '{prompt.name}'? (y/N)")
        answer = sys.stdin.readline()
        if not answer.strip().lower().startswith("y"):
            print("Cancelled.")
            return 0

    manager.delete_prompt(prompt.id)
    print(f"Deleted system prompt: {prompt.name}")
    return 0


def cmd_set_default(manager: SystemPromptManager, args: argparse.Namespace) -> int:
    prompt = manager.find_prompt(args.identifier)
    manager.set_default_prompt(prompt.id)
    print(f"Set '{prompt.name}' as the default system prompt")
    return 0


def cmd_import(manager: SystemPromptManager, args: argparse.Namespace) -> int:
    prompt = manager.import_from_file(args.file, args.name)

    def apply_metadata(imported: SystemPrompt) -> None:
        if args.description is not None:
            imported.description = args.description
        if args.tags is not None:
            imported.tags = args.tags
        if args.model is not None:
            imported.model_specific = args.model

    if args.description is not None or args.tags is not None or args.model is not None:
        prompt = manager.modify_prompt(prompt.id, apply_metadata)

    print(f"Imported system prompt: {prompt.name} (ID: {prompt.id})")
    return 0


def cmd_export(manager: SystemPromptManager, args: argparse.Namespace) -> int:
    prompt = manager.find_prompt(args.identifier)
    manager.export_to_file(prompt.id, args.file)
    print(f"Exported system prompt '{prompt.name}' to {args.file}")
    return 0


def cmd_resolve(manager: SystemPromptManager, args: argparse.Namespace) -> int:
    prompt = manager.get_prompt_for_model(args.model)
    if prompt is None:
        raise NotFoundError(args.model, f"No system prompt found for model '{args.model}'")
    print(prompt.content if args.raw else format_details(prompt))
    return 0


def _add_content_options(parser: argparse.ArgumentParser, short: bool) -> None:
    content_flags = ("--content", "-c") if short else ("--content",)
    file_flags = ("--file", "-f") if short else ("--file",)
    parser.add_argument(*content_flags, default=None, help='Prompt content ("-" reads stdin)')
    parser.add_argument(*file_flags, type=Path, default=None, help="File to read content from")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="system-prompts",
        description="Manage named, tagged system prompts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Directory holding system_prompts.yaml (default: platform config dir)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output to stderr")

    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    list_cmd = commands.add_parser("list", help="List system prompts")
    list_cmd.add_argument("--tags", type=parse_tags, default=None, help="Only prompts with these tags")
    list_cmd.add_argument("--detailed", "-d", action="store_true", help="Show full details")
    list_cmd.set_defaults(handler=cmd_list)

    create_cmd = commands.add_parser("create", help="Create a system prompt")
    create_cmd.add_argument("name", help="Name of the system prompt")
    create_cmd.add_argument("--description", "-d", default=None, help="Description")
    _add_content_options(create_cmd, short=True)
    create_cmd.add_argument("--tags", type=parse_tags, default=None, help="Comma-separated tags")
    create_cmd.add_argument("--model", default=None, help="Model this prompt is optimized for")
    create_cmd.add_argument("--default", action="store_true", help="Make this the default prompt")
    create_cmd.set_defaults(handler=cmd_create)

    show_cmd = commands.add_parser("show", help="Show a system prompt")
    show_cmd.add_argument("identifier", help="Prompt ID or name")
    show_cmd.add_argument("--raw", action="store_true", help="Print only the content")
    show_cmd.set_defaults(handler=cmd_show)

    update_cmd = commands.add_parser("update", help="Update a system prompt")
    update_cmd.add_argument("identifier", help="Prompt ID or name")
    update_cmd.add_argument("--name", default=None, help="New name")
    update_cmd.add_argument("--description", default=None, help="New description")
    _add_content_options(update_cmd, short=False)
    update_cmd.add_argument("--tags", type=parse_tags, default=None, help="New tags (replaces existing)")
    update_cmd.add_argument("--model", default=None, help="New model specification")
    update_cmd.set_defaults(handler=cmd_update)

    delete_cmd = commands.add_parser("delete", help="Delete a system prompt")
    delete_cmd.add_argument("identifier", help="Prompt ID or name")
    delete_cmd.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")
    delete_cmd.set_defaults(handler=cmd_delete)

    default_cmd = commands.add_parser("set-default", help="Make a prompt the default")
    default_cmd.add_argument("identifier", help="Prompt ID or name")
    default_cmd.set_defaults(handler=cmd_set_default)

    import_cmd = commands.add_parser("import", help="Import a prompt from a file")
    import_cmd.add_argument("file", type=Path, help="File to import from")
    import_cmd.add_argument("name", help="Name for the imported prompt")
    import_cmd.add_argument("--description", default=None, help="Description")
    import_cmd.add_argument("--tags", type=parse_tags, default=None, help="Comma-separated tags")
    import_cmd.add_argument("--model", default=None, help="Model this prompt is optimized for")
    import_cmd.set_defaults(handler=cmd_import)

    export_cmd = commands.add_parser("export", help="Export a prompt's content to a file")
    export_cmd.add_argument("identifier", help="Prompt ID or name")
    export_cmd.add_argument("file", type=Path, help="Output file path")
    export_cmd.set_defaults(handler=cmd_export)

    resolve_cmd = commands.add_parser("resolve", help="Show the prompt selected for a model")
    resolve_cmd.add_argument("model", help="Model name, e.g. gpt-4o")
    resolve_cmd.add_argument("--raw", action="store_true", help="Print only the content")
    resolve_cmd.set_defaults(handler=cmd_resolve)

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Parse arguments and run one command.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = build_parser().parse_args(argv)

    settings = Settings()
    settings = settings.model_copy(
        update={"log_level": "DEBUG" if args.verbose else "WARNING", "log_format": "standard"}
    )
    setup_logging(settings, stream=sys.stderr)

    config_dir = args.config_dir or settings.prompts_config_dir
    manager = SystemPromptManager(config_dir=config_dir, file_name=settings.prompts_file_name)

    handler: Callable[[SystemPromptManager, argparse.Namespace], int] = args.handler
    try:
        manager.initialize()
        return handler(manager, args)
    except SystemPromptError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
