"""Plain-text rendering of prompts for the command line."""

from system_prompts.models.prompt import SystemPrompt

SUMMARY_COLUMNS = ("ID", "Name", "Default", "Model", "Tags", "Updated")
SEPARATOR = "-" * 80


def summary_row(prompt: SystemPrompt) -> tuple[str, ...]:
    """One table row: short ID, name, default flag, model, tags, update date."""
    return (
        prompt.id[:8],
        prompt.name,
        "Yes" if prompt.is_default else "No",
        prompt.model_specific or "Any",
        ", ".join(prompt.tags),
        prompt.updated_at.strftime("%Y-%m-%d"),
    )


def format_table(prompts: list[SystemPrompt]) -> str:
    rows = [SUMMARY_COLUMNS] + [summary_row(p) for p in prompts]
    widths = [max(len(row[i]) for row in rows) for i in range(len(SUMMARY_COLUMNS))]

    def render(row: tuple[str, ...]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()

    lines = [render(rows[0]), "  ".join("-" * w for w in widths)]
    lines.extend(render(row) for row in rows[1:])
    return "\n".join(lines)


def format_details(prompt: SystemPrompt) -> str:
    """
    Multi-line description of a prompt followed by its content.

    Description, model and tags lines are left out when empty.
    """
    lines = [f"ID: {prompt.id}", f"Name: {prompt.name}"]
    if prompt.description:
        lines.append(f"Description: {prompt.description}")
    lines.append(f"Default: {'Yes' if prompt.is_default else 'No'}")
    if prompt.model_specific:
        lines.append(f"Model: {prompt.model_specific}")
    if prompt.tags:
        lines.append(f"Tags: {', '.join(prompt.tags)}")
    lines.append(f"Created: {prompt.created_at.strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append(f"Updated: {prompt.updated_at.strftime('%Y-%m-%d %H:%M:%S')}")
    lines.append("")
    lines.append("Content:")
    lines.append(prompt.content)
    return "\n".join(lines)
