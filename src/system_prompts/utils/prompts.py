"""
Loader for the built-in prompt texts shipped inside the package.

The store seeds a fresh collection from these files.
"""

from pathlib import Path

from system_prompts.utils.logging import get_logger

logger = get_logger(__name__)

# Prompts directory within the package
PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


def load_prompt(prompt_name: str, fallback: str | None = None) -> str:
    """
    Load a built-in prompt body from ``prompts/<prompt_name>.md``.

    Args:
        prompt_name: File stem (e.g., 'default_system')
        fallback: Optional text returned when the file is missing

    Returns:
        Prompt content with surrounding whitespace removed

    Raises:
        FileNotFoundError: If prompt file not found and no fallback provided
    """
    prompt_file = PROMPTS_DIR / f"{prompt_name}.md"

    try:
        prompt = prompt_file.read_text(encoding="utf-8")
        logger.debug(f"Loaded built-in prompt {prompt_name} from {prompt_file}")
        return prompt.strip()
    except FileNotFoundError:
        if fallback:
            logger.warning(f"Prompt file {prompt_file} not found, using fallback for {prompt_name}")
            return fallback
        logger.error(f"Prompt file {prompt_file} not found and no fallback provided")
        raise FileNotFoundError(
            f"Prompt file not found: {prompt_file}. Expected prompt at {prompt_file.absolute()}"
        )
