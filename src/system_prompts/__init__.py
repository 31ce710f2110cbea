"""
system-prompts: named, tagged system prompts for language-model agents
"""

__version__ = "0.1.0"

from system_prompts.config import Settings
from system_prompts.models.prompt import SystemPrompt
from system_prompts.store.manager import SystemPromptManager

__all__ = ["Settings", "SystemPrompt", "SystemPromptManager", "__version__"]
