"""
Prompt store: pure collection operations, persistence backends and the
file-backed manager that combines them.
"""

from system_prompts.store.backends import CollectionBackend, InMemoryBackend, YamlFileBackend
from system_prompts.store.collection import Collection
from system_prompts.store.manager import SystemPromptManager
from system_prompts.store.paths import default_config_dir

__all__ = [
    "Collection",
    "CollectionBackend",
    "InMemoryBackend",
    "YamlFileBackend",
    "SystemPromptManager",
    "default_config_dir",
]
