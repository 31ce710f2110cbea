"""
Built-in prompt texts.

Bodies for the seed prompts created on first initialization. They are loaded
via ``system_prompts.utils.prompts.load_prompt()``.
"""
