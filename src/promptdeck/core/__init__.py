"""Core components shared by the proxy and the UI.

- **PromptdeckConfig**: Configuration management using Pydantic Settings
- **config**: Global configuration instance (loads from environment variables)
- **CompletionProvider**: Lazy wrapper around the OpenAI SDK client

Usage Example
-------------
    from promptdeck.core import CompletionProvider, config

    provider = CompletionProvider(config)
    choices = await provider.complete(
        [{"role": "system", "content": config.system_instruction},
         {"role": "user", "content": "write a fizzbuzz function"}]
    )
"""

from promptdeck.core.config import PromptdeckConfig, config
from promptdeck.core.provider import CompletionProvider

__all__ = [
    "CompletionProvider",
    "PromptdeckConfig",
    "config",
]
