"""Configuration management for Promptdeck.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the PROMPTDECK_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (PROMPTDECK_* prefix)
2. .env file in the project root
3. Default values defined in PromptdeckConfig

The provider credential is the one exception to the prefix rule: it is read
from ``PROMPTDECK_OPENAI_API_KEY`` or, failing that, the conventional
``OPENAI_API_KEY`` variable.

Example .env file:
    OPENAI_API_KEY=sk-...
    PROMPTDECK_CODE_MODEL=gpt-4o-mini
    PROMPTDECK_IDENTITY_HEADER=X-User-Id
    PROMPTDECK_SERVER_PORT=3000

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
The settings object is frozen: the system instruction and every other value
are fixed for the lifetime of the process.

Usage Example
-------------
    from promptdeck.core.config import config

    print(config.code_model)
    print(config.system_instruction)
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SYSTEM_INSTRUCTION = (
    "You are a code generator. You must answer only in markdown code snippets. "
    "Use code comments for explanations. You can write Python, Dart (Flutter), "
    "Kotlin, Java, JavaScript, TypeScript and React code, Jupyter notebook cells, "
    "and Qiskit programs for IBM quantum hardware. When the user shares an error, "
    "explain the fix in code comments and provide the corrected code."
)

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class PromptdeckConfig(BaseSettings):
    """Main configuration for Promptdeck.

    Values are loaded from environment variables with the PROMPTDECK_ prefix,
    with fallback to the defaults defined here.

    Attributes
    ----------
    Provider Settings:
        openai_api_key : str | None
            Credential for the completion provider. ``None`` means the proxy
            answers every request with a configuration error.
        code_model : str
            Chat completion model used by ``POST /api/code``
        image_model : str
            Image model used by ``POST /api/image``
        system_instruction : str
            Fixed instruction prepended to every conversation upstream

    Identity Settings:
        identity_header : str
            Request header carrying the caller id verified by the identity
            provider in front of the server

    Server Settings:
        server_host : str
            Bind address for the uvicorn server
        server_port : int
            Port for the uvicorn server (1024-65535)
        templates_dir : Path
            Directory containing ``index.html``

    Client Settings:
        api_base_url : str
            Base URL the UI uses to reach the proxy
        request_timeout : float
            Timeout in seconds for one relay round trip
        ui_server_name : str
            Bind address for the Gradio UI
        ui_server_port : int
            Port for the Gradio UI
        ui_user_id : str | None
            Caller id forwarded by the UI in ``identity_header``

    Notes
    -----
    - Configuration is immutable after initialization
    - To modify config, set environment variables and restart the application
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PROMPTDECK_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    # Provider settings
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("PROMPTDECK_OPENAI_API_KEY", "OPENAI_API_KEY"),
        description="Completion provider credential",
    )
    code_model: str = Field(
        default="gpt-4o-mini",
        description="Chat completion model for code generation",
    )
    image_model: str = Field(
        default="dall-e-2",
        description="Image generation model",
    )
    system_instruction: str = Field(
        default=DEFAULT_SYSTEM_INSTRUCTION,
        min_length=1,
        description="Instruction injected as the single system turn",
    )

    # Identity settings
    identity_header: str = Field(
        default="X-User-Id",
        description="Header carrying the verified caller id",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=3000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    templates_dir: Path = Field(
        default=PACKAGE_DIR / "templates",
        description="Directory containing the landing page",
    )

    # Client settings
    api_base_url: str = Field(
        default="http://127.0.0.1:3000",
        description="Base URL of the proxy as seen from the UI",
    )
    request_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Timeout in seconds for one relay round trip",
    )
    ui_server_name: str = Field(
        default="0.0.0.0",
        description="Gradio bind address",
    )
    ui_server_port: int = Field(
        default=7860,
        description="Gradio port",
        ge=1024,
        le=65535,
    )
    ui_user_id: str | None = Field(
        default=None,
        description="Caller id the UI forwards to the proxy",
    )

    @property
    def has_provider_credential(self) -> bool:
        """True when a non-blank provider credential is configured."""
        return bool(self.openai_api_key and self.openai_api_key.strip())


# Global configuration instance
# Loads values from environment variables (PROMPTDECK_* prefix) and .env file.
config = PromptdeckConfig()
