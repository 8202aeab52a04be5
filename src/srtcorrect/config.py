"""Configuration management via environment variables."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

DEFAULT_CREDENTIALS_PATH = "~/.config/srtcorrect/credentials.env"

DEFAULT_MODELS = {
    "openai": "gpt-4o",
    "deepseek": "deepseek-chat",
    "openrouter": "google/gemini-2.5-flash",
    "groq": "llama-3.3-70b-versatile",
    "ollama": "llama3.1:8b",
}

API_KEY_NAMES = {
    "openai": "OPENAI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "groq": "GROQ_API_KEY",
}


@dataclass
class Config:
    """Application configuration loaded from environment."""

    openai_api_key: str | None = None
    deepseek_api_key: str | None = None
    deepseek_base_url: str = "https://api.deepseek.com"
    openrouter_api_key: str | None = None
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    groq_api_key: str | None = None
    groq_base_url: str = "https://api.groq.com/openai/v1"
    language: str = "ko"
    credentials_path: str = DEFAULT_CREDENTIALS_PATH
    models: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MODELS))

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        load_dotenv()
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            deepseek_api_key=os.getenv("DEEPSEEK_API_KEY"),
            deepseek_base_url=os.getenv(
                "DEEPSEEK_BASE_URL", "https://api.deepseek.com"
            ),
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY"),
            openrouter_base_url=os.getenv(
                "OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"
            ),
            groq_api_key=os.getenv("GROQ_API_KEY"),
            groq_base_url=os.getenv(
                "GROQ_BASE_URL", "https://api.groq.com/openai/v1"
            ),
            language=os.getenv("SRTCORRECT_LANGUAGE", "ko"),
            credentials_path=os.getenv(
                "SRTCORRECT_CREDENTIALS", DEFAULT_CREDENTIALS_PATH
            ),
        )

    def api_key(self, provider: str) -> str | None:
        """API key configured in the environment for a provider."""
        return getattr(self, f"{provider}_api_key", None)

    def base_url(self, provider: str) -> str | None:
        """Endpoint for an OpenAI-compatible provider (None means OpenAI)."""
        return getattr(self, f"{provider}_base_url", None)

    def model(self, provider: str) -> str:
        return self.models.get(provider, DEFAULT_MODELS["openai"])
