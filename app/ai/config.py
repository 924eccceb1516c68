import os
from dataclasses import dataclass

_DEFAULT_BASE_URLS = {
    "openrouter": "https://openrouter.ai/api/v1",
}
_DEFAULT_MODELS = {
    "openrouter": "deepseek/deepseek-r1-0528:free",
    "openai": "gpt-4o-mini",
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str
    base_url: str | None
    timeout_s: float
    max_retries: int
    app_title: str


def _api_key_for(provider: str) -> str:
    if provider == "openrouter":
        names = ("OPENROUTER_API_KEY", "OPENAI_API_KEY")
    else:
        names = ("OPENAI_API_KEY",)
    for name in names:
        value = (os.getenv(name) or "").strip()
        if value:
            return value
    return ""


def load_ai_config() -> AIConfig:
    provider = os.getenv("AI_PROVIDER", "openrouter").strip().lower()
    model = (os.getenv("AI_MODEL") or _DEFAULT_MODELS.get(provider, "gpt-4o-mini")).strip()
    base_url = (os.getenv("OPENAI_BASE_URL") or "").strip() or _DEFAULT_BASE_URLS.get(provider)
    return AIConfig(
        provider=provider,
        model=model,
        api_key=_api_key_for(provider),
        base_url=base_url,
        timeout_s=float(os.getenv("AI_TIMEOUT_S", "30")),
        max_retries=int(os.getenv("AI_MAX_RETRIES", "2")),
        app_title=(os.getenv("AI_APP_TITLE") or "CareerGenie").strip(),
    )
