import logging
from functools import lru_cache

from app.ai.config import AIConfig, load_ai_config
from app.ai.providers.openai_provider import OpenAIProvider
from app.ai.types import TextGenerator

logger = logging.getLogger(__name__)

_OPENAI_COMPATIBLE = {"openai", "openrouter"}


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


@lru_cache(maxsize=4)
def _build_provider(cfg: AIConfig) -> OpenAIProvider:
    return OpenAIProvider(
        model=cfg.model,
        api_key=cfg.api_key,
        base_url=cfg.base_url,
        timeout_s=cfg.timeout_s,
        max_retries=cfg.max_retries,
        app_title=cfg.app_title if cfg.provider == "openrouter" else None,
    )


def get_text_generator() -> TextGenerator | None:
    """Return the configured generator, or None when recommendations must use fallbacks."""
    cfg = load_ai_config()

    if cfg.provider == "disabled":
        return None

    if cfg.provider not in _OPENAI_COMPATIBLE:
        logger.warning("text_generator_unsupported provider=%s", cfg.provider)
        return None

    if not cfg.api_key or _looks_like_placeholder(cfg.api_key):
        logger.warning("text_generator_missing_api_key provider=%s", cfg.provider)
        return None

    return _build_provider(cfg)
