"""LLM Client Package"""

from opencommit.llm.base import LLMClient, LLMResponse, LLMError
from opencommit.llm.claude import ClaudeClient
from opencommit.llm.ollama import OllamaClient

PROVIDERS = {
    "claude": ClaudeClient,
    "ollama": OllamaClient,
}

# Local first, the API only when Ollama is not reachable
AUTO_DETECT_ORDER = [OllamaClient, ClaudeClient]


def _no_provider_help(reasons: list[str]) -> str:
    lines = ["No LLM provider available."]
    lines += [f"  - {reason}" for reason in reasons]
    lines += [
        "",
        "Ollama (local):",
        "  ollama serve",
        f"  ollama pull {OllamaClient.DEFAULT_MODEL}",
        "",
        "Claude API:",
        "  export ANTHROPIC_API_KEY='your-key-here'",
        "",
        "Pin a provider with OC_PROVIDER=ollama|claude or \"provider\" in .ocrc",
    ]
    return "\n".join(lines)


def get_client(provider: str = "auto", model: str | None = None) -> LLMClient:
    """Client for 'claude', 'ollama', or the first reachable one for 'auto'."""
    if provider in PROVIDERS:
        return PROVIDERS[provider](model=model)

    if provider != "auto":
        raise LLMError(f"Unknown provider: {provider}. Use one of: auto, {', '.join(PROVIDERS)}")

    reasons = []
    for client_class in AUTO_DETECT_ORDER:
        try:
            return client_class(model=model)
        except LLMError as e:
            reasons.append(str(e))
    raise LLMError(_no_provider_help(reasons))


__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "ClaudeClient",
    "OllamaClient",
    "get_client",
    "PROVIDERS",
    "AUTO_DETECT_ORDER",
]
