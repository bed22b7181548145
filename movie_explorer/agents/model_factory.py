"""Helpers for building provider-specific model specs."""

from __future__ import annotations

from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.azure import AzureProvider
from pydantic_ai.providers.openai import OpenAIProvider

from movie_explorer.config import LLMSettings


def build_model_spec(llm_settings: LLMSettings) -> str | OpenAIChatModel:
    provider_key = llm_settings.provider.lower()
    model_name = llm_settings.model
    if provider_key in {"azure", "azure_openai"}:
        api_key = llm_settings.azure.api_key or llm_settings.api_key
        base_url = llm_settings.azure.base_url or llm_settings.base_url
        api_version = llm_settings.azure.api_version or llm_settings.api_version
        if not (api_key and base_url and api_version):
            raise ValueError(
                "Azure OpenAI requires EXPLORER_LLM__AZURE__API_KEY, EXPLORER_LLM__AZURE__BASE_URL, "
                "and EXPLORER_LLM__AZURE__API_VERSION."
            )
        azure_provider = AzureProvider(
            azure_endpoint=str(base_url),
            api_version=api_version,
            api_key=api_key.get_secret_value(),
        )
        return OpenAIChatModel(model_name, provider=azure_provider)

    if provider_key in {"openai", "custom", "gemini"}:
        api_key, base_url = llm_settings.openai_like_credentials(provider_key)
        if provider_key == "gemini" and api_key is None:
            raise ValueError(
                "Provider 'gemini' requires an API key. Configure EXPLORER_LLM__GEMINI__API_KEY."
            )
        openai_provider = OpenAIProvider(
            api_key=api_key.get_secret_value() if api_key else None,
            base_url=base_url,
        )
        return OpenAIChatModel(model_name, provider=openai_provider)

    return f"{provider_key}:{model_name}"


__all__ = ["build_model_spec"]
