"""
Initializer - loads the provider configuration file.
"""

import os
import re
from typing import Any, Dict, Optional
import yaml
import aiofiles
from loguru import logger

from ..models.enums import Provider
from ..models.internal import ProviderConfig, ProviderSettings


DEFAULT_PROVIDER_SETTINGS: Dict[str, Dict[str, Any]] = {
    Provider.MOCK.value: {
        "model": "mock-model",
    },
    Provider.DEEPSEEK.value: {
        "base_url": "https://api.deepseek.com/v1/chat/completions",
        "model": "deepseek-chat",
        "max_tokens": 4000,
    },
    Provider.TONGYI.value: {
        "base_url": "https://dashscope.aliyuncs.com/api/v1/services/aigc/text-generation/generation",
        "model": "qwen-turbo",
        "max_tokens": 2000,
        "timeout": 30.0,
    },
    Provider.WENXIN.value: {
        "base_url": "https://qianfan.baidubce.com/v2/chat/completions",
        "model": "ernie-4.0-8k",
        "max_tokens": 16384,
    },
    Provider.ZHIPU.value: {
        "base_url": "https://open.bigmodel.cn/api/paas/v4/chat/completions",
        "model": "glm-4",
        "max_tokens": 2000,
    },
    Provider.OPENAI.value: {
        "model": "gpt-4o-mini",
        "max_tokens": 2000,
    },
    Provider.ANTHROPIC.value: {
        "model": "claude-3-5-haiku-latest",
        "max_tokens": 2000,
    },
}

_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def replace_env_placeholders(content: str) -> str:
    """Replace ``${VAR}`` placeholders with the environment value, empty when unset."""
    return _PLACEHOLDER.sub(lambda match: os.getenv(match.group(1), ""), content)


class Initializer:
    """
    Resolves the provider configuration at startup.

    Precedence, lowest first: built-in defaults, the YAML file (with ``${VAR}``
    placeholders expanded), then ``<PROVIDER>_API_KEY``, ``<PROVIDER>_BASE_URL``
    and ``AI_DEFAULT_MODEL`` environment variables.
    """

    def __init__(self, provider_file_path: Optional[str] = None, default_model: Optional[str] = None):
        """
        Args:
            provider_file_path: Path to providers.yaml (defaults to env var PROVIDER_CONFIG_FILE)
            default_model: Default model from application settings, applied before env overrides
        """
        self.provider_file_path = provider_file_path or os.getenv("PROVIDER_CONFIG_FILE", "configs/providers.yaml")
        self._default_model = default_model
        self.provider_config: Optional[ProviderConfig] = None
        logger.info(f"Initializer configured with provider file: {self.provider_file_path}")

    async def initialize(self) -> ProviderConfig:
        raw = await self._load_provider_file()
        self.provider_config = self._resolve(raw)
        configured = [name for name, s in self.provider_config.providers.items() if s.has_credentials()]
        logger.info(
            f"Provider configuration loaded: default={self.provider_config.default_model}, "
            f"with credentials={configured}"
        )
        return self.provider_config

    async def _load_provider_file(self) -> Dict[str, Any]:
        """Read the YAML file. A missing file yields an empty mapping."""
        if not os.path.exists(self.provider_file_path):
            logger.warning(f"Provider config file not found: {self.provider_file_path}, using defaults")
            return {}

        async with aiofiles.open(self.provider_file_path, "r", encoding="utf-8") as file:
            content = await file.read()

        data = yaml.safe_load(replace_env_placeholders(content)) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Provider config file {self.provider_file_path} must contain a mapping")
        # Accept both a top-level mapping and one nested under "ai".
        if "ai" in data:
            data = data["ai"] or {}
            if not isinstance(data, dict):
                raise ValueError(f"The ai block in {self.provider_file_path} must be a mapping")
        return data

    def _resolve(self, raw: Dict[str, Any]) -> ProviderConfig:
        providers: Dict[str, ProviderSettings] = {}
        for provider in Provider:
            values = dict(DEFAULT_PROVIDER_SETTINGS.get(provider.value, {}))
            file_values = raw.get(provider.value) or {}
            if not isinstance(file_values, dict):
                raise ValueError(f"Provider block {provider.value!r} must be a mapping, got {type(file_values).__name__}")
            values.update({k: v for k, v in file_values.items() if v not in (None, "")})

            env_prefix = provider.value.upper()
            if os.getenv(f"{env_prefix}_API_KEY"):
                values["api_key"] = os.environ[f"{env_prefix}_API_KEY"]
            if os.getenv(f"{env_prefix}_BASE_URL"):
                values["base_url"] = os.environ[f"{env_prefix}_BASE_URL"]

            providers[provider.value] = ProviderSettings(**values)

        default_model = raw.get("default_model") or "mock"
        if self._default_model:
            default_model = self._default_model
        if os.getenv("AI_DEFAULT_MODEL"):
            default_model = os.environ["AI_DEFAULT_MODEL"]

        return ProviderConfig(default_model=default_model, providers=providers)

    def get_provider_config(self) -> ProviderConfig:
        if self.provider_config is None:
            raise RuntimeError("Provider configuration not loaded. Call initialize() first.")
        return self.provider_config
