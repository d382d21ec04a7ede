"""
Zhipu GLM provider implementation.
"""

from .openai_compatible import OpenAICompatibleProvider
from ..models.enums import Provider


class ZhipuProvider(OpenAICompatibleProvider):
    """Zhipu GLM. Streams natively but does not keep conversation history."""

    model_provider = Provider.ZHIPU
    supports_streaming = True

    display_name = "Zhipu GLM-4"
    default_model = "glm-4"
    description = "Zhipu AI GLM-4 model"
    default_base_url = "https://open.bigmodel.cn/api/paas/v4/chat/completions"
    top_p = 0.7
