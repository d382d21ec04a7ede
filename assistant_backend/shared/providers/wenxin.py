"""
Wenxin (Baidu Qianfan) provider implementation.
"""

from .openai_compatible import OpenAICompatibleProvider
from ..models.enums import Provider


class WenxinProvider(OpenAICompatibleProvider):
    """Baidu ERNIE through the Qianfan v2 chat-completions API. Buffered and stateless."""

    model_provider = Provider.WENXIN

    display_name = "Wenxin ERNIE"
    default_model = "ernie-4.0-8k"
    description = "Baidu ERNIE model served by Qianfan"
    default_base_url = "https://qianfan.baidubce.com/v2/chat/completions"
    top_p = 0.8
