from typing import Optional, Protocol

import httpx

from xlf_translator.core.config import Settings
from xlf_translator.exception.exceptions import ConfigurationError, UpstreamError
from xlf_translator.utils.logger import setup_logger


class TextGenerator(Protocol):
    """文本生成能力：失败时抛出 UpstreamError 或 ConfigurationError"""

    async def generate(self, prompt: str, max_tokens: int) -> str:
        ...


class ClaudeClient:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        初始化 Claude API 客户端

        参数:
            settings: 服务配置（API密钥、模型、接口地址）
            transport: 可选的 httpx 传输层，测试时替换为 MockTransport
        """
        self.settings = settings
        self.transport = transport
        self.logger = setup_logger(self.__class__.__name__)

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json; charset=utf-8",
            "x-api-key": self.settings.claude_api_key,
            "anthropic-version": self.settings.anthropic_version,
        }

    async def generate(self, prompt: str, max_tokens: int) -> str:
        """
        发送单条用户消息并返回模型回复文本

        参数:
            prompt: 发送给模型的完整提示
            max_tokens: 输出 token 上限

        返回:
            str: content[0].text

        异常:
            ConfigurationError: 未配置 API 密钥
            UpstreamError: 网络错误、非成功状态码、响应为空或无法解析
        """
        if not self.settings.claude_api_key:
            raise ConfigurationError("Claude API key not configured")

        payload = {
            "model": self.settings.claude_model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

        self.logger.info(f"Sending request to Claude API ({len(prompt)} chars, max_tokens={max_tokens})")
        try:
            async with httpx.AsyncClient(transport=self.transport,
                                         timeout=self.settings.request_timeout) as client:
                response = await client.post(self.settings.claude_api_url,
                                             headers=self._headers(),
                                             json=payload)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Claude API request failed: {str(e)}") from e

        if not response.is_success:
            raise UpstreamError(f"Claude API error {response.status_code}: {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(f"Claude API returned invalid JSON: {str(e)}") from e

        try:
            text = data["content"][0]["text"]
        except (KeyError, IndexError, TypeError):
            text = None

        if not isinstance(text, str) or not text:
            raise UpstreamError("Claude API returned empty response")

        self.logger.info(f"Response received: {len(text)} characters")
        return text
