from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class TranslationOutcome:
    """一个分块的翻译结果：fallback_reason 为 None 表示来自 Claude 的真实翻译"""
    translations: Dict[str, str]
    fallback_reason: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.fallback_reason is not None


@dataclass
class ContextOutcome:
    """翻译上下文生成结果：fallback_reason 为 None 表示由 Claude 生成"""
    text: str
    fallback_reason: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.fallback_reason is not None

    @property
    def generation_method(self) -> str:
        return "local" if self.is_fallback else "claude"
