import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

CLAUDE_API_URL = "https://api.anthropic.com/v1/messages"
CLAUDE_MODEL = "claude-sonnet-4-20250514"
ANTHROPIC_VERSION = "2023-06-01"

BASE_DIR = Path(__file__).resolve().parent.parent.parent


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


@dataclass
class Settings:
    """服务配置，在构造时注入翻译器、上下文生成器和应用"""
    claude_api_key: Optional[str] = None
    claude_api_url: str = CLAUDE_API_URL
    claude_model: str = CLAUDE_MODEL
    anthropic_version: str = ANTHROPIC_VERSION
    translation_max_tokens: int = 8000
    context_max_tokens: int = 1000
    request_timeout: Optional[float] = None  # None: 不设置超时
    host: str = "0.0.0.0"
    port: int = 10000
    max_body_mb: int = 50
    static_dir: str = str(BASE_DIR / "static")

    @classmethod
    def from_env(cls) -> "Settings":
        """从环境变量（以及 .env 文件）加载配置"""
        load_dotenv()
        defaults = cls()
        return cls(
            claude_api_key=os.getenv("CLAUDE_API_KEY") or None,
            claude_api_url=os.getenv("CLAUDE_API_URL", defaults.claude_api_url),
            claude_model=os.getenv("CLAUDE_MODEL", defaults.claude_model),
            anthropic_version=os.getenv("ANTHROPIC_VERSION", defaults.anthropic_version),
            translation_max_tokens=int(os.getenv("TRANSLATION_MAX_TOKENS", defaults.translation_max_tokens)),
            context_max_tokens=int(os.getenv("CONTEXT_MAX_TOKENS", defaults.context_max_tokens)),
            request_timeout=_optional_float(os.getenv("CLAUDE_TIMEOUT")),
            host=os.getenv("HOST", defaults.host),
            port=int(os.getenv("PORT", defaults.port)),
            max_body_mb=int(os.getenv("MAX_BODY_MB", defaults.max_body_mb)),
            static_dir=os.getenv("STATIC_DIR", defaults.static_dir),
        )
