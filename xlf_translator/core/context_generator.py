import time
from typing import Any, List, Mapping, Optional, Union

from xlf_translator.core.config import Settings
from xlf_translator.core.content_classifier import (
    analyze_content_patterns,
    detect_content_domain,
    get_terminology_approach,
)
from xlf_translator.core.llm_client import ClaudeClient, TextGenerator
from xlf_translator.core.outcomes import ContextOutcome
from xlf_translator.core.prompts import build_context_prompt
from xlf_translator.core.schemas import (
    ContextMetadata,
    ContextRequest,
    ContextResponse,
    ContextStats,
    parse_request,
    utc_timestamp,
)
from xlf_translator.exception.exceptions import ConfigurationError, UpstreamError
from xlf_translator.utils.logger import setup_logger

NO_SPECIAL_CONSIDERATIONS = "General content clarity"

logger = setup_logger(__name__)


def build_local_context(sample_texts: List[str], user_context: str, target_lang: str) -> str:
    """Compose a context block from the local pattern and domain heuristics."""
    analysis = analyze_content_patterns(sample_texts)
    domain = detect_content_domain(sample_texts)

    logger.info(f"Content analysis: Domain={domain.primary}, Confidence={domain.confidence}%")

    considerations = ", ".join(analysis.special_considerations) or NO_SPECIAL_CONSIDERATIONS
    lines = [
        f"**CONTENT TYPE**: {analysis.content_type}",
        f"**DOMAIN**: {domain.description}",
        f"**TERMINOLOGY APPROACH**: {get_terminology_approach(domain.primary, target_lang)}",
        f"**TONE**: {analysis.recommended_tone}",
        f"**AUDIENCE**: {analysis.target_audience}",
        f"**SPECIAL CONSIDERATIONS**: {considerations}",
    ]
    if user_context and user_context.strip():
        lines.append(f"**USER REQUIREMENTS**: {user_context.strip()}")
    lines.append(f"**QUALITY STANDARDS**: Maintain XML structure integrity, preserve spacing, "
                 f"ensure {target_lang} linguistic accuracy")

    return "\n".join(lines)


class ContextGenerator:
    def __init__(self, settings: Optional[Settings] = None, generator: Optional[TextGenerator] = None):
        """
        初始化翻译上下文生成器

        参数:
            settings: 服务配置
            generator: 文本生成实现，默认使用 Claude API 客户端
        """
        self.settings = settings or Settings()
        self.generator = generator or ClaudeClient(self.settings)
        self.logger = setup_logger(self.__class__.__name__)

    async def generate_context(self, sample_texts: List[str], user_context: str, target_lang: str) -> ContextOutcome:
        """由 Claude 分析样本文本生成上下文，失败时改用本地分析"""
        try:
            prompt = build_context_prompt(sample_texts, user_context, target_lang)
            response_text = await self.generator.generate(prompt, self.settings.context_max_tokens)
            context = response_text.strip()
            if not context:
                raise UpstreamError("Claude API returned empty context")
            self.logger.info(f"Claude context generated: {len(context)} characters")
            return ContextOutcome(context)
        except (UpstreamError, ConfigurationError) as e:
            self.logger.error(f"Claude API failed: {str(e)}")
            context = build_local_context(sample_texts, user_context, target_lang)
            self.logger.info(f"Local context generated: {len(context)} characters")
            return ContextOutcome(context, fallback_reason=str(e))

    async def generate_translation_context(self,
                                           payload: Union[ContextRequest, Mapping[str, Any]]) -> ContextResponse:
        """
        处理翻译上下文生成请求

        异常:
            ValidationError: 缺少 sampleTexts 或格式错误
        """
        start_time = time.monotonic()
        request = parse_request(ContextRequest, payload)
        user_context = request.user_context or ""

        self.logger.info(f"Analyzing {len(request.sample_texts)} sample texts for {request.target_lang}, "
                         f"user context provided: {'YES' if user_context else 'NO'}")

        outcome = await self.generate_context(request.sample_texts, user_context, request.target_lang)
        processing_time = int((time.monotonic() - start_time) * 1000)

        return ContextResponse(
            success=True,
            translation_context=outcome.text,
            stats=ContextStats(
                sample_texts_analyzed=len(request.sample_texts),
                context_length=len(outcome.text),
                user_context_provided=bool(user_context),
                processing_time_ms=processing_time,
            ),
            metadata=ContextMetadata(
                target_lang=request.target_lang,
                content_type=request.content_type,
                generation_method=outcome.generation_method,
                timestamp=utc_timestamp(),
            ),
        )
