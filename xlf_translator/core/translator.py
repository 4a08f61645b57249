import json
import re
import time
from typing import Any, Dict, List, Mapping, Optional, Union

from xlf_translator.core.config import Settings
from xlf_translator.core.fallback import generate_contextual_fallbacks
from xlf_translator.core.llm_client import ClaudeClient, TextGenerator
from xlf_translator.core.outcomes import TranslationOutcome
from xlf_translator.core.preprocessor import preprocess_text
from xlf_translator.core.prompts import build_translation_prompt
from xlf_translator.core.schemas import (
    TranslationMetadata,
    TranslationRequest,
    TranslationResponse,
    TranslationStats,
    parse_request,
    utc_timestamp,
)
from xlf_translator.exception.exceptions import ConfigurationError, UpstreamError
from xlf_translator.utils.logger import setup_logger

_CODE_FENCE = re.compile(r"```json\s*|\s*```")


def parse_translation_response(response_text: str, expected_count: int) -> Dict[str, str]:
    """
    解析模型返回的 JSON 翻译结果

    参数:
        response_text: 模型回复，可能包裹在 markdown 代码块中
        expected_count: 本分块的文本数量

    返回:
        Dict[str, str]: 以字符串下标为键的翻译映射

    异常:
        UpstreamError: 无法解析、不是 JSON 对象，或键集合与输入下标不一致
    """
    cleaned = _CODE_FENCE.sub("", response_text).strip()
    try:
        translations = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise UpstreamError(f"Failed to parse Claude response: {str(e)}") from e

    if not isinstance(translations, dict):
        raise UpstreamError("Claude response is not a JSON object")

    expected_keys = {str(i) for i in range(expected_count)}
    if set(translations) != expected_keys:
        missing = sorted(expected_keys - set(translations), key=int)
        unexpected = sorted(set(translations) - expected_keys)
        raise UpstreamError(f"Claude response keys mismatch: missing={missing}, unexpected={unexpected}")

    if not all(isinstance(value, str) for value in translations.values()):
        raise UpstreamError("Claude response contains non-string translations")

    return {str(i): translations[str(i)] for i in range(expected_count)}


class XlfTranslator:
    def __init__(self, settings: Optional[Settings] = None, generator: Optional[TextGenerator] = None):
        """
        初始化 XLF 翻译器

        参数:
            settings: 服务配置
            generator: 文本生成实现，默认使用 Claude API 客户端
        """
        self.settings = settings or Settings()
        self.generator = generator or ClaudeClient(self.settings)
        self.logger = setup_logger(self.__class__.__name__)

    async def _translate_with_claude(self,
                                     texts: List[str],
                                     source_lang: str,
                                     target_lang: str,
                                     translation_context: Optional[str]) -> Dict[str, str]:
        self.logger.info(f"Translating {len(texts)} texts from {source_lang} to {target_lang}, "
                         f"context applied: {'YES' if translation_context else 'NO'}")
        prompt = build_translation_prompt(texts, source_lang, target_lang, translation_context)
        response_text = await self.generator.generate(prompt, self.settings.translation_max_tokens)
        translations = parse_translation_response(response_text, len(texts))
        self.logger.info(f"Successfully parsed {len(translations)} translations")
        return translations

    async def translate_chunk(self,
                              texts: List[str],
                              source_lang: str,
                              target_lang: str,
                              translation_context: Optional[str] = None) -> TranslationOutcome:
        """
        翻译一个已预处理的分块，失败时生成占位翻译

        返回:
            TranslationOutcome: 真实翻译或带失败原因的占位翻译
        """
        try:
            translations = await self._translate_with_claude(texts, source_lang, target_lang, translation_context)
            return TranslationOutcome(translations)
        except (UpstreamError, ConfigurationError) as e:
            self.logger.error(f"Claude API failed: {str(e)}")
            fallbacks = generate_contextual_fallbacks(texts, target_lang, translation_context)
            return TranslationOutcome(fallbacks, fallback_reason=str(e))

    async def process_translation(self,
                                  payload: Union[TranslationRequest, Mapping[str, Any]]) -> TranslationResponse:
        """
        处理一个 XLF 分块的翻译请求

        参数:
            payload: 请求体（dict 或 TranslationRequest）

        返回:
            TranslationResponse: 翻译映射、统计信息和元数据

        异常:
            ValidationError: 缺少 chunkTexts / targetLang 或格式错误
        """
        start_time = time.monotonic()
        request = parse_request(TranslationRequest, payload)

        self.logger.info(f"Processing chunk {request.chunk_index + 1}/{request.total_chunks}: "
                         f"{len(request.chunk_texts)} texts")
        context = request.translation_context
        self.logger.info(f"Translation context: {f'{len(context)} chars' if context else 'none'}")

        processed_texts = [preprocess_text(text, i) for i, text in enumerate(request.chunk_texts)]

        outcome = await self.translate_chunk(processed_texts, request.source_lang, request.target_lang, context)
        if outcome.is_fallback:
            self.logger.warning(f"Chunk {request.chunk_index + 1}/{request.total_chunks} "
                                f"served with fallback translations")

        processing_time = int((time.monotonic() - start_time) * 1000)

        return TranslationResponse(
            success=True,
            chunk_index=request.chunk_index,
            translations=outcome.translations,
            stats=TranslationStats(
                texts_processed=len(processed_texts),
                real_translations=len(outcome.translations),
                chunk_complete=True,
                contextual_translation=bool(context),
                processing_time_ms=processing_time,
            ),
            metadata=TranslationMetadata(
                source_lang=request.source_lang,
                target_lang=request.target_lang,
                chunk_info=f"{request.chunk_index + 1}/{request.total_chunks}",
                timestamp=utc_timestamp(),
            ),
        )
