from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from xlf_translator.exception.exceptions import ValidationError


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


RequestT = TypeVar("RequestT", bound=CamelModel)


def parse_request(model: Type[RequestT], payload: Union[RequestT, Mapping[str, Any], None]) -> RequestT:
    """Validate a JSON body against ``model``, raising ValidationError on any problem."""
    if isinstance(payload, model):
        return payload
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(dict(payload))
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ValidationError(f"Invalid request: {problems}") from e


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class TranslationRequest(CamelModel):
    chunk_texts: List[str] = Field(..., min_length=1)
    chunk_index: int = 0
    total_chunks: int = 1
    source_lang: str = "en"
    target_lang: str = Field(..., min_length=1)
    translation_context: Optional[str] = None
    source_content: Optional[str] = None


class TranslationStats(CamelModel):
    texts_processed: int
    real_translations: int
    chunk_complete: bool
    contextual_translation: bool
    processing_time_ms: int


class TranslationMetadata(CamelModel):
    source_lang: str
    target_lang: str
    chunk_info: str
    timestamp: str


class TranslationResponse(CamelModel):
    success: bool = True
    chunk_index: int
    translations: Dict[str, str]
    stats: TranslationStats
    metadata: TranslationMetadata


class ContextRequest(CamelModel):
    sample_texts: List[str] = Field(..., min_length=1)
    user_context: Optional[str] = ""
    target_lang: str = "es"
    content_type: str = "educational"


class ContextStats(CamelModel):
    sample_texts_analyzed: int
    context_length: int
    user_context_provided: bool
    processing_time_ms: int


class ContextMetadata(CamelModel):
    target_lang: str
    content_type: str
    generation_method: str
    timestamp: str


class ContextResponse(CamelModel):
    success: bool = True
    translation_context: str
    stats: ContextStats
    metadata: ContextMetadata
