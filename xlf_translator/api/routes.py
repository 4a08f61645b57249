import time
from pathlib import Path
from typing import Any, Optional

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, JSONResponse
from starlette.middleware.cors import CORSMiddleware

from xlf_translator.core.config import Settings
from xlf_translator.core.context_generator import ContextGenerator
from xlf_translator.core.llm_client import ClaudeClient, TextGenerator
from xlf_translator.core.schemas import utc_timestamp
from xlf_translator.core.translator import XlfTranslator
from xlf_translator.exception.exceptions import ValidationError
from xlf_translator.utils.logger import setup_logger

SERVICE_NAME = "xlf-translator"

logger = setup_logger("XlfApi")


def _error_response(service: str, error: Exception, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": str(error), "service": service},
    )


def create_app(settings: Optional[Settings] = None, generator: Optional[TextGenerator] = None) -> FastAPI:
    """
    创建 FastAPI 应用

    参数:
        settings: 服务配置，默认从环境变量加载
        generator: 文本生成实现，默认使用 Claude API 客户端
    """
    settings = settings or Settings.from_env()
    generator = generator or ClaudeClient(settings)
    translator = XlfTranslator(settings, generator)
    context_generator = ContextGenerator(settings, generator)
    started_at = time.monotonic()
    max_body_bytes = settings.max_body_mb * 1024 * 1024

    app = FastAPI(title="XLF Translator")
    app.state.settings = settings

    # 允许跨域请求
    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > max_body_bytes:
            return JSONResponse(
                status_code=413,
                content={"success": False, "error": f"Request body exceeds {settings.max_body_mb}MB"},
            )
        return await call_next(request)

    @app.get("/health")
    async def health():
        """健康检查"""
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "timestamp": utc_timestamp(),
            "uptime": time.monotonic() - started_at,
        }

    @app.post("/api/process-xlf")
    async def process_xlf(payload: Any = Body(...)):
        """翻译一个 XLF 文本分块"""
        logger.info("Processing XLF translation request")
        try:
            result = await translator.process_translation(payload)
        except ValidationError as e:
            logger.warning(f"Invalid translation request: {str(e)}")
            return _error_response("process-xlf", e, 400)
        except Exception as e:
            logger.exception(f"XLF processing error: {str(e)}")
            return _error_response("process-xlf", e, 500)
        return result.to_json_dict()

    @app.post("/api/generate-context")
    async def generate_context(payload: Any = Body(...)):
        """根据样本文本生成翻译上下文"""
        logger.info("Generating translation context")
        try:
            result = await context_generator.generate_translation_context(payload)
        except ValidationError as e:
            logger.warning(f"Invalid context request: {str(e)}")
            return _error_response("generate-context", e, 400)
        except Exception as e:
            logger.exception(f"Context generation error: {str(e)}")
            return _error_response("generate-context", e, 500)
        return result.to_json_dict()

    @app.get("/{full_path:path}")
    async def frontend(full_path: str):
        """前端路由：静态文件存在时直接返回，其余路径返回 index.html"""
        static_dir = Path(settings.static_dir).resolve()
        requested = (static_dir / full_path).resolve()
        if full_path and requested.is_file() and static_dir in requested.parents:
            return FileResponse(requested)

        index_file = static_dir / "index.html"
        if not index_file.is_file():
            raise HTTPException(status_code=404, detail="Frontend not found")
        return FileResponse(index_file)

    return app
