class TranslationError(Exception):
    """翻译服务错误的基类"""
    pass


class ValidationError(TranslationError):
    """请求参数缺失或格式错误"""
    pass


class UpstreamError(TranslationError):
    """Claude API 调用失败：网络错误、非成功状态码、空响应或无法解析的响应"""
    pass


class ConfigurationError(TranslationError):
    """Claude API 密钥未配置"""
    pass
