from typing import List
from pydantic import Field, field_validator
from memebot.bot.services.base import ServiceConfig
from memebot.config.settings import BotConfig, MemeEntry

class MemegenConfig(ServiceConfig):
    """表情生成插件配置"""
    bot_name: str = Field(default="memebot", description="机器人名称，用于使用示例")
    endpoint: str = Field(default="http://127.0.0.1:2233", description="meme-generator 服务地址")
    memes: List[MemeEntry] = Field(default_factory=list, description="需要注册的表情")
    stop_on_error: bool = Field(default=True, description="加载失败时是否中止后续注册")
    timeout: float = Field(default=30, gt=0, description="请求超时时间（秒）")

    @field_validator("endpoint")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        if value.endswith("/"):
            return value[:-1]
        return value

    @classmethod
    def from_settings(cls, settings: BotConfig) -> "MemegenConfig":
        """从全局配置生成插件配置"""
        return cls(
            enabled=bool(settings.memegen_memes),
            bot_name=settings.bot_name,
            endpoint=settings.memegen_endpoint,
            memes=settings.memegen_memes,
            stop_on_error=settings.memegen_stop_on_error,
            timeout=settings.memegen_timeout
        )
