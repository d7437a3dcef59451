from typing import Optional
from pydantic import BaseModel
from discord.ext import commands

class ServiceConfig(BaseModel):
    """
    服务配置基类。

    Attributes:
        enabled (bool): 是否启用服务。
        允许动态扩展其它配置项。
    """
    enabled: bool = True

    class Config:
        extra = "allow"

class BaseService:
    """
    服务基类，提供依赖注入和配置管理。

    Attributes:
        bot (Optional[commands.Bot]): 关联的Bot实例，单独使用服务时可为空。
        _config (ServiceConfig): 服务配置。
    """

    def __init__(self, bot: Optional[commands.Bot], config: Optional[ServiceConfig] = None):
        self.bot = bot
        self._config = config or self.get_default_config()

    @classmethod
    def get_default_config(cls) -> ServiceConfig:
        """获取默认配置"""
        return ServiceConfig()

    @property
    def config(self) -> ServiceConfig:
        """当前服务配置"""
        return self._config

    async def initialize(self) -> None:
        """初始化服务资源，子类按需重写。"""

    async def cleanup(self) -> None:
        """清理服务资源，子类按需重写。"""

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()
