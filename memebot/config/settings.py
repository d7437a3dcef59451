from typing import Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# 加载环境变量
load_dotenv()

class MemeEntry(BaseModel):
    """
    单个表情配置项。

    Attributes:
        key (str): 远程服务中的表情 key，用于拼接 API 路径。
        name (str): 显示名称，作为命令别名使用。
    """
    key: str
    name: str

    class Config:
        frozen = True

class BotConfig(BaseSettings):
    """机器人配置模型"""
    # Discord配置
    discord_token: str = Field(
        default=...,
        validation_alias='discord_bot_token',
        description="Discord机器人令牌"
    )
    command_prefix: str = Field(
        default="!",
        description="命令前缀"
    )
    bot_name: str = Field(
        default="memebot",
        description="机器人显示名称，用于生成使用示例"
    )

    # 表情生成服务配置
    memegen_endpoint: str = Field(
        default="http://127.0.0.1:2233",
        description="meme-generator 服务地址"
    )
    memegen_memes: list[MemeEntry] = Field(
        default_factory=list,
        description="需要注册为命令的表情列表（JSON）"
    )
    memegen_stop_on_error: bool = Field(
        default=True,
        description="某个表情加载失败时是否中止后续表情的注册"
    )
    memegen_timeout: float = Field(
        default=30,
        description="请求超时时间（秒）"
    )

    class Config:
        env_file = '.env'
        env_file_encoding = 'utf-8'
        case_sensitive = False
        extra = 'ignore'

class Settings:
    """全局设置管理器"""
    _instance: Optional[BotConfig] = None

    @classmethod
    def load(cls) -> None:
        """加载配置"""
        try:
            cls._instance = BotConfig()
            print("✅ 配置加载成功")
        except Exception as e:
            print(f"❌ 配置加载失败: {e}")
            raise

    @classmethod
    def get(cls) -> BotConfig:
        """获取配置实例"""
        if cls._instance is None:
            cls.load()
        return cls._instance

    @classmethod
    def validate(cls) -> bool:
        """验证配置"""
        config = cls.get()
        if not config.discord_token:
            raise ValueError("Discord令牌未设置")
        print("✅ 配置验证通过")
        return True
