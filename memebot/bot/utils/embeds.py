from discord import Embed
from typing import Optional, Any
from pydantic import BaseModel, Field
from datetime import datetime

class EmbedTheme(BaseModel):
    """
    Embed主题配置。

    Attributes:
        primary (int): 主色调。
        success (int): 成功色。
        warning (int): 警告色。
        danger (int): 错误色。
        info (int): 信息色。
    """
    primary: int = Field(default=0x3498db)    # 蓝色
    success: int = Field(default=0x2ecc71)    # 绿色
    warning: int = Field(default=0xf39c12)    # 橙色
    danger: int = Field(default=0xe74c3c)     # 红色
    info: int = Field(default=0x9b59b6)       # 紫色

    @property
    def error(self) -> int:
        """错误色（danger的别名）"""
        return self.danger

    class Config:
        frozen = True

class EmbedData(BaseModel):
    """
    Embed数据模型。

    Attributes:
        title (str): 标题。
        description (Optional[str]): 描述。
        color (int): 颜色。
        footer_text (Optional[str]): 页脚文本。
        timestamp (bool): 是否显示时间戳。
        fields (list[dict]): 附加字段。
    """
    title: str
    description: Optional[str] = None
    color: int = Field(default=0x3498db)
    footer_text: Optional[str] = None
    timestamp: bool = True
    fields: list[dict[str, Any]] = Field(default_factory=list)

class EmbedBuilder:
    """
    Embed构建器。
    提供多种类型的Embed快捷创建方法。
    """

    THEME = EmbedTheme()

    @classmethod
    def create(cls, data: EmbedData) -> Embed:
        """
        从EmbedData创建Embed。
        Args:
            data (EmbedData): 数据模型。
        Returns:
            Embed: Discord Embed对象。
        """
        embed = Embed(
            title=data.title,
            description=data.description,
            color=data.color
        )

        if data.timestamp:
            embed.timestamp = datetime.now()

        if data.footer_text:
            embed.set_footer(text=data.footer_text)

        for field in data.fields:
            embed.add_field(**field)

        return embed

    @classmethod
    def info(cls, title: str, description: Optional[str] = None) -> Embed:
        return cls.create(EmbedData(
            title=f"ℹ️ {title}",
            description=description,
            color=cls.THEME.info
        ))

    @classmethod
    def warning(cls, title: str, description: Optional[str] = None) -> Embed:
        return cls.create(EmbedData(
            title=f"⚠️ {title}",
            description=description,
            color=cls.THEME.warning
        ))

    @classmethod
    def error(cls, title: str, description: Optional[str] = None) -> Embed:
        return cls.create(EmbedData(
            title=f"❌ {title}",
            description=description,
            color=cls.THEME.danger
        ))
