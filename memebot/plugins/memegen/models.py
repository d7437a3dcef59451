import json
from dataclasses import dataclass, field
from typing import Any, List, Optional, Dict
from pydantic import BaseModel, Field, model_validator

DEFAULT_CONTENT_TYPE = "image/png"

class MemeArg(BaseModel):
    """表情的可选参数描述（type 仅供参考）"""
    name: str
    type: str = "str"
    description: Optional[str] = None
    default: Any = None

class MemeParamSchema(BaseModel):
    """
    远程服务描述的表情参数约束。

    Attributes:
        min_images / max_images (int): 图片数量范围。
        min_texts / max_texts (int): 文本数量范围。
        default_texts (List[str]): 默认文本，用于生成使用示例。
        args (List[MemeArg]): 可选参数，每个对应一个命令选项。
    """
    min_images: int = Field(default=0, ge=0)
    max_images: int = Field(default=0, ge=0)
    min_texts: int = Field(default=0, ge=0)
    max_texts: int = Field(default=0, ge=0)
    default_texts: List[str] = Field(default_factory=list)
    args: List[MemeArg] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_ranges(self) -> "MemeParamSchema":
        if self.min_images > self.max_images:
            raise ValueError("min_images 不能大于 max_images")
        if self.min_texts > self.max_texts:
            raise ValueError("min_texts 不能大于 max_texts")
        return self

    class Config:
        frozen = True

class MemeInfo(BaseModel):
    """`/memes/{key}/info` 的响应体"""
    key: str
    keywords: List[str] = Field(default_factory=list)
    params: MemeParamSchema

@dataclass(frozen=True, slots=True)
class Slot:
    """命令的一个位置参数"""
    kind: str  # "image" | "text"
    required: bool
    index: int
    label: str

    @property
    def name(self) -> str:
        prefix = "" if self.required else "optional_"
        return f"{prefix}{self.kind}_{self.index}"

@dataclass(frozen=True, slots=True)
class OptionSpec:
    name: str
    description: str = ""
    type: str = "str"
    default: Any = None

@dataclass(frozen=True, slots=True)
class CommandSpec:
    """
    由 MemeParamSchema 推导出的命令描述，注册后不再改变。

    Attributes:
        key (str): 表情 key。
        display_name (str): 显示名称。
        command_name (str): 命令名，形如 memegen-xxx。
        aliases (tuple[str, ...]): 命令别名。
        description (str): 命令说明。
        slots (tuple[Slot, ...]): 位置参数，必选在前，图片在前。
        options (tuple[OptionSpec, ...]): 可选参数。
        example (str): 使用示例。
    """
    key: str
    display_name: str
    command_name: str
    aliases: tuple[str, ...]
    description: str
    slots: tuple[Slot, ...]
    options: tuple[OptionSpec, ...]
    example: str

    @property
    def required_slots(self) -> tuple[Slot, ...]:
        return tuple(s for s in self.slots if s.required)

    @property
    def optional_slots(self) -> tuple[Slot, ...]:
        return tuple(s for s in self.slots if not s.required)

    @property
    def max_arguments(self) -> int:
        return len(self.slots)

    @property
    def usage(self) -> str:
        """discord 风格的参数签名"""
        parts = [f"<{s.label}>" if s.required else f"[{s.label}]" for s in self.slots]
        parts.extend(f"[--{o.name} 值]" for o in self.options)
        return " ".join(parts)

@dataclass(slots=True)
class InvocationRequest:
    """单次调用的请求数据，调用结束即丢弃"""
    texts: List[str] = field(default_factory=list)
    options: Dict[str, Optional[str]] = field(default_factory=dict)

    @property
    def has_options(self) -> bool:
        """是否有任一选项取值为真"""
        return any(value for value in self.options.values())

    def options_json(self) -> str:
        # 未设置的选项不写入，与宿主的选项解析规则一致
        return json.dumps(
            {k: v for k, v in self.options.items() if v is not None},
            ensure_ascii=False
        )

_EXTENSIONS = {
    "image/png": "png",
    "image/gif": "gif",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/webp": "webp",
}

@dataclass(slots=True)
class RenderResult:
    """生成的图片"""
    data: bytes
    content_type: str = DEFAULT_CONTENT_TYPE

    @property
    def extension(self) -> str:
        mime = self.content_type.split(";", 1)[0].strip().lower()
        return _EXTENSIONS.get(mime, "png")

    def filename(self, stem: str) -> str:
        return f"{stem}.{self.extension}"
