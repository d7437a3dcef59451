"""命令签名推导

把远程服务返回的 MemeParamSchema 转换为 CommandSpec。
全部为纯函数，不依赖 discord 或网络，便于单独测试。
"""

from typing import Iterable, List
from memebot.config.settings import MemeEntry
from .models import CommandSpec, MemeParamSchema, OptionSpec, Slot

COMMAND_PREFIX = "memegen-"

_LABELS = {
    ("image", True): "图片",
    ("text", True): "文本",
    ("image", False): "可选图片",
    ("text", False): "可选文本",
}

def command_name(key: str) -> str:
    """`drake_like` -> `memegen-drake-like`"""
    return COMMAND_PREFIX + key.lower().replace("_", "-")

def _slots(kind: str, required: bool, count: int) -> List[Slot]:
    label = _LABELS[(kind, required)]
    return [
        Slot(kind=kind, required=required, index=i + 1, label=f"{label}{i + 1}")
        for i in range(count)
    ]

def build_slots(schema: MemeParamSchema) -> tuple[Slot, ...]:
    """必选图片、必选文本、可选图片、可选文本，顺序固定。"""
    return tuple(
        _slots("image", True, schema.min_images)
        + _slots("text", True, schema.min_texts)
        + _slots("image", False, schema.max_images - schema.min_images)
        + _slots("text", False, schema.max_texts - schema.min_texts)
    )

def build_example(bot_name: str, display_name: str, default_texts: Iterable[str]) -> str:
    quoted = " ".join(f'"{text}"' for text in default_texts)
    return f"@{bot_name} /{display_name} {quoted}"

def build_command_spec(entry: MemeEntry, schema: MemeParamSchema, bot_name: str) -> CommandSpec:
    """
    根据表情配置与参数约束生成命令描述。
    Args:
        entry (MemeEntry): 表情配置。
        schema (MemeParamSchema): 远程参数约束。
        bot_name (str): 机器人名称，用于使用示例。
    Returns:
        CommandSpec: 命令描述。
    """
    return CommandSpec(
        key=entry.key,
        display_name=entry.name,
        command_name=command_name(entry.key),
        aliases=(entry.name,) if entry.name != entry.key else (),
        description=f"生成{entry.name}图片",
        slots=build_slots(schema),
        options=tuple(
            OptionSpec(
                name=arg.name,
                description=arg.description or "",
                type=arg.type,
                default=arg.default
            )
            for arg in schema.args
        ),
        example=build_example(bot_name, entry.name, schema.default_texts),
    )
