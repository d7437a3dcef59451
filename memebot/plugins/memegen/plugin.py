import io
import inspect
import logging
import types
from itertools import takewhile
from typing import Dict, List, Optional, Type
import discord
from discord.ext import commands
from memebot.bot.utils import EmbedBuilder, EmbedData, truncate_text
from memebot.config.settings import Settings
from .config import MemegenConfig
from .invoker import MemeInvoker
from .models import CommandSpec, RenderResult
from .registrar import load_command_specs
from .service import MemeService

logger = logging.getLogger(__name__)

FLAG_PREFIX = "--"

class SlotArgument(commands.Converter):
    """位置参数转换器，遇到选项开头的参数时让位给选项解析"""

    async def convert(self, ctx: commands.Context, argument: str) -> str:
        if argument.startswith(FLAG_PREFIX):
            raise commands.BadArgument(f"{argument} 是选项而不是参数")
        return argument

class DiscordSession:
    """把 commands.Context 适配为 MemeInvoker 需要的会话接口"""

    def __init__(self, ctx: commands.Context, key: str):
        self.ctx = ctx
        self.key = key

    async def send_image(self, image: RenderResult) -> None:
        file = discord.File(io.BytesIO(image.data), filename=image.filename(self.key))
        await self.ctx.send(file=file)

    async def send_text(self, text: str) -> None:
        await self.ctx.send(text)

    async def send_help(self, command_name: str) -> None:
        await self.ctx.send_help(command_name)

def build_flag_converter(spec: CommandSpec) -> Optional[Type[commands.FlagConverter]]:
    """
    根据表情的可选参数动态创建 FlagConverter。
    每个参数对应一个 `--name 值` 形式的选项，未提供时为 None。
    """
    if not spec.options:
        return None

    def body(ns: dict) -> None:
        annotations = {}
        for i, option in enumerate(spec.options):
            attr = f"option_{i}"
            annotations[attr] = Optional[str]
            kwargs = {"name": option.name, "default": None}
            if option.description:
                kwargs["description"] = option.description
            ns[attr] = commands.flag(**kwargs)
        ns["__annotations__"] = annotations
        ns["__module__"] = __name__

    class_name = spec.command_name.replace("-", "_").title().replace("_", "") + "Flags"
    return types.new_class(
        class_name,
        (commands.FlagConverter,),
        {"prefix": FLAG_PREFIX, "delimiter": " "},
        body
    )

def resolve_options(flags: Optional[commands.FlagConverter]) -> Dict[str, Optional[str]]:
    """把 FlagConverter 实例转换为 {选项名: 值}"""
    if flags is None:
        return {}
    return {
        flag.name: getattr(flags, flag.attribute)
        for flag in flags.get_flags().values()
    }

def build_command(spec: CommandSpec, invoker: MemeInvoker) -> commands.Command:
    """
    由 CommandSpec 合成 discord 命令。

    所有位置参数在解析层面都是可选的，以便无参数调用时显示预览；
    提供了部分参数但不足必选数量时抛出 MissingRequiredArgument。
    """
    flags_cls = build_flag_converter(spec)
    required = len(spec.required_slots)

    params = [commands.Parameter("ctx", inspect.Parameter.POSITIONAL_OR_KEYWORD)]
    for slot in spec.slots:
        params.append(commands.Parameter(
            slot.name,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            default=None,
            annotation=Optional[SlotArgument],
            displayed_name=slot.label
        ))
    if flags_cls is not None:
        params.append(commands.Parameter(
            "options",
            inspect.Parameter.KEYWORD_ONLY,
            annotation=flags_cls
        ))

    async def callback(ctx: commands.Context, *args, options=None):
        supplied = list(takewhile(lambda x: x is not None, args))
        if 0 < len(supplied) < required:
            missing = spec.required_slots[len(supplied)]
            raise commands.MissingRequiredArgument(ctx.command.clean_params[missing.name])

        session = DiscordSession(ctx, spec.key)
        result = await invoker.invoke(session, supplied, resolve_options(options))
        if result is not None:
            await session.send_image(result)

    callback.__signature__ = inspect.Signature(params)
    callback.__name__ = spec.command_name.replace("-", "_")

    return commands.Command(
        callback,
        name=spec.command_name,
        aliases=list(spec.aliases),
        brief=spec.description,
        help=f"{spec.description}\n\n使用示例：{spec.example}",
        usage=spec.usage,
    )

class MemegenPlugin(commands.Cog):
    """表情生成插件，把 meme-generator 服务中的表情注册为命令"""

    def __init__(self, bot: commands.Bot, config: MemegenConfig, service: Optional[MemeService] = None):
        self.bot = bot
        self.config = config
        self.service = service or MemeService(bot, config)
        self.specs: List[CommandSpec] = []

    async def load_memes(self) -> List[CommandSpec]:
        """获取表情信息并注册对应命令"""
        await self.service.initialize()
        result = await load_command_specs(
            self.service,
            self.config.memes,
            self.config.bot_name,
            stop_on_error=self.config.stop_on_error
        )
        for spec in result.specs:
            cmd = build_command(spec, MemeInvoker(self.service, spec))
            try:
                self.bot.register_command(cmd)
            except commands.CommandRegistrationError as e:
                logger.warning(f"❌ 注册命令 {spec.command_name} 失败: {e}")
                continue
            self.specs.append(spec)
        return self.specs

    async def cog_unload(self) -> None:
        for spec in self.specs:
            self.bot.remove_command(spec.command_name)
        await self.service.cleanup()

    def find_spec(self, name: str) -> Optional[CommandSpec]:
        """按 key、显示名称或命令名查找"""
        for spec in self.specs:
            if name in (spec.key, spec.display_name, spec.command_name):
                return spec
        return None

    @commands.group(name="memegen", invoke_without_command=True)
    async def memegen_group(self, ctx):
        """表情生成命令组"""
        await self._send_meme_list(ctx)

    @memegen_group.command(name="list", aliases=["ls"])
    async def list_memes(self, ctx):
        """列出已加载的表情"""
        await self._send_meme_list(ctx)

    async def _send_meme_list(self, ctx):
        if not self.specs:
            await ctx.reply(embed=EmbedBuilder.warning("没有已加载的表情"))
            return
        lines = []
        for spec in self.specs:
            line = f"`{self.bot.command_prefix}{spec.command_name}`"
            if spec.aliases:
                line += f" (别名: {', '.join(spec.aliases)})"
            lines.append(line)
        await ctx.reply(embed=EmbedBuilder.info(
            title=f"已加载 {len(self.specs)} 个表情",
            description=truncate_text("\n".join(lines), 4000)
        ))

    @memegen_group.command(name="info", aliases=["detail"])
    async def meme_info(self, ctx, name: str):
        """查看表情的参数详情"""
        spec = self.find_spec(name)
        if spec is None:
            await ctx.reply(embed=EmbedBuilder.error("未找到表情", f"没有找到表情：{name}"))
            return
        data = EmbedData(
            title=f"表情详情：{spec.display_name}",
            description=spec.description,
            color=EmbedBuilder.THEME.info
        )
        data.fields.append({
            "name": "命令",
            "value": f"`{self.bot.command_prefix}{spec.command_name} {spec.usage}`",
            "inline": False
        })
        if spec.options:
            options = "\n".join(
                f"{FLAG_PREFIX}{o.name}" + (f" ： {o.description}" if o.description else "")
                for o in spec.options
            )
            data.fields.append({"name": "可用选项", "value": f"```\n{options}\n```", "inline": False})
        data.fields.append({"name": "使用示例", "value": f"```\n{spec.example}\n```", "inline": False})
        await ctx.reply(embed=EmbedBuilder.create(data))

async def setup(bot):
    config = MemegenConfig.from_settings(Settings.get())
    if not config.memes:
        return
    plugin = MemegenPlugin(bot, config)
    await plugin.load_memes()
    await bot.add_cog(plugin)
