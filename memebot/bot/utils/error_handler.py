import traceback
import logging
from discord.ext import commands
from memebot.bot.utils.embeds import EmbedBuilder, EmbedData
from memebot.bot.utils.formatters import format_code_block, truncate_text

logger = logging.getLogger("memebot")

def format_error(error: Exception, include_traceback: bool = False) -> str:
    """
    格式化错误信息。
    Args:
        error (Exception): 异常对象。
        include_traceback (bool): 是否包含堆栈信息。
    Returns:
        str: 格式化后的错误信息。
    """
    error_type = type(error).__name__
    error_msg = str(error)
    if include_traceback:
        error_trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        return f"{error_type}: {error_msg}\n\n堆栈跟踪:\n{error_trace}"
    return f"{error_type}: {error_msg}"

def usage_of(ctx: commands.Context) -> str:
    """命令的正确用法"""
    return f"`{ctx.prefix}{ctx.command.qualified_name} {ctx.command.signature}`"

class ErrorHandler:
    """
    全局错误处理器。
    提供统一的命令错误处理逻辑。
    """

    @staticmethod
    async def on_command_error(ctx: commands.Context, error: Exception) -> None:
        """
        处理命令错误。
        Args:
            ctx (commands.Context): 命令上下文。
            error (Exception): 发生的异常。
        """
        # 忽略命令未找到的错误
        if isinstance(error, commands.CommandNotFound):
            return

        # 处理参数错误
        if isinstance(error, (commands.MissingRequiredArgument, commands.BadArgument)):
            if isinstance(error, commands.MissingRequiredArgument):
                error_msg = f"缺少必要参数: {error.param.displayed_name or error.param.name}"
            else:
                error_msg = f"参数错误: {error}"
            logger.warning(f"参数错误: {ctx.command} - {error_msg}")

            embed = EmbedBuilder.create(EmbedData(
                title="⚠️ 参数错误",
                description=error_msg,
                color=EmbedBuilder.THEME.warning,
                fields=[
                    {
                        "name": "正确用法",
                        "value": usage_of(ctx),
                        "inline": False
                    }
                ]
            ))
            await ctx.send(embed=embed)
            return

        # 处理其他错误
        original = getattr(error, "original", error)
        logger.error("未处理的命令错误:")
        logger.error(format_error(original, include_traceback=True))

        embed_data = EmbedData(
            title="❌ 命令执行错误",
            description=f"执行命令时发生未处理的错误:\n{format_code_block(format_error(original), 'py')}",
            color=EmbedBuilder.THEME.danger,
            fields=[
                {
                    "name": "命令信息",
                    "value": f"命令: `{ctx.command}`\n用户: {ctx.author}\n频道: {ctx.channel}",
                    "inline": False
                }
            ]
        )

        # 在调试模式下添加堆栈跟踪
        if logger.level <= logging.DEBUG:
            error_trace = "".join(traceback.format_exception(type(original), original, original.__traceback__))
            embed_data.fields.append({
                "name": "错误堆栈",
                "value": format_code_block(truncate_text(error_trace, 1000), "py"),
                "inline": False
            })

        await ctx.send(embed=EmbedBuilder.create(embed_data))
