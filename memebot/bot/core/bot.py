import discord
from discord.ext import commands
from typing import Optional
import importlib
from pathlib import Path
import logging
import sys
import traceback
from memebot.config.settings import Settings
from memebot.bot.utils.error_handler import ErrorHandler

# =====================
# memebot.bot.core.bot
# =====================

"""
MyBot: Discord Bot 主体类

- 插件自动加载（单文件模块与包）
- 命令注册与统一错误处理

Attributes:
    settings (BotConfig): 配置对象
    logger (logging.Logger): 日志记录器
    debug_mode (bool): 是否为调试模式
"""

class MyBot(commands.Bot):
    def __init__(
        self,
        command_prefix: Optional[str] = None,
        intents: Optional[discord.Intents] = None,
        logger: Optional[logging.Logger] = None,
        debug_mode: bool = False
    ):
        """
        初始化 MyBot 实例。

        Args:
            command_prefix (Optional[str]): 命令前缀，若为 None 则从配置读取。
            intents (Optional[discord.Intents]): Discord 事件意图。
            logger (Optional[logging.Logger]): 日志记录器。
            debug_mode (bool): 是否启用调试模式。
        """
        # 加载配置
        self.settings = Settings.get()

        # 设置日志
        self.logger = logger or logging.getLogger("memebot")
        if not self.logger.handlers:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter(
                '%(asctime)s [%(levelname)s] %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(console_handler)
            self.logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

        intents = intents or discord.Intents.default()
        intents.message_content = True
        super().__init__(
            command_prefix=command_prefix or self.settings.command_prefix,
            intents=intents
        )

        self.debug_mode = debug_mode

        self.add_listener(ErrorHandler.on_command_error, 'on_command_error')

    async def setup_hook(self) -> None:
        """Bot 启动时加载插件"""
        self.logger.info("正在初始化 bot...")
        await self.load_plugins()

    async def on_ready(self) -> None:
        self.logger.info(f"✅ 已登录为 {self.user}，共 {len(self.commands)} 个命令")

    async def load_plugins(self) -> None:
        """
        加载 memebot.plugins 目录下的所有插件。
        插件可以是单个模块或包，需实现 async def setup(bot) 方法。
        单个插件加载失败只记录日志，不影响其它插件。
        """
        plugins_dir = Path(__file__).parent.parent.parent / "plugins"
        for path in sorted(plugins_dir.iterdir()):
            if path.name.startswith("_"):
                continue
            if path.is_dir() and (path / "__init__.py").exists():
                module_name = f"memebot.plugins.{path.name}"
            elif path.suffix == ".py":
                module_name = f"memebot.plugins.{path.stem}"
            else:
                continue
            try:
                module = importlib.import_module(module_name)
                if hasattr(module, "setup"):
                    await module.setup(self)
                    self.logger.info(f"✅ 已加载插件: {module_name}")
            except Exception as e:
                self.logger.error(f"❌ 加载插件 {module_name} 失败: {e}")
                if self.debug_mode:
                    self.logger.debug(f"错误堆栈:\n{traceback.format_exc()}")

    def register_command(self, cmd: commands.Command):
        """
        注册单个命令到 Bot。

        Args:
            cmd (commands.Command): 命令对象
        Returns:
            commands.Command: 注册后的命令对象
        Raises:
            commands.CommandRegistrationError: 命令名或别名冲突
        """
        if cmd.name in self.all_commands:
            raise commands.CommandRegistrationError(cmd.name)
        self.add_command(cmd)
        self.logger.info(f"✅ 已注册命令: {cmd.name}")
        return cmd

