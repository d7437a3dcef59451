"""
memebot 启动入口。

- 支持命令行参数（debug）
- 日志系统初始化（控制台+文件）
- 启动 Discord Bot 主流程
- 统一异常处理
"""
import asyncio
import logging
import sys
import traceback
import argparse
from memebot.bot.core.bot import MyBot
from memebot.config.settings import Settings

def setup_logging(debug_mode: bool = False) -> logging.Logger:
    """设置日志记录"""
    logger = logging.getLogger("memebot")

    # 清除现有的处理器
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    # 控制台处理器
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    console_handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)
    logger.addHandler(console_handler)

    # 文件处理器，始终记录DEBUG级别
    file_handler = logging.FileHandler('bot.log', encoding='utf-8')
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    file_handler.setLevel(logging.DEBUG)
    logger.addHandler(file_handler)

    return logger

def parse_args(argv=None):
    """解析命令行参数"""
    parser = argparse.ArgumentParser(description='meme-generator Discord Bot')
    parser.add_argument('--debug', action='store_true', help='启用调试模式')
    return parser.parse_args(argv)

async def main():
    """主函数"""
    args = parse_args()
    debug_mode = args.debug

    logger = setup_logging(debug_mode)
    if debug_mode:
        logger.debug("调试模式已启用")

    try:
        settings = Settings.get()
        Settings.validate()
        bot = MyBot(debug_mode=debug_mode, logger=logger)

        logger.info("正在启动 Discord Bot...")
        async with bot:
            await bot.start(settings.discord_token)
    except Exception as e:
        logger.error(f"启动失败: {e}")
        if debug_mode:
            logger.debug(f"错误堆栈:\n{traceback.format_exc()}")
        sys.exit(1)

def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\n程序已终止")

if __name__ == "__main__":
    run()
