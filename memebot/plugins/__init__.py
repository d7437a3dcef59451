"""
memebot.plugins

插件包目录，包含所有机器人插件。
每个插件可以是单个模块或包，必须实现 async def setup(bot) 方法，
并自行处理异常、在卸载时清理资源。
"""

__all__ = []
