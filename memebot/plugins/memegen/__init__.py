"""表情生成插件

把 meme-generator HTTP 服务中配置的表情注册为独立命令。
启动时获取每个表情的参数信息，生成带位置参数与选项的命令。

Commands:
    !memegen-<key> [图片/文本...] [--选项 值] - 生成表情，无参数时显示预览与帮助
    !memegen list - 列出已加载的表情
    !memegen info <名称> - 查看表情参数详情
"""

from .plugin import setup

__all__ = ["setup"]
