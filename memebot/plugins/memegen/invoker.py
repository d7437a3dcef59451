import logging
from typing import Mapping, Optional, Protocol, Sequence
from .exceptions import RenderRequestError
from .models import CommandSpec, InvocationRequest, RenderResult
from .service import MemeService

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "生成图片失败，请检查输入格式哦~使用示例：\n{example}"

class InvokeSession(Protocol):
    """调用方会话，由宿主实现"""

    async def send_image(self, image: RenderResult) -> None: ...

    async def send_text(self, text: str) -> None: ...

    async def send_help(self, command_name: str) -> None: ...

class MemeInvoker:
    """
    单个表情命令的执行逻辑。

    无参数时发送预览图并显示帮助；有参数时请求生成图片。
    任何请求失败都转换为固定格式的提示消息。
    """
    def __init__(self, service: MemeService, spec: CommandSpec):
        self.service = service
        self.spec = spec

    @property
    def failure_message(self) -> str:
        return FAILURE_MESSAGE.format(example=self.spec.example)

    async def invoke(
        self,
        session: InvokeSession,
        args: Sequence[str],
        options: Optional[Mapping[str, Optional[str]]] = None
    ) -> Optional[RenderResult]:
        """
        执行一次调用。
        Args:
            session (InvokeSession): 会话。
            args (Sequence[str]): 用户提供的位置参数。
            options (Optional[Mapping]): 选项取值，未设置为 None。
        Returns:
            Optional[RenderResult]: 生成的图片；预览或失败时为 None。
        """
        try:
            if not args:
                await self._preview(session)
                return None

            # TODO: 图片参数目前按文本发送，需要解析为图片后以 images 字段上传
            request = InvocationRequest(texts=list(args), options=dict(options or {}))
            return await self.service.render(self.spec.key, request)
        except RenderRequestError as e:
            if not e.is_params_mismatch:
                logger.warning(e.body or e)
        except Exception as e:
            logger.warning(f"表情 {self.spec.key} 调用失败: {e}")
        await self._notify_failure(session)
        return None

    async def _notify_failure(self, session: InvokeSession) -> None:
        try:
            await session.send_text(self.failure_message)
        except Exception as e:
            logger.warning(f"发送失败提示出错: {e}")

    async def _preview(self, session: InvokeSession) -> None:
        image = await self.service.fetch_preview(self.spec.key)
        try:
            await session.send_image(image)
        except Exception as e:
            logger.warning(f"发送 {self.spec.key} 预览图失败: {e}")
        await session.send_help(self.spec.command_name)
