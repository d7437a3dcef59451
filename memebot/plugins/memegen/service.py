import asyncio
import logging
from typing import Optional
import aiohttp
from pydantic import ValidationError
from memebot.bot.services.base import BaseService
from .config import MemegenConfig
from .exceptions import RenderRequestError, SchemaFetchError
from .models import DEFAULT_CONTENT_TYPE, InvocationRequest, MemeInfo, RenderResult

logger = logging.getLogger(__name__)

class MemeService(BaseService):
    """
    meme-generator HTTP 服务客户端。
    负责获取表情参数信息、预览图以及生成图片。
    """
    def __init__(self, bot, config: Optional[MemegenConfig] = None):
        super().__init__(bot, config or MemegenConfig())
        self._config: MemegenConfig = self._config
        self._session: Optional[aiohttp.ClientSession] = None

    @classmethod
    def get_default_config(cls) -> MemegenConfig:
        return MemegenConfig()

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            raise RuntimeError("MemeService 尚未初始化")
        return self._session

    async def initialize(self) -> None:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._config.timeout)
            )

    async def cleanup(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def _url(self, key: str, suffix: str = "") -> str:
        return f"{self.endpoint}/memes/{key}{suffix}"

    async def fetch_info(self, key: str) -> MemeInfo:
        """
        获取表情参数信息。
        Args:
            key (str): 表情 key。
        Returns:
            MemeInfo: 参数信息。
        Raises:
            SchemaFetchError: 网络错误、非 2xx 响应或响应体格式错误。
        """
        url = self._url(key, "/info")
        try:
            async with self.session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    body = await resp.text(errors="replace")
                    raise SchemaFetchError(key, f"获取表情 {key} 信息失败: HTTP {resp.status} {body}")
                data = await resp.json(content_type=None)
            return MemeInfo.model_validate(data)
        except SchemaFetchError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SchemaFetchError(key, f"获取表情 {key} 信息失败", cause=e) from e
        except (ValidationError, ValueError) as e:
            raise SchemaFetchError(key, f"表情 {key} 信息格式错误", cause=e) from e

    async def _read_image(self, key: str, resp: aiohttp.ClientResponse) -> RenderResult:
        if not 200 <= resp.status < 300:
            body = (await resp.read()).decode("utf-8", errors="replace")
            raise RenderRequestError(
                key,
                f"表情 {key} 请求失败: HTTP {resp.status}",
                status=resp.status,
                body=body
            )
        data = await resp.read()
        return RenderResult(
            data=data,
            content_type=resp.headers.get("Content-Type") or DEFAULT_CONTENT_TYPE
        )

    async def fetch_preview(self, key: str) -> RenderResult:
        """获取表情预览图"""
        try:
            async with self.session.get(self._url(key, "/preview")) as resp:
                return await self._read_image(key, resp)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RenderRequestError(key, f"获取表情 {key} 预览失败", cause=e) from e

    @staticmethod
    def build_form(request: InvocationRequest) -> aiohttp.FormData:
        """
        构造 multipart 请求体。
        每个位置参数对应一个 texts 字段；仅当有选项取值为真时附加 args 字段。
        """
        form = aiohttp.FormData()
        for text in request.texts:
            form.add_field("texts", text, content_type="text/plain")
        if request.has_options:
            form.add_field("args", request.options_json(), content_type="text/plain")
        return form

    async def render(self, key: str, request: InvocationRequest) -> RenderResult:
        """
        生成表情图片。
        Args:
            key (str): 表情 key。
            request (InvocationRequest): 文本与选项。
        Returns:
            RenderResult: 图片数据。
        Raises:
            RenderRequestError: 网络错误或非 2xx 响应。
        """
        try:
            async with self.session.post(self._url(key), data=self.build_form(request)) as resp:
                return await self._read_image(key, resp)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RenderRequestError(key, f"生成表情 {key} 失败", cause=e) from e
