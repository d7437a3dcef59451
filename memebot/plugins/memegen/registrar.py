import logging
from dataclasses import dataclass, field
from typing import Iterable, List
from memebot.config.settings import MemeEntry
from .exceptions import SchemaFetchError
from .models import CommandSpec
from .service import MemeService
from .signature import build_command_spec

logger = logging.getLogger(__name__)

@dataclass
class RegistrationResult:
    """
    表情加载结果。

    Attributes:
        specs (List[CommandSpec]): 成功推导出的命令描述，保持配置顺序。
        failures (List[SchemaFetchError]): 加载失败的表情。
        aborted (bool): 是否因失败而提前中止。
    """
    specs: List[CommandSpec] = field(default_factory=list)
    failures: List[SchemaFetchError] = field(default_factory=list)
    aborted: bool = False

    @property
    def complete(self) -> bool:
        return not self.failures

async def load_command_specs(
    service: MemeService,
    entries: Iterable[MemeEntry],
    bot_name: str,
    stop_on_error: bool = True
) -> RegistrationResult:
    """
    依次获取每个表情的参数信息并推导命令描述。

    stop_on_error 为 True 时，第一个失败的表情会中止整个加载过程，
    该表情及其后的表情都不会注册；之前已成功的保持不变。
    """
    result = RegistrationResult()
    for entry in entries:
        try:
            info = await service.fetch_info(entry.key)
        except SchemaFetchError as e:
            logger.warning(f"Meme {entry.key} load failed:")
            logger.warning(e)
            result.failures.append(e)
            if stop_on_error:
                result.aborted = True
                return result
            continue
        result.specs.append(build_command_spec(entry, info.params, bot_name))

    if result.complete:
        logger.info(f"✅ {len(result.specs)} meme(s) loaded.")
    else:
        logger.warning(f"{len(result.specs)} meme(s) loaded, {len(result.failures)} failed.")
    return result
