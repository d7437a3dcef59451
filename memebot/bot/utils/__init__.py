from .embeds import EmbedBuilder, EmbedData
from .formatters import format_code_block, truncate_text

__all__ = ['EmbedBuilder', 'EmbedData', 'format_code_block', 'truncate_text']
