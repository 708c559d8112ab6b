"""Parsers de salida (implementaciones de `core.interfaces.OutputParser`)."""

from adapters.output_parsers.json_parser import JsonOutputParser
from adapters.output_parsers.text import TextOutputParser, strip_ux_sentinel
from core.config import OutputFormat
from core.interfaces.output_parser import OutputParser


def build_output_parser(output_format: OutputFormat | str = OutputFormat.TEXT) -> OutputParser:
    if OutputFormat(output_format) is OutputFormat.JSON:
        return JsonOutputParser()
    return TextOutputParser()


__all__ = [
	"JsonOutputParser",
	"TextOutputParser",
	"build_output_parser",
	"strip_ux_sentinel",
]
