from pathlib import Path

from codescout.parsers.base import BaseParser
from codescout.parsers.csharp_parser import CSharpParser
from codescout.parsers.javascript_parser import JavaScriptParser
from codescout.parsers.react_parser import ReactParser
from codescout.parsers.vue_parser import VueParser

# Dialect name -> extractor, in the order batches run.
DIALECT_PARSERS: dict[str, type[BaseParser]] = {
    parser.dialect: parser
    for parser in (CSharpParser, JavaScriptParser, ReactParser, VueParser)
}

_PARSERS_BY_EXTENSION: dict[str, type[BaseParser]] = {
    extension: parser
    for parser in DIALECT_PARSERS.values()
    for extension in parser.extensions
}


def get_parser_for_file(file_path: Path) -> BaseParser | None:
    """Return an extractor for the file's extension, or None if unsupported."""
    parser_class = _PARSERS_BY_EXTENSION.get(file_path.suffix.lower())
    if parser_class is None:
        return None
    return parser_class()
