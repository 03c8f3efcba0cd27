"""
micron-markup: parser for the micron page markup language.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    micron-markup index.mu --format html

Library Usage:
    from micron_markup import parse_document, render_html

    document = parse_document(">Welcome\nSome `!bold`! text", theme="light")
    for block in document:
        print(block.kind)
    html = render_html(document)
"""

from .config import ConfigError, ParserConfig
from .exceptions import LineTooLongError, ParseError, ParseFileError
from .fields import parse_field
from .links import LinkRequest, parse_link, resolve_link_request
from .models import (
    Alignment,
    Blank,
    Checkbox,
    Divider,
    Document,
    Field,
    Heading,
    Link,
    Paragraph,
    ParserState,
    Radio,
    Style,
    TextRun,
    document_to_dict,
)
from .parser import parse_document, parse_file
from .render import render_html
from .styles import Color, Theme, get_theme, resolve_color
from .tokenizer import tokenize_line

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "parse_document",
    "parse_file",
    "tokenize_line",
    "parse_field",
    "parse_link",
    "render_html",
    # Data models
    "Alignment",
    "Style",
    "TextRun",
    "Field",
    "Checkbox",
    "Radio",
    "Link",
    "Heading",
    "Divider",
    "Paragraph",
    "Blank",
    "Document",
    "ParserState",
    "document_to_dict",
    # Styles
    "Color",
    "Theme",
    "get_theme",
    "resolve_color",
    # Utilities
    "LinkRequest",
    "resolve_link_request",
    "ParserConfig",
    # Exceptions
    "ConfigError",
    "LineTooLongError",
    "ParseError",
    "ParseFileError",
    # Version
    "__version__",
]
