"""
Token Classes for mdpreview Markdown Parser

This module defines the block-level tokens produced by the block parser
and consumed by the HTML renderer. Tokens form a flat sequence; lists are
the only tokens that nest (through their items' children).
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional


class TokenType(Enum):
    """Enumeration of all block token kinds."""

    EMPTY = "empty"
    HORIZONTAL_RULE = "hr"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    CODE_BLOCK = "code-block"
    BLOCK_QUOTE = "blockquote"
    TABLE = "table"
    LIST = "list"


class ListType(Enum):
    """Types of lists."""

    UNORDERED = "unordered"
    ORDERED = "ordered"


class InlineResult:
    """Result of inline formatting: an HTML fragment."""

    def __init__(self, content: str, raw: Optional[str] = None):
        self.content = content
        # Same as content for now, kept for plain-text extraction later
        self.raw = content if raw is None else raw

    def __repr__(self) -> str:
        return f"InlineResult(content={self.content!r})"


class MDToken(ABC):
    """Base class for all block tokens."""

    def __init__(self, token_type: TokenType):
        self.token_type = token_type

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert token to dictionary representation."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.token_type.value})"


class MDEmpty(MDToken):
    """Blank source line."""

    def __init__(self):
        super().__init__(TokenType.EMPTY)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.token_type.value}


class MDHorizontalRule(MDToken):
    """Horizontal rule token."""

    def __init__(self):
        super().__init__(TokenType.HORIZONTAL_RULE)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.token_type.value}


class MDHeading(MDToken):
    """Heading token with level (1-6)."""

    def __init__(self, level: int, content: str):
        super().__init__(TokenType.HEADING)
        if not 1 <= level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {level}")
        self.level = level
        self.content = content

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.token_type.value,
            "level": self.level,
            "content": self.content,
        }


class MDParagraph(MDToken):
    """Paragraph token holding one raw source line."""

    def __init__(self, content: str):
        super().__init__(TokenType.PARAGRAPH)
        self.content = content

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.token_type.value, "content": self.content}


class MDCodeBlock(MDToken):
    """Fenced code block with language identifier."""

    def __init__(self, content: str, language: str = "plain"):
        super().__init__(TokenType.CODE_BLOCK)
        self.content = content
        self.language = language

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.token_type.value,
            "language": self.language,
            "content": self.content,
        }


class MDBlockQuote(MDToken):
    """
    Block quote token.

    Content is the raw quoted text joined with newlines; empty lines mark
    paragraph breaks and inline formatting is applied at render time.
    """

    def __init__(self, content: str):
        super().__init__(TokenType.BLOCK_QUOTE)
        self.content = content

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.token_type.value, "content": self.content}


class MDTable(MDToken):
    """Table token. Rows may be shorter or longer than column_count."""

    def __init__(self, headers: List[str], rows: List[List[str]], column_count: Optional[int] = None):
        super().__init__(TokenType.TABLE)
        self.headers = headers
        self.rows = rows
        self.column_count = len(headers) if column_count is None else column_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.token_type.value,
            "headers": list(self.headers),
            "rows": [list(row) for row in self.rows],
            "columnCount": self.column_count,
        }


class MDListItem:
    """
    Single list item.

    `content` is already inline-processed HTML. `children` holds nested
    MDList tokens only and stays None until the first nested list appears.
    """

    def __init__(self, content: str, raw: Optional[str] = None, indent: int = 0):
        self.content = content
        self.raw = content if raw is None else raw
        self.indent = indent
        self.children: Optional[List["MDList"]] = None

    def add_child(self, child: "MDList") -> None:
        """Attach a nested list."""
        if not isinstance(child, MDList):
            raise TypeError(f"List item children must be lists, got {type(child).__name__}")
        if self.children is None:
            self.children = []
        self.children.append(child)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "content": self.content,
            "raw": self.raw,
            "indent": self.indent,
        }
        if self.children is not None:
            result["children"] = [child.to_dict() for child in self.children]
        return result

    def __repr__(self) -> str:
        return f"MDListItem(content={self.content!r}, indent={self.indent})"


class MDList(MDToken):
    """List token (ordered or unordered); all items share one indentation."""

    def __init__(self, list_type: ListType, items: Optional[List[MDListItem]] = None):
        super().__init__(TokenType.LIST)
        self.list_type = list_type
        self.items: List[MDListItem] = items if items is not None else []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.token_type.value,
            "listType": self.list_type.value,
            "items": [item.to_dict() for item in self.items],
        }
