"""Constants used across the trim-whitespace package."""

from __future__ import annotations

import re

CHAR_SPACE = " "
CHAR_TAB = "\t"
CHAR_NBSP = "\u00a0"
TABLE_DELIMITER = "|"

# Line terminators recognized when deciding where a line starts or ends.
# "\r\n" is a single terminator: the gap between its two characters is neither.
LINE_BREAK_CHARS = "\n\r\u2028\u2029"
LINE_BREAK_CLASS = r"\n\r\u2028\u2029"
_INSIDE_CRLF = r"(?<=\r)(?=\n)"
LINE_START = rf"(?<![^{LINE_BREAK_CLASS}])(?!{_INSIDE_CRLF})"
LINE_END = rf"(?![^{LINE_BREAK_CLASS}])(?!{_INSIDE_CRLF})"
LINE_ENDING_PATTERN = re.compile(rf"\r\n|[{LINE_BREAK_CLASS}]")

# List markers: bullets or an ordered-list number, followed by whitespace or end of text
LIST_MARKER = r"(?:[*+\-]|\d+\.)(?:\s|\Z)"

# Protected regions
CODE_SWAP_PREFIX = "TRIM_WHITESPACE_REPLACE_"
CODE_SWAP_PATTERNS = (
    re.compile(r"```([\s\S]+?)```"),  # fenced code blocks
    re.compile(r"`([\s\S]+?)`"),  # inline code
)

# Region boundary detection
CODE_BLOCK_PATTERN = re.compile(r"\s?```([\s\S]+?)```\s?")
WHITESPACE_BLOCK_PATTERN = re.compile(r"\s+")
FENCE_PADDING = 1

# Filesystem limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
