"""Source text normalization for similarity comparison."""

import re

# Only the head of longer content takes part in comparison
MAX_NORMALIZED_INPUT = 10000

_BLOCK_COMMENT = re.compile(r"/\*[\s\S]*?\*/")
_LINE_COMMENT = re.compile(r"//[^\r\n\u2028\u2029]*")
# Also eats '#' inside string literals and preprocessor lines
_HASH_COMMENT = re.compile(r"#[^\r\n\u2028\u2029]*")
# A byte order mark counts as whitespace
_WHITESPACE = re.compile(r"[\s\ufeff]+")
_PUNCTUATION = re.compile(r"[{}();,]")


def normalize(content: str) -> str:
    """
    Canonicalize source text so that formatting and comments do not count.

    Content is cut to MAX_NORMALIZED_INPUT characters first. Then block
    comments, '//' comments and '#' comments are removed, whitespace runs are
    collapsed to single spaces, the characters ``{}();,`` are dropped, and
    the result is lowercased and trimmed. The step order matters: removing
    punctuation earlier would break comment delimiters.

    Args:
        content: Raw file content

    Returns:
        Normalized text, possibly empty
    """
    if len(content) > MAX_NORMALIZED_INPUT:
        content = content[:MAX_NORMALIZED_INPUT]

    content = _BLOCK_COMMENT.sub("", content)
    content = _LINE_COMMENT.sub("", content)
    content = _HASH_COMMENT.sub("", content)
    content = _WHITESPACE.sub(" ", content)
    content = _PUNCTUATION.sub("", content)
    return content.lower().strip()
