"""String operations, including pattern matching.

The pattern operators translate a restricted wildcard syntax into a Python
regular expression. Every character outside that syntax's own vocabulary is
escaped, so patterns can never smuggle regex metacharacters in.
"""

import re
from collections.abc import Callable
from typing import Any

from dataexpr._errors import DomainError, InvalidOperandError
from dataexpr._types import Context, Operation

from ._helpers import is_list, is_number, require_pair, require_string

_INLINE_FLAGS_RE = re.compile(r"^\(\?([a-zA-Z]*)\)", re.DOTALL)
_SUPPORTED_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL}


def compile_regex(pattern: str) -> re.Pattern[str]:
    """Compile a regex that may start with an inline ``(?flags)`` marker.

    Only ``i``, ``m``, and ``s`` are honored; other flag letters are dropped.
    Without a marker the pattern is case-sensitive, ``^``/``$`` anchor the
    whole string, and ``.`` does not match newlines.

    Example:
        >>> bool(compile_regex("(?i)^chen$").search("CHEN"))
        True

    """
    flags = 0
    match = _INLINE_FLAGS_RE.match(pattern)
    if match:
        for letter in match.group(1):
            flags |= _SUPPORTED_FLAGS.get(letter, 0)
        pattern = pattern[match.end() :]
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        msg = f"Invalid regular expression {pattern!r}: {e}"
        raise InvalidOperandError(msg) from e


def like_to_regex(pattern: str) -> str:
    """Translate a SQL LIKE pattern into an anchored regex.

    ``%`` matches any run of characters and ``_`` matches exactly one.
    """
    parts = []
    for char in pattern:
        if char == "%":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return "^" + "".join(parts) + "$"


def glob_to_regex(pattern: str) -> str:
    """Translate a shell GLOB pattern into an anchored regex.

    ``*`` matches any run of characters, ``?`` exactly one, and ``[...]`` a
    character class; a class starting with ``!`` or ``^`` is negated. A ``]``
    right after the opening bracket (or its negation mark) belongs to the
    class. An unterminated ``[`` is matched literally.
    """
    parts = []
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        elif char == "[":
            negate = pattern[i + 1 : i + 2] in ("!", "^")
            end = pattern.find("]", i + (3 if negate else 2))
            if end == -1:
                parts.append(re.escape(char))
            else:
                body = pattern[i + (2 if negate else 1) : end]
                body = body.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
                if body.startswith("^"):
                    body = "\\" + body
                parts.append(f"[{'^' if negate else ''}{body}]")
                i = end
        else:
            parts.append(re.escape(char))
        i += 1
    return "^" + "".join(parts) + "$"


def _compile_translated(regex: str, pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(regex, re.DOTALL)
    except re.error as e:
        msg = f"Invalid pattern {pattern!r}: {e}"
        raise InvalidOperandError(msg) from e


def _matcher(name: str, compile_pattern: Callable[[str], re.Pattern[str]]) -> Operation:
    """Build a pattern operation.

    The apply form tests the input string against the resolved pattern; the
    evaluate form takes ``[pattern, text]``.
    """

    def test(pattern: Any, text: Any) -> bool:
        if not isinstance(pattern, str):
            msg = f"{name} pattern must be a string"
            raise InvalidOperandError(msg)
        return compile_pattern(pattern).search(require_string(name, text)) is not None

    def evaluate(operand: Any, context: Context) -> bool:
        pattern, text = require_pair(name, operand, "[pattern, text]")
        return test(context.evaluate(pattern), context.evaluate(text))

    return Operation(
        apply_fn=lambda operand, input_data, context: test(context.apply(operand, input_data), input_data),
        evaluate_fn=evaluate,
    )


MATCHES_REGEX = _matcher("$matchesRegex", compile_regex)
MATCHES_LIKE = _matcher("$matchesLike", lambda pattern: _compile_translated(like_to_regex(pattern), pattern))
MATCHES_GLOB = _matcher("$matchesGlob", lambda pattern: _compile_translated(glob_to_regex(pattern), pattern))


def _transform(name: str, transform: Callable[[str], Any]) -> Operation:
    """Build an operation transforming the input string, ignoring the operand."""
    return Operation(
        apply_fn=lambda _operand, input_data, _context: transform(require_string(name, input_data)),
        evaluate_fn=lambda operand, context: transform(require_string(name, context.evaluate(operand))),
    )


LOWERCASE = _transform("$lowercase", str.lower)
UPPERCASE = _transform("$uppercase", str.upper)
TRIM = _transform("$trim", str.strip)


def _with_params(name: str, run: Callable[..., Any]) -> Operation:
    """Build a string operation that takes extra parameters.

    The apply form runs on the input string with the operand as parameters
    (a single value or an array). The evaluate form takes
    ``[string, *parameters]``.
    """

    def apply(operand: Any, input_data: Any, context: Context) -> Any:
        params = context.apply(operand, input_data)
        params = list(params) if is_list(params) else [params]
        return run(require_string(name, input_data), *params)

    def evaluate(operand: Any, context: Context) -> Any:
        resolved = context.evaluate(operand)
        if not is_list(resolved) or not resolved:
            msg = f"{name} evaluate form requires array operand: [string, ...parameters]"
            raise InvalidOperandError(msg)
        text, *params = resolved
        return run(require_string(name, text), *params)

    return Operation(apply_fn=apply, evaluate_fn=evaluate)


def _split(text: str, delimiter: Any) -> list[str]:
    if not isinstance(delimiter, str):
        msg = "$split delimiter must be a string"
        raise InvalidOperandError(msg)
    return list(text) if delimiter == "" else text.split(delimiter)


_REPLACEMENT_TOKEN_RE = re.compile(r"\$(\$|&|`|'|\d{1,2})")


def _expand_token(token: re.Match[str], match: re.Match[str]) -> str:
    key = token.group(1)
    if key == "$":
        return "$"
    if key == "&":
        return match.group(0)
    if key == "`":
        return match.string[: match.start()]
    if key == "'":
        return match.string[match.end() :]
    groups = match.re.groups
    if 0 < int(key) <= groups:
        return match.group(int(key)) or ""
    if len(key) == 2 and 0 < int(key[0]) <= groups:  # noqa: PLR2004
        return (match.group(int(key[0])) or "") + key[1]
    return token.group(0)


def expand_replacement(replacement: str, match: re.Match[str]) -> str:
    """Expand ``$&``, ``$1``..``$99``, ``$` ``, ``$'`` and ``$$`` for one match.

    Everything else, backslashes included, is inserted literally. A group
    reference to a group the pattern does not have stays as written.

    Example:
        >>> expand_replacement("<$1>", re.search(r"(b+)", "abbc"))
        '<bb>'

    """
    return _REPLACEMENT_TOKEN_RE.sub(lambda token: _expand_token(token, match), replacement)


def _replace(text: str, search: Any, replacement: Any = "") -> str:
    if not isinstance(search, str) or not isinstance(replacement, str):
        msg = "$replace requires [search, replacement] strings"
        raise InvalidOperandError(msg)
    return compile_regex(search).sub(lambda match: expand_replacement(replacement, match), text)


def _substring(text: str, start: Any, length: Any = None) -> str:
    if not is_number(start) or (length is not None and not is_number(length)):
        msg = "$substring requires numeric [start, length?]"
        raise DomainError(msg)
    start = int(start)
    if length is None:
        return text[start:]
    return text[start : start + int(length)]


SPLIT = _with_params("$split", _split)
REPLACE = _with_params("$replace", _replace)
SUBSTRING = _with_params("$substring", _substring)
