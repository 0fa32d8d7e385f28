"""Tokenizer with inline nested-command substitution.

Scans the parameter part of a command line character by character and
produces an ordered list of string tokens:

- bare words are separated by spaces; runs of spaces never yield empty tokens.
- ``"quoted text"`` is captured raw (spaces kept, no escapes) and committed
  as one token when the quote closes, even if empty.
- ``{sub command}`` is handed to *resolve_nested*; the returned text becomes a
  token (outermost brace) or is spliced into the enclosing brace text.

Resolution is synchronous, depth-first and left to right: an inner brace is
resolved before its enclosing brace is committed, and sibling braces resolve
in the order they appear.

INVARIANT: Token order equals input order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from linecmd.domain.errors import NestingLimitExceededError

logger = logging.getLogger(__name__)

SPACE = " "
QUOTE = '"'
OPEN_BRACE = "{"
CLOSE_BRACE = "}"

NestedResolver = Callable[[str], str]


def scan(line: str, max_depth: int, resolve_nested: NestedResolver) -> list[str]:
    """Split *line* into tokens, resolving brace-delimited sub-commands.

    Args:
        line: Parameter text (command name already removed).
        max_depth: Maximum brace nesting; ``0`` means unbounded.
        resolve_nested: Called with the text between a matching brace pair;
            returns the substitution text.

    Raises:
        NestingLimitExceededError: If opening a brace would reach *max_depth*.

    A ``{`` that immediately follows a closing ``}`` or closing ``"`` is an
    ordinary character. A ``}`` with no open brace is an ordinary character.
    A quote or brace still open at end of input is discarded.
    """
    tokens: list[str] = []
    current: list[str] = []
    braces: list[list[str]] = []
    depth = -1
    started = False
    in_quote = False
    just_closed = False

    def commit_current() -> None:
        tokens.append("".join(current))
        current.clear()

    # Trailing space flushes the last bare token.
    for char in line + SPACE:
        if not started:
            if char == SPACE:
                continue
            started = True

        if char == OPEN_BRACE and not in_quote and not just_closed:
            if max_depth != 0 and depth + 1 >= max_depth:
                raise NestingLimitExceededError(max_depth)
            braces.append([])
            depth += 1
            continue

        if char == CLOSE_BRACE and depth >= 0:
            inner = "".join(braces.pop())
            logger.debug("Resolving nested command at depth %d: %r", depth, inner)
            resolved = resolve_nested(inner)
            depth -= 1
            if depth < 0:
                if current:
                    commit_current()
                tokens.append(resolved)
            else:
                braces[-1].append(resolved)
            just_closed = True
            continue

        if char == QUOTE and depth < 0:
            if in_quote:
                commit_current()
                in_quote = False
                just_closed = True
            else:
                in_quote = True
                just_closed = False
            continue

        if char == SPACE and not in_quote and depth < 0:
            if current:
                commit_current()
            just_closed = False
            continue

        if depth >= 0:
            braces[-1].append(char)
        else:
            current.append(char)
        just_closed = False

    if in_quote:
        logger.debug("Discarding unterminated quoted text: %r", "".join(current))
    elif braces:
        logger.debug("Discarding %d unterminated brace(s)", len(braces))
        # A bare word written before the open brace is still a complete token.
        if current:
            commit_current()

    return tokens
