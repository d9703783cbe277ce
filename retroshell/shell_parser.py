"""Tokenizer and recursive-descent parser for command lines.

Grammar::

    List     := Pipeline ( (AND | SEMICOLON) Pipeline )*
    Pipeline := Command ( PIPE Command )*
    Command  := WORD+ ( (REDIRECT | APPEND) WORD )?

Neither stage raises: unterminated quotes run to the end of the input and
empty command slots are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TokenType(str, Enum):
    WORD = "WORD"
    PIPE = "PIPE"
    REDIRECT = "REDIRECT"
    APPEND = "APPEND"
    AND = "AND"
    SEMICOLON = "SEMICOLON"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str = ""


class RedirectMode(str, Enum):
    OVERWRITE = "overwrite"
    APPEND = "append"


@dataclass(frozen=True)
class Redirect:
    mode: RedirectMode
    file: str


@dataclass
class CommandSpec:
    name: str
    args: list[str] = field(default_factory=list)
    redirect: Redirect | None = None


@dataclass
class Pipeline:
    commands: list[CommandSpec]


@dataclass
class CommandList:
    pipelines: list[Pipeline] = field(default_factory=list)
    operators: list[str] = field(default_factory=list)


_TWO_CHAR_OPERATORS = {">>": TokenType.APPEND, "&&": TokenType.AND}
_ONE_CHAR_OPERATORS = {"|": TokenType.PIPE, ">": TokenType.REDIRECT, ";": TokenType.SEMICOLON}
_WORD_BREAKS = frozenset("|><;&")
_QUOTES = ("'", '"')


def tokenize(command_line: str) -> list[Token]:
    tokens: list[Token] = []
    idx = 0
    length = len(command_line)
    while idx < length:
        char = command_line[idx]
        if char.isspace():
            idx += 1
            continue
        pair = command_line[idx : idx + 2]
        if pair in _TWO_CHAR_OPERATORS:
            tokens.append(Token(_TWO_CHAR_OPERATORS[pair], pair))
            idx += 2
            continue
        if char in _ONE_CHAR_OPERATORS:
            tokens.append(Token(_ONE_CHAR_OPERATORS[char], char))
            idx += 1
            continue
        if char in _QUOTES:
            word, idx = _read_quoted(command_line, idx + 1, char)
            tokens.append(Token(TokenType.WORD, word))
            continue
        word, idx = _read_bare(command_line, idx)
        if word:
            tokens.append(Token(TokenType.WORD, word))
        else:
            # A lone '&' neither starts a word nor forms '&&'.
            idx += 1
    tokens.append(Token(TokenType.EOF))
    return tokens


def _read_quoted(text: str, idx: int, quote: str) -> tuple[str, int]:
    chars: list[str] = []
    while idx < len(text) and text[idx] != quote:
        if text[idx] == "\\" and idx + 1 < len(text):
            idx += 1
        chars.append(text[idx])
        idx += 1
    # Skip the closing quote, or step past the end when it is missing.
    return "".join(chars), idx + 1


def _read_bare(text: str, idx: int) -> tuple[str, int]:
    chars: list[str] = []
    while idx < len(text) and not text[idx].isspace() and text[idx] not in _WORD_BREAKS:
        if text[idx] == "\\" and idx + 1 < len(text):
            idx += 1
        chars.append(text[idx])
        idx += 1
    return "".join(chars), idx


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    def current(self) -> Token:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return Token(TokenType.EOF)

    def advance(self) -> Token:
        token = self.current()
        self.pos += 1
        return token

    def parse_list(self) -> CommandList:
        result = CommandList()
        first = self.parse_pipeline()
        if first is None:
            return result
        result.pipelines.append(first)
        while self.current().type in (TokenType.AND, TokenType.SEMICOLON):
            operator = self.advance().value
            following = self.parse_pipeline()
            if following is not None:
                result.operators.append(operator)
                result.pipelines.append(following)
        return result

    def parse_pipeline(self) -> Pipeline | None:
        first = self.parse_command()
        if first is None:
            return None
        commands = [first]
        while self.current().type is TokenType.PIPE:
            self.advance()
            following = self.parse_command()
            if following is not None:
                commands.append(following)
        return Pipeline(commands=commands)

    def parse_command(self) -> CommandSpec | None:
        words: list[str] = []
        while self.current().type is TokenType.WORD:
            words.append(self.advance().value)

        redirect: Redirect | None = None
        if self.current().type in (TokenType.REDIRECT, TokenType.APPEND):
            mode = (
                RedirectMode.APPEND
                if self.advance().type is TokenType.APPEND
                else RedirectMode.OVERWRITE
            )
            if self.current().type is TokenType.WORD:
                redirect = Redirect(mode=mode, file=self.advance().value)

        if not words:
            return None
        return CommandSpec(name=words[0], args=words[1:], redirect=redirect)


def parse(tokens: list[Token]) -> CommandList:
    return _Parser(tokens).parse_list()


def parse_line(command_line: str) -> CommandList:
    return parse(tokenize(command_line))


__all__ = [
    "Token",
    "TokenType",
    "Redirect",
    "RedirectMode",
    "CommandSpec",
    "Pipeline",
    "CommandList",
    "tokenize",
    "parse",
    "parse_line",
]
