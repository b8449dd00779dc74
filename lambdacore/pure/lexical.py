"""Pure lambda calculus lexical analysis: turns source text into a lazy stream of tokens.

Tokens:

```
<lambda>     ::= "\\" | "λ"
<period>     ::= "."                        ; optional separator between bound variable and body
<open_paren> ::= "("
<close_paren>::= ")"
<identifier> ::= <letter> (<letter> | <digit>)*
```

Whitespace (space, tab, carriage return, newline) only separates tokens. Letters and digits are ASCII only, so that "λ"
is never mistaken for the start of an identifier.
"""

from enum import Enum
from string import ascii_letters, digits
from typing import NamedTuple

from lambdacore.lang.error import MalformedIdentifier, UnexpectedCharacter


class TokenKind(Enum):
    IDENTIFIER = "identifier"
    LAMBDA = "lambda"
    DOT = "period"
    LPAREN = "open_paren"
    RPAREN = "close_paren"
    EOF = "end of input"


class Token(NamedTuple):
    kind: TokenKind
    text: str
    position: int


WHITESPACE = " \t\r\n"
LETTERS = frozenset(ascii_letters)
ALPHANUMERIC = frozenset(ascii_letters + digits)

BUILTINS = {
    "\\": TokenKind.LAMBDA,
    "λ": TokenKind.LAMBDA,
    ".": TokenKind.DOT,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}


def _scan_word(source, start):
    """Returns the index just past the run of letters/digits beginning at start."""
    end = start + 1
    while end < len(source) and source[end] in ALPHANUMERIC:
        end += 1
    return end


def tokenize(source):
    """Lazily yields the Tokens in source, ending with exactly one EOF token. Raises a LexicalError at the first
    character that cannot begin a token. Calling tokenize again restarts from the beginning of source.
    """
    idx = 0
    while idx < len(source):
        char = source[idx]

        if char in WHITESPACE:
            idx += 1

        elif char in BUILTINS:
            yield Token(BUILTINS[char], char, idx)
            idx += 1

        elif char in LETTERS:
            end = _scan_word(source, idx)
            yield Token(TokenKind.IDENTIFIER, source[idx:end], idx)
            idx = end

        elif char in digits:
            end = _scan_word(source, idx)
            raise MalformedIdentifier(source[idx:end], idx, source)

        else:
            raise UnexpectedCharacter(char, idx, source)

    yield Token(TokenKind.EOF, "", len(source))


def is_identifier(text):
    """Whether or not text is a valid variable name."""
    return isinstance(text, str) and bool(text) and text[0] in LETTERS and all(char in ALPHANUMERIC for char in text)
