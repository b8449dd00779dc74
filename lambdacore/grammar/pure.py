"""Pure lambda calculus recursive descent parser.

Formally, the accepted grammar can be succinctly defined as

```
<expr>        ::= <abstraction> | <application>
<abstraction> ::= <lambda> <identifier> [<period>] <expr>  ; body is greedy: \\x x y = \\x (x y) != (\\x x) y
<application> ::= <atom> (<atom> | <abstraction>)*        ; associating by left: a b c d = (((a b) c) d)
<atom>        ::= <identifier> | "(" <expr> ")"
```

Tokens are pulled lazily from lambdacore.pure.lexical.tokenize, so a lexical error is only raised once the parser
reaches the offending character. Empty (or whitespace-only) source holds zero expressions and is not an error.

Sources: https://opendsa-server.cs.vt.edu/ODSA/Books/PL/html/Syntax.html,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html
"""

from lambdacore.lang.error import MissingBody, MissingVariable, UnclosedParenthesis, UnexpectedToken
from lambdacore.pure.lexical import TokenKind, tokenize
from lambdacore.term import Abs, App, Var

ATOM_START = (TokenKind.IDENTIFIER, TokenKind.LPAREN)
ARGUMENT_START = ATOM_START + (TokenKind.LAMBDA,)


class Parser:
    """Parses exactly one λ-term out of a source string."""

    def __init__(self, source):
        self.source = source
        self._tokens = tokenize(source)
        self.current = next(self._tokens)

    def advance(self):
        """Consumes and returns the current token. The EOF token is never consumed."""
        token = self.current
        assert token.kind is not TokenKind.EOF, "attempted to read past end of input"
        self.current = next(self._tokens)
        return token

    def error(self, cls, token=None):
        token = token if token is not None else self.current
        return cls(self.source, token.position, len(token.text))

    def parse(self):
        """Returns the λ-term in source, or None if source holds no tokens."""
        if self.current.kind is TokenKind.EOF:
            return None

        term = self.expression()
        if self.current.kind is not TokenKind.EOF:
            raise self.error(UnexpectedToken)
        return term

    def expression(self):
        if self.current.kind is TokenKind.LAMBDA:
            return self.abstraction()
        return self.application()

    def abstraction(self):
        self.advance()  # <lambda>
        if self.current.kind is not TokenKind.IDENTIFIER:
            raise self.error(MissingVariable)
        bound = self.advance().text

        if self.current.kind is TokenKind.DOT:
            self.advance()
        if self.current.kind in (TokenKind.EOF, TokenKind.RPAREN):
            raise self.error(MissingBody)

        return Abs(bound, self.expression())

    def application(self):
        term = self.atom()
        while self.current.kind in ARGUMENT_START:
            if self.current.kind is TokenKind.LAMBDA:
                arg = self.abstraction()
            else:
                arg = self.atom()
            term = App(term, arg)
        return term

    def atom(self):
        token = self.current

        if token.kind is TokenKind.IDENTIFIER:
            self.advance()
            return Var(token.text)

        elif token.kind is TokenKind.LPAREN:
            self.advance()
            if self.current.kind is TokenKind.EOF:
                raise self.error(UnclosedParenthesis, token)

            term = self.expression()
            if self.current.kind is TokenKind.RPAREN:
                self.advance()
                return term
            elif self.current.kind is TokenKind.EOF:
                raise self.error(UnclosedParenthesis, token)

        raise self.error(UnexpectedToken)


def parse(source):
    """Parses source into a λ-term. Returns None if source is empty or whitespace-only."""
    return Parser(source).parse()


def parse_lines(text):
    """Parses every non-blank line of text as an independent λ-term. Raises on the first invalid line."""
    terms = []
    for line in text.splitlines():
        term = parse(line)
        if term is not None:
            terms.append(term)
    return terms
