"""
A small token stream over invocation text, like ``"example.vert", version: 450``.

We let Python's tokenize module do the lexing, so that identifiers,
integer literals and (raw, triple-quoted) string literals follow the
rules Python users already know. The parser on top only needs to peek
at and consume tokens.
"""

import io
import ast
import tokenize

from ._errors import ConfigError


class Span:
    """The location of a token in the invocation text. Used to anchor diagnostics."""

    def __init__(self, line, col, text="", origin="<invocation>"):
        self.line = line
        self.col = col
        self.text = text
        self.origin = origin

    def __repr__(self):
        return f"<Span {self} {self.text!r}>"

    def __str__(self):
        return f"{self.origin}:{self.line}:{self.col + 1}"


class Token:
    """A token with a kind ('ident', 'int', 'number', 'str', 'punct' or 'end'),
    its Python value, and its span.
    """

    def __init__(self, kind, value, span):
        self.kind = kind
        self.value = value
        self.span = span

    def __repr__(self):
        return f"<Token {self.kind} {self.value!r}>"

    def describe(self):
        if self.kind == "end":
            return "end of input"
        return f"{self.kind} {self.span.text!r}"


_skipped_types = (
    tokenize.NL,
    tokenize.NEWLINE,
    tokenize.COMMENT,
    tokenize.INDENT,
    tokenize.DEDENT,
    tokenize.ENDMARKER,
)


def tokenize_invocation(text, origin="<invocation>"):
    """Turn invocation text into a list of Token objects, ending with an 'end' token."""
    # Wrap in parentheses so that newlines and indentation inside the text
    # carry no meaning. Columns on the first line shift by one.
    readline = io.StringIO("(" + text + "\n)").readline
    raw_tokens = []
    try:
        for tok in tokenize.generate_tokens(readline):
            if tok.type not in _skipped_types:
                raw_tokens.append(tok)
    except tokenize.TokenError as err:
        message, (line, col) = err.args
        span = _make_span(line, col, "", origin)
        raise ConfigError(f"Could not tokenize invocation: {message}", span) from None
    except SyntaxError as err:
        span = _make_span(err.lineno or 1, (err.offset or 1) - 1, "", origin)
        raise ConfigError(f"Could not tokenize invocation: {err.msg}", span) from None

    tokens = []
    for tok in raw_tokens[1:-1]:
        span = _make_span(*tok.start, tok.string, origin)
        tokens.append(_convert_token(tok, span))

    lines = text.split("\n")
    tokens.append(Token("end", None, Span(len(lines), len(lines[-1]), "", origin)))
    return tokens


def _make_span(line, col, text, origin):
    # Undo the shift of the opening parenthesis
    if line == 1:
        col = max(col - 1, 0)
    return Span(line, col, text, origin)


def _convert_token(tok, span):
    if tok.type == tokenize.NAME:
        return Token("ident", tok.string, span)
    elif tok.type == tokenize.NUMBER:
        try:
            return Token("int", int(tok.string, 0), span)
        except ValueError:
            return Token("number", tok.string, span)
    elif tok.type == tokenize.STRING:
        try:
            value = ast.literal_eval(tok.string)
        except (SyntaxError, ValueError) as err:
            raise ConfigError(f"Invalid string literal {tok.string!r}: {err}", span) from None
        if not isinstance(value, str):
            raise ConfigError(f"Expected a str literal, got {tok.string!r}", span)
        return Token("str", value, span)
    elif tok.type == tokenize.OP:
        return Token("punct", tok.string, span)
    else:
        raise ConfigError(f"Unexpected token {tok.string!r}", span)


class TokenStream:
    """Walk over a list of tokens. The parse_xx() methods consume a token of
    the given kind, or raise a ConfigError that cites the offending token.
    """

    def __init__(self, tokens):
        self._tokens = list(tokens)
        if not self._tokens or self._tokens[-1].kind != "end":
            self._tokens.append(Token("end", None, Span(1, 0)))
        self._pos = 0

    @classmethod
    def from_text(cls, text, origin="<invocation>"):
        return cls(tokenize_invocation(text, origin))

    def current(self):
        return self._tokens[self._pos]

    def is_empty(self):
        return self.current().kind == "end"

    def peek(self, kind, value=None):
        """Get whether the next token is of the given kind (and value)."""
        tok = self.current()
        return tok.kind == kind and (value is None or tok.value == value)

    def next(self):
        tok = self.current()
        if tok.kind != "end":
            self._pos += 1
        return tok

    def _expect(self, kind, what, value=None):
        if not self.peek(kind, value):
            tok = self.current()
            raise ConfigError(f"Expected {what}, found {tok.describe()}", tok.span)
        return self.next()

    def parse_ident(self):
        return self._expect("ident", "identifier")

    def parse_int(self):
        return self._expect("int", "integer literal")

    def parse_str(self):
        return self._expect("str", "string literal")

    def parse_punct(self, char):
        return self._expect("punct", repr(char), char)
