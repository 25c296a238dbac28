"""
Tokenizer and recursive-descent parser for location patterns.

Grammar (one comma-separated segment):

    segment   := base [ "*(" generator ")" ]
    base      := TEXT? [ "{" COUNT "}" TEXT? ]
    generator := "+-" "[" COUNT "]"

``TEXT`` is any run of characters other than ``{ } * ( ) [ ]``.
"""

import logging
import re
from dataclasses import dataclass

from .errors import InvalidPatternError, LimitExceededError
from .limits import DEFAULT_LIMITS, ExpansionLimits
from .nodes import BraceRange, Hierarchy, LetterSequence, Literal, PatternAST

logger = logging.getLogger(__name__)

TOKEN_KINDS = {
    "{": "LBRACE",
    "}": "RBRACE",
    "*": "STAR",
    "(": "LPAREN",
    ")": "RPAREN",
    "[": "LBRACKET",
    "]": "RBRACKET",
}

COUNT_PATTERN = re.compile(r"[0-9]+")

# The only child generator the language defines
LETTER_GENERATOR_PREFIX = "+-"

COUNT_HINT = "a positive integer such as {3} or {12}"
GENERATOR_HINT = "a letter generator such as *(+-[4])"


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    column: int


def split_segments(pattern: str) -> list[str]:
    """Split on commas, trim whitespace and drop empty segments."""
    return [part.strip() for part in pattern.split(",") if part.strip()]


def tokenize(segment: str) -> list[Token]:
    """Split a segment into metacharacter tokens and TEXT runs."""
    tokens: list[Token] = []
    start = 0
    for i, char in enumerate(segment):
        if char in TOKEN_KINDS:
            if i > start:
                tokens.append(Token("TEXT", segment[start:i], start))
            tokens.append(Token(TOKEN_KINDS[char], char, i))
            start = i + 1
    if start < len(segment):
        tokens.append(Token("TEXT", segment[start:], start))
    return tokens


class _SegmentParser:
    """Parses the tokens of a single segment into an AST node."""

    def __init__(self, segment: str, limits: ExpansionLimits = DEFAULT_LIMITS):
        self.segment = segment
        self.limits = limits
        self.tokens = tokenize(segment)
        self.pos = 0

    def error(self, message: str, code: str, column=None, expected=None):
        return InvalidPatternError(
            message,
            segment=self.segment,
            column=column,
            expected=expected,
            code=code,
        )

    def peek(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def accept(self, kind: str) -> Token | None:
        token = self.peek()
        if token is not None and token.kind == kind:
            return self.advance()
        return None

    def expect(self, kind: str, expected: str, opener: Token | None = None) -> Token:
        token = self.peek()
        if token is not None and token.kind == kind:
            return self.advance()
        if token is None:
            column = opener.column if opener else len(self.segment)
            raise self.error(
                f"Unclosed '{opener.text}'" if opener else "Unexpected end of segment",
                "UNCLOSED_GROUP",
                column=column,
                expected=expected,
            )
        raise self.error(
            f"Unexpected '{token.text}'",
            "UNEXPECTED_TOKEN",
            column=token.column,
            expected=expected,
        )

    def parse(self) -> PatternAST:
        self._reject_nested_hierarchy()
        base = self.parse_base()

        star = self.accept("STAR")
        if star is None:
            self._expect_end()
            return base

        self.expect("LPAREN", "'(' after '*'")
        generator = self.parse_generator(star)
        self._expect_end()
        return Hierarchy(
            base=base, generator=generator, segment=self.segment, column=0
        )

    def parse_base(self) -> Literal | BraceRange:
        prefix_token = self.accept("TEXT")
        prefix = prefix_token.text if prefix_token else ""

        lbrace = self.accept("LBRACE")
        if lbrace is None:
            if not prefix:
                token = self.peek()
                raise self.error(
                    "Segment has no location name",
                    "UNEXPECTED_TOKEN",
                    column=token.column if token else 0,
                    expected="a literal code or prefix{N}",
                )
            return Literal(text=prefix, segment=self.segment, column=0)

        count, width = self.parse_count(lbrace, "RBRACE")
        suffix_token = self.accept("TEXT")
        suffix = suffix_token.text if suffix_token else ""

        extra = self.peek()
        if extra is not None and extra.kind == "LBRACE":
            raise self.error(
                "Only one range is allowed per segment",
                "MULTIPLE_RANGES",
                column=extra.column,
                expected="split the ranges into separate comma segments",
            )

        return BraceRange(
            prefix=prefix,
            count=count,
            width=width,
            suffix=suffix,
            segment=self.segment,
            column=lbrace.column,
        )

    def parse_count(self, opener: Token, closer: str) -> tuple[int, int]:
        """Parse ``COUNT`` followed by the closing token; return (count, width)."""
        content = self.accept("TEXT")
        closing = "}" if closer == "RBRACE" else "]"
        if content is None:
            token = self.peek()
            if token is None:
                self.expect(closer, COUNT_HINT, opener)
            if token.kind == closer:
                raise self.error(
                    "Expected integer range count",
                    "INVALID_COUNT",
                    column=token.column,
                    expected=COUNT_HINT,
                )
        self.expect(closer, f"'{closing}'", opener)

        raw = content.text.strip()
        if not COUNT_PATTERN.fullmatch(raw):
            raise self.error(
                f"Expected integer range count, got '{content.text}'",
                "INVALID_COUNT",
                column=content.column,
                expected=COUNT_HINT,
            )
        digits = raw.lstrip("0") or "0"
        self._check_digit_bound(digits, closer, content.column)
        count = int(digits)
        if count <= 0:
            raise self.error(
                "Expected positive integer range count, got 0",
                "INVALID_COUNT",
                column=content.column,
                expected=COUNT_HINT,
            )
        return count, len(str(count))

    def _check_digit_bound(self, digits: str, closer: str, column: int):
        """Reject counts with more digits than any allowed value has."""
        if closer == "RBRACE":
            bound = self.limits.max_nodes
            if len(digits) > len(str(bound)):
                raise LimitExceededError(
                    f"Range count has {len(digits)} digits, "
                    f"pattern would generate more than {bound} locations",
                    segment=self.segment,
                    column=column,
                    expected=f"at most {bound} generated locations",
                    code="NODE_LIMIT_EXCEEDED",
                    context={"count_digits": len(digits), "max_nodes": bound},
                )
        else:
            bound = self.limits.max_letters
            if len(digits) > len(str(bound)):
                raise self.error(
                    f"Letter sequence exhausted: {len(digits)}-digit child count "
                    f"requested, only {bound} letters available",
                    "LETTER_SEQUENCE_EXHAUSTED",
                    column=column,
                    expected=f"+-[K] with K <= {bound}",
                )

    def parse_generator(self, star: Token) -> LetterSequence:
        lead = self.accept("TEXT")
        if lead is None or lead.text != LETTER_GENERATOR_PREFIX:
            column = lead.column if lead else star.column
            raise self.error(
                "Unsupported child generator",
                "UNSUPPORTED_GENERATOR",
                column=column,
                expected=GENERATOR_HINT,
            )
        lbracket = self.expect("LBRACKET", GENERATOR_HINT)
        count, _ = self.parse_count(lbracket, "RBRACKET")
        self.expect("RPAREN", "')' closing the child generator")
        return LetterSequence(
            separator="-",
            count=count,
            segment=self.segment,
            column=lead.column,
        )

    def _expect_end(self):
        token = self.peek()
        if token is not None:
            raise self.error(
                f"Unexpected '{token.text}'",
                "UNEXPECTED_TOKEN",
                column=token.column,
                expected="end of segment",
            )

    def _reject_nested_hierarchy(self):
        markers = [
            token
            for token, following in zip(self.tokens, self.tokens[1:])
            if token.kind == "STAR" and following.kind == "LPAREN"
        ]
        if len(markers) > 1:
            raise self.error(
                "Nested hierarchies not supported",
                "NESTED_HIERARCHY",
                column=markers[1].column,
                expected="a single base*(+-[K]) level",
            )


def parse_segment(
    segment: str, limits: ExpansionLimits | None = None
) -> PatternAST:
    """Parse one trimmed segment into an AST node."""
    return _SegmentParser(segment, limits or DEFAULT_LIMITS).parse()


def validate_segment(ast: PatternAST, limits: ExpansionLimits) -> None:
    """
    Check AST-level policy that the grammar alone does not capture.

    Raises:
        InvalidPatternError: If a letter generator needs more than the alphabet
    """
    if isinstance(ast, Hierarchy):
        generator = ast.generator
        if generator.count > limits.max_letters:
            raise InvalidPatternError(
                f"Letter sequence exhausted: {generator.count} children "
                f"requested, only {limits.max_letters} letters available",
                segment=ast.segment,
                column=generator.column,
                expected=f"+-[K] with K <= {limits.max_letters}",
                code="LETTER_SEQUENCE_EXHAUSTED",
            )


def parse(pattern: str, limits: ExpansionLimits | None = None) -> list[PatternAST]:
    """
    Parse and validate every segment of a pattern string.

    Args:
        pattern: Comma-separated location pattern
        limits: Safety limits (defaults apply when omitted)

    Returns:
        One AST node per non-empty segment, in input order

    Raises:
        InvalidPatternError: On malformed syntax
        LimitExceededError: If the input is longer than allowed
    """
    limits = limits or DEFAULT_LIMITS

    if len(pattern) > limits.max_pattern_length:
        raise LimitExceededError(
            f"Pattern is {len(pattern)} characters long, "
            f"limit is {limits.max_pattern_length}",
            code="PATTERN_TOO_LONG",
            context={
                "length": len(pattern),
                "max_pattern_length": limits.max_pattern_length,
            },
        )

    asts = []
    for segment in split_segments(pattern):
        ast = parse_segment(segment, limits)
        validate_segment(ast, limits)
        logger.debug("Parsed segment %r as %s", segment, type(ast).__name__)
        asts.append(ast)
    return asts
