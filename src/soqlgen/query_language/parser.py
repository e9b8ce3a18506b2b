"""Parser for query language expressions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import cast

from parsy import ParseError, Parser, forward_declaration, generate, seq, success, test_item

from soqlgen.query_language.ast import (
    And,
    BoolLiteral,
    Comparison,
    DateLiteral,
    ListLiteral,
    Literal,
    Not,
    NullLiteral,
    NumberLiteral,
    OperatorKind,
    Or,
    OrderItem,
    Predicate,
    Query,
    SortDirection,
    StringLiteral,
)
from soqlgen.query_language.errors import (
    DuplicateModifierError,
    QueryParseError,
    UnexpectedTokenError,
    UnterminatedExpressionError,
)
from soqlgen.query_language.lexer import decode_string, tokenize
from soqlgen.query_language.tokens import Token, TokenKind


logger = logging.getLogger("soqlgen")

METHOD_ALIASES = {
    "select": "select",
    "where": "where",
    "orderBy": "orderBy",
    "orderby": "orderBy",
    "limit": "limit",
    "open": "open",
}


@dataclass(frozen=True, slots=True)
class MethodCall:
    """One `.method(argument)` link of a query chain."""

    name: str
    argument: object
    position: int


def _kind(kind: TokenKind) -> Parser:
    """Match one token of the given kind."""
    return test_item(lambda token: token.kind is kind, str(kind))


def _keyword(name: str) -> Parser:
    """Match one keyword token."""
    return test_item(lambda token: token.is_keyword(name), name)


def _scalar_literal(token: Token) -> Literal:
    """Convert a literal token into its AST node."""
    match token.kind:
        case TokenKind.STRING:
            return StringLiteral(*decode_string(token.text))
        case TokenKind.NUMBER:
            return NumberLiteral(cast(int | Decimal, token.value))
        case TokenKind.DATE:
            return DateLiteral(cast(date, token.value))
    if token.is_keyword("true"):
        return BoolLiteral(True)
    if token.is_keyword("false"):
        return BoolLiteral(False)
    return NullLiteral()


def _chain_left(
    term: Parser,
    op: Parser,
    builder: Callable[[Predicate, Predicate], Predicate],
) -> Parser:
    """Build a left-associative parser from term and operator parsers."""

    @generate
    def parser() -> Generator[Parser, object, Predicate]:
        left_result = yield term
        rest_result = yield (op >> term).many()

        current = cast(Predicate, left_result)
        for right in cast(list[Predicate], rest_result):
            current = builder(current, right)
        return current

    return parser


def _build_literal_parser(lparen: Parser, rparen: Parser, comma: Parser) -> Parser:
    """Build parser for scalar and list literals."""
    scalar = (
        _kind(TokenKind.STRING)
        | _kind(TokenKind.NUMBER)
        | _kind(TokenKind.DATE)
        | _keyword("true")
        | _keyword("false")
        | _keyword("null")
    ).map(_scalar_literal)
    list_literal = (lparen >> scalar.sep_by(comma, min=1) << rparen).map(
        lambda items: ListLiteral(tuple(items))
    )
    return list_literal | scalar


def _build_comparison_parser(identifier: Parser, literal: Parser) -> Parser:
    """Build parser for `field <operator> literal` comparisons."""
    operator = (
        _kind(TokenKind.OPERATOR).map(lambda token: cast(OperatorKind, token.value))
        | _keyword("like").result(OperatorKind.LIKE)
        | _keyword("in").result(OperatorKind.IN)
        | (_keyword("not") >> _keyword("in")).result(OperatorKind.NOT_IN)
    )

    @generate
    def comparison() -> Generator[Parser, object, Comparison]:
        field_token = cast(Token, (yield identifier))
        operator_kind = cast(OperatorKind, (yield operator))
        value = cast(Literal, (yield literal))
        return Comparison(field_token.text, operator_kind, value, position=field_token.position)

    return comparison


def _build_predicate_parser(
    identifier: Parser, lparen: Parser, rparen: Parser, comma: Parser
) -> Parser:
    """Build parser for WHERE predicates with `and` binding tighter than `or`."""
    predicate = forward_declaration()
    primary = forward_declaration()

    literal = _build_literal_parser(lparen, rparen, comma)
    comparison = _build_comparison_parser(identifier, literal)
    grouped = lparen >> predicate << rparen
    negation = (_keyword("not") >> primary).map(Not)
    primary.become(grouped | negation | comparison)

    conjunction = _chain_left(primary, _keyword("and"), And)
    disjunction = _chain_left(conjunction, _keyword("or"), Or)
    predicate.become(disjunction)
    return predicate


def _order_item(field_token: Token, direction_token: Token | None) -> OrderItem:
    if direction_token is None:
        return OrderItem(field_token.text)
    return OrderItem(field_token.text, SortDirection(str(direction_token.value).upper()))


def _make_parser() -> Parser:
    """Create the full query chain parser."""
    identifier = _kind(TokenKind.IDENTIFIER)
    dot = _kind(TokenKind.DOT)
    comma = _kind(TokenKind.COMMA)
    lparen = _kind(TokenKind.LPAREN)
    rparen = _kind(TokenKind.RPAREN)

    field_list = identifier.map(lambda token: token.text).sep_by(comma).map(tuple)
    direction = _keyword("asc") | _keyword("desc")
    order_list = (
        seq(identifier, direction.optional()).combine(_order_item).sep_by(comma, min=1).map(tuple)
    )
    predicate = _build_predicate_parser(identifier, lparen, rparen, comma)

    arguments: dict[str, Parser] = {
        "select": field_list,
        "where": predicate,
        "orderBy": order_list,
        "limit": _kind(TokenKind.NUMBER),
        "open": success(None),
    }
    method_name = test_item(
        lambda token: token.kind is TokenKind.IDENTIFIER and token.text in METHOD_ALIASES,
        "method",
    ).desc("method (" + ", ".join(sorted(set(METHOD_ALIASES.values()))) + ")")

    @generate
    def method_call() -> Generator[Parser, object, MethodCall]:
        yield dot
        name_token = cast(Token, (yield method_name))
        name = METHOD_ALIASES[name_token.text]
        yield lparen
        argument = yield arguments[name]
        yield rparen
        return MethodCall(name, argument, name_token.position)

    end = _kind(TokenKind.EOF)
    return seq(identifier, method_call.many() << end)


class _QueryBuilder:
    """Collects chain methods in any order and finalises them into a Query."""

    def __init__(self, object_token: Token) -> None:
        self.object_name = object_token.text
        self.fields: tuple[str, ...] = ()
        self.filter: Predicate | None = None
        self.order_by: tuple[OrderItem, ...] = ()
        self.limit: int | Decimal | None = None
        self.limit_position: int | None = None
        self.open_record = False
        self._seen: set[str] = set()

    def apply(self, call: MethodCall) -> None:
        if call.name in self._seen:
            raise DuplicateModifierError(call.name, call.position)
        self._seen.add(call.name)

        match call.name:
            case "select":
                self.fields = cast(tuple[str, ...], call.argument)
            case "where":
                self.filter = cast(Predicate, call.argument)
            case "orderBy":
                self.order_by = cast(tuple[OrderItem, ...], call.argument)
            case "limit":
                limit_token = cast(Token, call.argument)
                self.limit = cast(int | Decimal, limit_token.value)
                self.limit_position = limit_token.position
            case "open":
                self.open_record = True

    def build(self) -> Query:
        return Query(
            object_name=self.object_name,
            fields=self.fields,
            filter=self.filter,
            order_by=self.order_by,
            limit=self.limit,
            open_record=self.open_record,
            limit_position=self.limit_position,
        )


QUERY_PARSER = _make_parser()


def _convert_parse_error(tokens: list[Token], exc: ParseError) -> QueryParseError:
    """Map a parsy failure on the token stream to a positioned query error."""
    failed = tokens[min(exc.index, len(tokens) - 1)]
    if failed.kind is TokenKind.EOF:
        return UnterminatedExpressionError(exc.expected, failed.position)
    return UnexpectedTokenError(exc.expected, failed.text, failed.position)


def parse(tokens: Iterable[Token]) -> Query:
    """Parse a token stream into a query AST.

    Raises:
        LexError: If the token stream fails while being read
        QueryParseError: If tokens do not form a valid query chain
    """
    token_list = list(tokens)
    if not token_list or token_list[-1].kind is not TokenKind.EOF:
        end_position = token_list[-1].position + len(token_list[-1].text) if token_list else 0
        token_list.append(Token(TokenKind.EOF, "", end_position))

    try:
        object_token, calls = QUERY_PARSER.parse(token_list)
    except ParseError as exc:
        raise _convert_parse_error(token_list, exc) from exc

    builder = _QueryBuilder(object_token)
    for call in calls:
        builder.apply(call)
    query = builder.build()
    logger.debug("Parsed query: %r", query)
    return query


def parse_query(text: str) -> Query:
    """Parse query text into a query AST."""
    return parse(tokenize(text))
