import pytest

from loxvm.scanner import Scanner, Token, TokenType


def types(source):
    return [token.type for token in Scanner(source)]


def test_empty_source_gives_eof():
    tokens = list(Scanner(""))
    assert tokens == [Token(TokenType.EOF, "", 1)]


def test_scan_token_repeats_eof():
    scanner = Scanner("")
    assert scanner.scan_token().type is TokenType.EOF
    assert scanner.scan_token().type is TokenType.EOF


def test_single_character_tokens():
    assert types("(){};,.-+*/") == [
        TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN,
        TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
        TokenType.SEMICOLON, TokenType.COMMA, TokenType.DOT,
        TokenType.MINUS, TokenType.PLUS, TokenType.STAR, TokenType.SLASH,
        TokenType.EOF,
    ]


def test_one_or_two_character_tokens():
    assert types("! != = == < <= > >=") == [
        TokenType.BANG, TokenType.BANG_EQUAL,
        TokenType.EQUAL, TokenType.EQUAL_EQUAL,
        TokenType.LESS, TokenType.LESS_EQUAL,
        TokenType.GREATER, TokenType.GREATER_EQUAL,
        TokenType.EOF,
    ]


@pytest.mark.parametrize(
    "word, expected",
    [
        ("and", TokenType.AND), ("class", TokenType.CLASS),
        ("else", TokenType.ELSE), ("false", TokenType.FALSE),
        ("for", TokenType.FOR), ("fun", TokenType.FUN),
        ("if", TokenType.IF), ("nil", TokenType.NIL),
        ("or", TokenType.OR), ("print", TokenType.PRINT),
        ("return", TokenType.RETURN), ("super", TokenType.SUPER),
        ("this", TokenType.THIS), ("true", TokenType.TRUE),
        ("var", TokenType.VAR), ("while", TokenType.WHILE),
    ],
)
def test_keywords(word, expected):
    token = Scanner(word).scan_token()
    assert token.type is expected
    assert token.lexeme == word


@pytest.mark.parametrize("word", ["fo", "f", "th", "t", "andy", "_x1", "Class"])
def test_identifiers_that_resemble_keywords(word):
    token = Scanner(word).scan_token()
    assert token.type is TokenType.IDENTIFIER
    assert token.lexeme == word


def test_numbers_with_and_without_fraction():
    tokens = list(Scanner("12 3.75"))
    assert [(t.type, t.lexeme) for t in tokens[:2]] == [
        (TokenType.NUMBER, "12"),
        (TokenType.NUMBER, "3.75"),
    ]


def test_trailing_dot_is_not_part_of_number():
    tokens = list(Scanner("7."))
    assert [(t.type, t.lexeme) for t in tokens] == [
        (TokenType.NUMBER, "7"),
        (TokenType.DOT, "."),
        (TokenType.EOF, ""),
    ]


def test_string_lexeme_includes_quotes():
    token = Scanner('"hello"').scan_token()
    assert token.type is TokenType.STRING
    assert token.lexeme == '"hello"'


def test_multiline_string_advances_line():
    tokens = list(Scanner('"a\nb" x'))
    assert tokens[0].type is TokenType.STRING
    assert tokens[1].lexeme == "x"
    assert tokens[1].line == 2


def test_unterminated_string():
    token = Scanner('"abc').scan_token()
    assert token == Token(TokenType.ERROR, "Unterminated string.", 1)


def test_unexpected_character():
    token = Scanner("#").scan_token()
    assert token.type is TokenType.ERROR
    assert token.lexeme == "Unexpected character."


def test_comments_and_newlines_are_skipped():
    tokens = list(Scanner("1 // note\n\t2\r\n"))
    assert [(t.type, t.lexeme, t.line) for t in tokens[:2]] == [
        (TokenType.NUMBER, "1", 1),
        (TokenType.NUMBER, "2", 2),
    ]
    assert tokens[2].type is TokenType.EOF
    assert tokens[2].line == 3


def test_expression_token_stream():
    tokens = list(Scanner("(1 + 2) * -x"))
    assert [t.lexeme for t in tokens] == ["(", "1", "+", "2", ")", "*", "-", "x", ""]
    assert tokens[-1].type is TokenType.EOF