# parser/lexer.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# Lexical analyzer for formula text using SLY

"""Lexical analyzer for formula strings.

Formulas are written in call notation, the same text ``write_formula()``
produces, e.g. ``EXIST_UNTIL(TT, NF(id("end")))``.

Supported Tokens:
- Names: operator, predicate and constant names
- Strings: double-quoted predicate arguments (quotes are stripped)
- Punctuation: ( ) ,
- Whitespace: ignored during tokenization
"""

from sly import Lexer
from utils.logger import get_logger


class FormulaLexer(Lexer):
    """SLY-based lexer for formula tokenization."""

    tokens = {
        "ID",
        "STRING",
        "LPAREN",
        "RPAREN",
        "COMMA",
    }

    ignore = " \t\r\n"

    LPAREN = r"\("
    RPAREN = r"\)"
    COMMA = r","

    ID = r"[a-zA-Z_][a-zA-Z0-9_]*"

    @_(r'"[^"]*"')
    def STRING(self, t):
        t.value = t.value[1:-1]
        return t

    def error(self, t):
        """Handle illegal characters during tokenization.

        Raises:
            ValueError: Always raised with character and position information
        """
        logger = get_logger()

        illegal_char = t.value[0]
        error_pos = self.index

        logger.debug(f"Illegal character '{illegal_char}' at position {error_pos}")

        self.index += 1

        raise ValueError(
            f"Illegal character '{illegal_char}' encountered at position {error_pos}"
        )
