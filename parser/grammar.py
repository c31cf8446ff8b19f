# parser/grammar.py
# This file is part of Ariadne - A Petri Net Route Model Checker
#
# LALR(1) grammar and parser for formula text using SLY

"""Formula grammar implementation using SLY parser generator.

Grammar:
    start : call
    call  : ID
          | ID LPAREN args RPAREN
    args  : arg
          | args COMMA arg
    arg   : call
          | STRING
"""

from sly import Parser
from .lexer import FormulaLexer
from .ast_nodes import Call, Text
from .exceptions import ParseError
from utils.logger import get_logger


class _FormulaParser(Parser):
    """SLY-based LALR(1) parser building :class:`Call` trees."""

    tokens = FormulaLexer.tokens

    @_("call")
    def start(self, p) -> Call:
        return p.call

    @_("ID")
    def call(self, p) -> Call:
        return Call(p.ID)

    @_("ID LPAREN args RPAREN")
    def call(self, p) -> Call:
        return Call(p.ID, tuple(p.args))

    @_("arg")
    def args(self, p) -> list:
        return [p.arg]

    @_("args COMMA arg")
    def args(self, p) -> list:
        return p.args + [p.arg]

    @_("call")
    def arg(self, p):
        return p.call

    @_("STRING")
    def arg(self, p):
        return Text(p.STRING)

    def parse(self, text: str) -> Call:
        """Parse formula text into a syntax tree.

        Raises:
            ParseError: If the text is empty or contains syntax errors
        """
        logger = get_logger()
        logger.debug(f"Parsing formula: {text}")

        try:
            result = super().parse(FormulaLexer().tokenize(text))

            if result is None and text.strip() == "":
                raise ParseError("Input formula is empty.")

            if result is None:
                raise ParseError("Failed to parse formula (syntax error).")

            return result

        except ParseError:
            logger.debug("Parse error encountered")
            raise
        except Exception as e:
            logger.debug(f"Unexpected parsing error: {e}")
            raise ParseError(f"Parse failed: {e}") from e

    def error(self, token):
        """Handle syntax errors during parsing.

        Raises:
            ParseError: Always raises with detailed error information
        """
        if token:
            error_msg = (
                f"Syntax error near '{token.value}' "
                f"(type: {token.type}) at line {token.lineno}, position {token.index}"
            )
        else:
            error_msg = "Syntax error: Unexpected end of formula"

        raise ParseError(error_msg)
