"""
arith expression language.

Tokenizer, tree builder, evaluator, and parenthesized renderer for integer
arithmetic over ``+ - * /``.

Usage:
    from arith.core.expression_lang import build_tree, eval_tree, tokenize

    tree = build_tree(tokenize("1 + 2 * 3"))
    eval_tree(tree)
    # 7
"""

from arith.core.expression_lang.builder import build_tree, check_shape
from arith.core.expression_lang.evaluator import eval_tree, truncating_div
from arith.core.expression_lang.render import read_rendered, render
from arith.core.expression_lang.tokenizer import Token, TokenKind, UnknownCharPolicy, tokenize

__all__ = [
    "Token",
    "TokenKind",
    "UnknownCharPolicy",
    "build_tree",
    "check_shape",
    "eval_tree",
    "read_rendered",
    "render",
    "tokenize",
    "truncating_div",
]
