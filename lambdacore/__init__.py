"""Untyped lambda calculus interpreter.

For reference:
- "pure": the lambda calculus itself (lexer, parser, substitution, normal-order reduction)
- "lang": everything around it (errors and diagnostics, Church numerals, sessions, the interactive shell)

Basic program flow:
    1. Lexer: lazily turns a line of source into tokens (lambdacore/pure/lexical.py)
    2. Parser: recursive descent from tokens to an immutable syntax tree (lambdacore/grammar/pure.py)
    3. Reduction: contracts the leftmost outermost redex until none is left, or the step limit is hit
       (lambdacore/pure/reduction.py, using capture-avoiding substitution from lambdacore/pure/substitution.py)
    4. Printing: every term prints fully parenthesized, e.g. (\\x (f x)), so that printing inverts parsing

"""
