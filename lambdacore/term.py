"""Pure lambda calculus terms.

A term is exactly one of three frozen shapes:

```
Var(name)         ; "variable"
Abs(bound, body)  ; "abstraction", printed as (\\bound body)
App(func, arg)    ; "application", printed as (func arg)
```

Equality is structural (shape and names only). Alpha-equivalence is a separate, derived check: see alpha_equals.
Terms are never mutated, so subterms may be freely shared between trees.
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Union

from lambdacore.pure.lexical import is_identifier


@dataclass(frozen=True)
class Var:
    """Variable: an identifier that refers to the nearest enclosing binder of the same name (or is free)."""
    name: str

    def __post_init__(self):
        if not is_identifier(self.name):
            raise ValueError(f"invalid variable name {self.name!r}")

    @cached_property
    def free_vars(self):
        return frozenset((self.name,))

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Abs:
    """Abstraction: binds `bound` in `body`."""
    bound: str
    body: "Term"

    def __post_init__(self):
        if not is_identifier(self.bound):
            raise ValueError(f"invalid variable name {self.bound!r}")

    @cached_property
    def free_vars(self):
        return _free_vars(self)

    def __str__(self):
        return show(self)


@dataclass(frozen=True)
class App:
    """Application of `func` to `arg`."""
    func: "Term"
    arg: "Term"

    @cached_property
    def free_vars(self):
        return _free_vars(self)

    def __str__(self):
        return show(self)


Term = Union[Var, Abs, App]


def is_term(obj):
    return isinstance(obj, (Var, Abs, App))


def children(term):
    if isinstance(term, Abs):
        return (term.body,)
    elif isinstance(term, App):
        return (term.func, term.arg)
    return ()


def _free_vars(term):
    """Walks term bottom-up so that every subterm's free_vars is memoised before its parent asks for it. Nesting depth
    is bounded by memory, not by the interpreter's recursion limit.
    """
    stack = [(term, False)]
    while stack:
        node, ready = stack.pop()
        if not ready:
            stack.append((node, True))
            stack.extend((child, False) for child in children(node) if "free_vars" not in child.__dict__)
        elif node is not term:
            node.free_vars  # all children memoised, so this computes one level only

    if isinstance(term, Abs):
        return term.body.free_vars - {term.bound}
    return term.func.free_vars | term.arg.free_vars


def show(term):
    """Returns the canonical text of term: (\\x body) and (func arg), fully parenthesized."""
    parts = []
    stack = [term]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
        elif isinstance(item, Var):
            parts.append(item.name)
        elif isinstance(item, Abs):
            stack.extend((")", item.body, f"(\\{item.bound} "))
        else:
            stack.extend((")", item.arg, " ", item.func, "("))
    return "".join(parts)


def is_redex(term):
    """Whether or not term is of the form (λx.M) N."""
    return isinstance(term, App) and isinstance(term.func, Abs)


def free_vars(term):
    """Returns the frozenset of variable names that occur free in term. Memoised per node."""
    if not is_term(term):
        raise TypeError(f"expected a lambda term, got {type(term).__name__}")
    return term.free_vars


def alpha_equals(term, other, mapping=None, other_mapping=None):
    """Whether or not term and other are equal up to renaming of bound variables. mapping maps bound names of term to
    the bound names of other at the same binding depth; other_mapping is the reverse map.
    """
    if mapping is None:
        mapping = {}
    if other_mapping is None:
        other_mapping = {}

    if isinstance(term, Var):
        if not isinstance(other, Var):
            return False
        if term.name in mapping or other.name in other_mapping:
            return mapping.get(term.name) == other.name and other_mapping.get(other.name) == term.name
        return term.name == other.name  # both free

    elif isinstance(term, Abs):
        if not isinstance(other, Abs):
            return False
        mapping = {**mapping, term.bound: other.bound}
        other_mapping = {**other_mapping, other.bound: term.bound}
        return alpha_equals(term.body, other.body, mapping, other_mapping)

    elif isinstance(term, App):
        if not isinstance(other, App):
            return False
        return (alpha_equals(term.func, other.func, mapping, other_mapping)
                and alpha_equals(term.arg, other.arg, mapping, other_mapping))

    raise TypeError(f"expected a lambda term, got {type(term).__name__}")


def display(term, indents=0):
    """Recursively displays term as an indented tree.

    Format:
    Application(expr='(f x)', nodes=[
        Variable(expr='f'),
        Variable(expr='x')
    ])
    """
    pad = "    " * indents
    if isinstance(term, Var):
        return f"{pad}Variable(expr='{term}')"
    elif isinstance(term, Abs):
        nodes = [Var(term.bound), term.body]
        cls = "Abstraction"
    elif isinstance(term, App):
        nodes = [term.func, term.arg]
        cls = "Application"
    else:
        raise TypeError(f"expected a lambda term, got {type(term).__name__}")

    result = f"{pad}{cls}(expr='{term}', nodes=["
    result += ",".join("\n" + display(node, indents + 1) for node in nodes)
    return result + f"\n{pad}])"
