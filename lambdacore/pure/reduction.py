"""Normal-order (leftmost-outermost) beta reduction.

At every step the redex whose application node comes first in a pre-order walk of the tree is contracted. If a term has
a beta normal form, this order is guaranteed to reach it: (λx.y) Ω reduces to y without ever touching Ω.

Beta normal form is undecidable in general, so reduction is capped at a fixed number of contractions. Running out of
steps is reported as LimitReached, never as an exception.

Source: http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from lambdacore.pure.substitution import substitute
from lambdacore.term import Abs, App, Term, is_redex


@dataclass(frozen=True)
class NormalForm:
    """Reduction finished: term contains no redexes."""
    term: Term
    steps: int = field(default=0, compare=False)


@dataclass(frozen=True)
class LimitReached:
    """Reduction gave up after steps contractions. term is the partially reduced term, kept for diagnostics."""
    steps: int
    term: Optional[Term] = field(default=None, compare=False)


ReductionResult = Union[NormalForm, LimitReached]


def find_redex(term):
    """Returns the index path to the leftmost outermost redex, or None if term is in normal form. In a path, 0 selects
    an abstraction's body or an application's function and 1 selects an application's argument.
    """
    stack = [(term, ())]
    while stack:
        node, path = stack.pop()
        if is_redex(node):
            return path

        if isinstance(node, Abs):
            stack.append((node.body, path + (0,)))
        elif isinstance(node, App):
            stack.append((node.arg, path + (1,)))  # pushed first so that func is visited first
            stack.append((node.func, path + (0,)))
    return None


def get(term, path):
    """Gets node at position specified by path. An empty path returns term itself."""
    for idx in path:
        if isinstance(term, Abs):
            term = term.body
        else:
            term = term.arg if idx else term.func
    return term


def replace(term, path, node):
    """Returns a copy of term with the node at path replaced. Only the nodes along path are rebuilt."""
    ancestors = []
    for idx in path:
        ancestors.append((term, idx))
        term = get(term, (idx,))

    for parent, idx in reversed(ancestors):
        if isinstance(parent, Abs):
            node = Abs(parent.bound, node)
        elif idx:
            node = App(parent.func, node)
        else:
            node = App(node, parent.arg)
    return node


def contract(redex):
    """(λx.M) N -> M[x := N]"""
    if not is_redex(redex):
        raise ValueError(f"{redex} is not a redex")
    return substitute(redex.func.body, redex.func.bound, redex.arg)


class NormalOrderReducer:
    """Implements normal-order beta reduction with a hard cap on the number of contractions."""
    MAX_STEPS = 1000

    def __init__(self, max_steps=None, on_step=None):
        """on_step, if given, is called as on_step(steps, term) after every contraction."""
        if max_steps is None:
            max_steps = NormalOrderReducer.MAX_STEPS
        if max_steps < 0:
            raise ValueError(f"max_steps must be non-negative, got {max_steps}")

        self.max_steps = max_steps
        self.on_step = on_step

    def step(self, term):
        """Contracts the leftmost outermost redex of term. Returns None if term is already in normal form."""
        path = find_redex(term)
        if path is None:
            return None
        return replace(term, path, contract(get(term, path)))

    def reduce(self, term):
        """Reduces term until it reaches normal form or max_steps contractions have been performed."""
        steps = 0
        path = find_redex(term)

        while path is not None:
            if steps >= self.max_steps:
                return LimitReached(steps, term)

            term = replace(term, path, contract(get(term, path)))
            steps += 1
            if self.on_step is not None:
                self.on_step(steps, term)

            path = find_redex(term)

        return NormalForm(term, steps)


def reduce(term, max_steps=None):
    """Shorthand for NormalOrderReducer(max_steps).reduce(term)."""
    return NormalOrderReducer(max_steps).reduce(term)
