"""Capture-avoiding substitution.

substitute(M, x, N) computes M[x := N]: every free occurrence of x in M is replaced with N. A binder in M is renamed
(alpha-converted) whenever it would otherwise capture a free variable of N.

Source: https://plato.stanford.edu/entries/lambda-calculus/#Con
"""

from itertools import count
from string import digits

from lambdacore.term import Abs, App, Var, is_term

_VISIT, _BUILD_APP, _BUILD_ABS = "visit", "app", "abs"


def fresh_name(name, avoid):
    """Returns the first of name1, name2, name3, ... that is not in avoid. Trailing digits of name are dropped first,
    so renaming y1 gives y2 rather than y11. Depends on nothing but its arguments.
    """
    stem = name.rstrip(digits)
    for suffix in count(1):
        candidate = f"{stem}{suffix}"
        if candidate not in avoid:
            return candidate


def substitute(term, name, value):
    """Returns term with every free occurrence of name replaced by value. Unchanged subterms are shared, not copied."""
    if not is_term(term):
        raise TypeError(f"expected a lambda term, got {type(term).__name__}")
    return _substitute(term, {name: value})


def _substitute(term, env):
    """Simultaneously replaces every free occurrence of each name in env with env[name]. A renamed binder is added to
    env as a variable, so one pass over the tree does both the renaming and the substitution. Uses an explicit stack
    of (action, node, arg) entries instead of recursion.
    """
    results = []
    todo = [(_VISIT, term, env)]
    while todo:
        action, node, arg = todo.pop()

        if action == _BUILD_APP:
            new_arg, new_func = results.pop(), results.pop()
            if new_func is node.func and new_arg is node.arg:
                results.append(node)
            else:
                results.append(App(new_func, new_arg))

        elif action == _BUILD_ABS:
            results.append(Abs(arg, results.pop()))

        elif isinstance(node, Var):
            results.append(arg.get(node.name, node))

        elif isinstance(node, App):
            todo.append((_BUILD_APP, node, None))
            todo.append((_VISIT, node.arg, arg))
            todo.append((_VISIT, node.func, arg))

        else:
            env = {key: val for key, val in arg.items() if key != node.bound and key in node.body.free_vars}
            if not env:
                results.append(node)  # every name is shadowed, or has nothing to replace
                continue

            bound = node.bound
            captured = frozenset().union(*(val.free_vars for val in env.values()))
            if bound in captured:
                # bound would capture a free variable of a replacement: rename it first
                bound = fresh_name(bound, node.body.free_vars | captured | set(env))
                env[node.bound] = Var(bound)

            todo.append((_BUILD_ABS, node, bound))
            todo.append((_VISIT, node.body, env))

    return results.pop()
