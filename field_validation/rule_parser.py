"""
Rule Parser - turns a field's rule declaration into rule expressions.

A declaration is a pipe-delimited string of expressions, evaluated left to
right:

    "required|string|min:3|in:red,green,blue"

Each expression is either a bare rule name ("required") or "name:param".
Only the first colon separates name from parameter, so "equal:a:b" has the
parameter "a:b". An empty parameter ("min:") counts as no parameter, and a
leading colon (":foo") is part of the name rather than a separator.

A list or tuple of expressions is accepted as an already-split declaration.
"""

from typing import List, NamedTuple, Optional, Sequence, Union

RuleDeclaration = Union[str, Sequence[str]]


class RuleExpression(NamedTuple):
    """One parsed rule expression."""

    name: str
    param: Optional[str] = None


def parse_expression(expression: str) -> RuleExpression:
    """
    Split a single expression on its first colon.

    Args:
        expression: e.g. "required" or "min:3"

    Returns:
        RuleExpression with param None when no parameter was given
    """
    if expression.startswith(":"):
        return RuleExpression(expression)

    name, sep, param = expression.partition(":")
    if not sep or param == "":
        return RuleExpression(name)
    return RuleExpression(name, param)


def parse_rules(declaration: RuleDeclaration) -> List[RuleExpression]:
    """
    Parse a field's rule declaration, preserving declaration order.

    Args:
        declaration: Pipe-delimited rule string, or a list/tuple of expressions

    Returns:
        Ordered list of RuleExpression

    Raises:
        TypeError: If declaration is neither a string nor a list/tuple of strings
    """
    if isinstance(declaration, str):
        expressions = declaration.split("|")
    elif isinstance(declaration, (list, tuple)):
        expressions = list(declaration)
    else:
        raise TypeError(
            f"Rule declaration must be a string or a list of strings, "
            f"got {type(declaration).__name__}"
        )

    parsed = []
    for expression in expressions:
        if not isinstance(expression, str):
            raise TypeError(
                f"Rule expression must be a string, got {type(expression).__name__}"
            )
        parsed.append(parse_expression(expression))
    return parsed
