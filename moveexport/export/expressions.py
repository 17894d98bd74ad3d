"""Encode function bodies as generic `{kind, value, children}` trees.

The encoder is total: any node it does not know, including node kinds added by
newer frontends (`OpaqueExp`) and objects that are not model expressions at
all, becomes an `Unhandled::<repr>` leaf. Traversal never stops early.

Children keep operand order: call arguments in call order, `IfElse` as
condition/then/else, `Let` as binding/body, `Mutate` as lhs/rhs.

Recursion depth equals the nesting depth of the source; model trees are
acyclic by construction, so no cycle check is done.
"""

from __future__ import annotations

from typing import Any, Optional

from moveexport.export.schema import ExpNode
from moveexport.model.exp import (
    AssignExp,
    BlockExp,
    CallExp,
    IfElseExp,
    InvokeExp,
    LocalVarExp,
    LoopContExp,
    LoopExp,
    MutateExp,
    Operation,
    OperationKind,
    ReturnExp,
    SequenceExp,
    TemporaryExp,
    ValueExp,
)
from moveexport.resolver import (
    DisplayContext,
    display_pattern,
    display_qualified,
    display_symbol,
    display_value,
)

UNHANDLED = "Unhandled"

OPERATION_TAGS = {
    kind: kind.value for kind in OperationKind if kind is not OperationKind.UNKNOWN
}


def operation_label(oper: Operation) -> str:
    return "Call::" + OPERATION_TAGS.get(oper.kind, OperationKind.UNKNOWN.value)


def operation_value(oper: Operation, ctx: DisplayContext) -> Optional[str]:
    """What the operator applies to: `0x1::coin::mint`, `Coin.value`, `Mutable`."""
    parts = []
    if oper.target is not None:
        parts.append(display_qualified(oper.target, ctx))
    if oper.field is not None:
        parts.append(display_symbol(oper.field, ctx.pool))
    text = ".".join(parts)
    if oper.borrow is not None:
        text = f"{text} {oper.borrow.value}".strip()
    return text or None


def exp_to_node(exp: Any, ctx: DisplayContext) -> ExpNode:
    """Convert one expression (and everything below it) into an `ExpNode`.

    Args:
        exp: Expression from a function body.
        ctx: Display context of the enclosing function.
    """
    if isinstance(exp, ValueExp):
        return ExpNode("Value", display_value(exp.value, ctx.pool))
    if isinstance(exp, LocalVarExp):
        return ExpNode("LocalVar", display_symbol(exp.name, ctx.pool))
    if isinstance(exp, TemporaryExp):
        return ExpNode("Temporary", str(exp.index))
    if isinstance(exp, CallExp):
        return ExpNode(
            operation_label(exp.oper),
            operation_value(exp.oper, ctx),
            [exp_to_node(a, ctx) for a in exp.args],
        )
    if isinstance(exp, InvokeExp):
        return ExpNode(
            "Invoke",
            None,
            [exp_to_node(exp.callee, ctx)] + [exp_to_node(a, ctx) for a in exp.args],
        )
    if isinstance(exp, BlockExp):
        pattern = display_pattern(exp.pattern, ctx)
        if exp.binding is None:
            return ExpNode("Block", pattern, [exp_to_node(exp.body, ctx)])
        return ExpNode(
            "Let", pattern, [exp_to_node(exp.binding, ctx), exp_to_node(exp.body, ctx)]
        )
    if isinstance(exp, LoopExp):
        return ExpNode("Loop", None, [exp_to_node(exp.body, ctx)])
    if isinstance(exp, LoopContExp):
        word = "continue" if exp.is_continue else "break"
        return ExpNode("LoopCont", f"{word} {exp.nest}" if exp.nest else word)
    if isinstance(exp, AssignExp):
        return ExpNode(
            "Assign", display_pattern(exp.pattern, ctx), [exp_to_node(exp.rhs, ctx)]
        )
    if isinstance(exp, MutateExp):
        return ExpNode(
            "Mutate", None, [exp_to_node(exp.lhs, ctx), exp_to_node(exp.rhs, ctx)]
        )
    if isinstance(exp, ReturnExp):
        return ExpNode("Return", None, [exp_to_node(exp.value, ctx)])
    if isinstance(exp, IfElseExp):
        return ExpNode(
            "IfElse",
            None,
            [
                exp_to_node(exp.cond, ctx),
                exp_to_node(exp.then, ctx),
                exp_to_node(exp.otherwise, ctx),
            ],
        )
    if isinstance(exp, SequenceExp):
        return ExpNode("Sequence", None, [exp_to_node(e, ctx) for e in exp.items])
    return ExpNode(f"{UNHANDLED}::{_describe(exp)}")


def _describe(exp: Any) -> str:
    try:
        return repr(exp)
    except Exception:  # foreign objects may have a broken __repr__
        return f"<{type(exp).__name__}>"
