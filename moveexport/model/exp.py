"""Expression trees of function bodies.

Each class here is one arm of the frontend's expression vocabulary. The set is
open-ended: newer frontends add node kinds, which the dump decoder keeps as
`OpaqueExp` instead of rejecting them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from moveexport.model.symbols import Symbol
from moveexport.model.types import Address, QualifiedName


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AddressValue:
    addr: Address


@dataclass(frozen=True)
class NumberValue:
    value: int


@dataclass(frozen=True)
class BoolValue:
    value: bool


@dataclass(frozen=True)
class ByteArrayValue:
    data: bytes


@dataclass(frozen=True)
class AddressArrayValue:
    addrs: tuple[Address, ...]


@dataclass(frozen=True)
class VectorValue:
    items: tuple[Value, ...]


@dataclass(frozen=True)
class TupleValue:
    items: tuple[Value, ...]


Value = Union[
    AddressValue,
    NumberValue,
    BoolValue,
    ByteArrayValue,
    AddressArrayValue,
    VectorValue,
    TupleValue,
]


# ---------------------------------------------------------------------------
# Patterns (left-hand sides of let and assignment)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VarPattern:
    name: Symbol


@dataclass(frozen=True)
class WildcardPattern:
    pass


@dataclass(frozen=True)
class TuplePattern:
    items: tuple[Pattern, ...]


@dataclass(frozen=True)
class StructPattern:
    target: QualifiedName
    items: tuple[Pattern, ...]
    variant: Optional[Symbol] = None


Pattern = Union[VarPattern, WildcardPattern, TuplePattern, StructPattern]


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


class OperationKind(str, Enum):
    """Operators a `CallExp` can apply."""

    MOVE_FUNCTION = "MoveFunction"
    PACK = "Pack"
    TUPLE = "Tuple"
    SELECT = "Select"
    SELECT_VARIANTS = "SelectVariants"
    TEST_VARIANTS = "TestVariants"
    BORROW = "Borrow"
    BORROW_GLOBAL = "BorrowGlobal"
    MOVE_TO = "MoveTo"
    MOVE_FROM = "MoveFrom"
    EXISTS = "Exists"
    COPY = "Copy"
    MOVE = "Move"
    FREEZE = "Freeze"
    VECTOR = "Vector"
    ABORT = "Abort"
    DEREF = "Deref"
    CAST = "Cast"
    NOT = "Not"
    ADD = "Add"
    SUB = "Sub"
    MUL = "Mul"
    DIV = "Div"
    MOD = "Mod"
    BIT_AND = "BitAnd"
    BIT_OR = "BitOr"
    XOR = "Xor"
    SHL = "Shl"
    SHR = "Shr"
    AND = "And"
    OR = "Or"
    EQ = "Eq"
    NEQ = "Neq"
    LT = "Lt"
    GT = "Gt"
    LE = "Le"
    GE = "Ge"
    NO_OP = "NoOp"
    UNKNOWN = "Unknown"

    @classmethod
    def _missing_(cls, value: object) -> OperationKind:
        return cls.UNKNOWN


class BorrowKind(str, Enum):
    IMMUTABLE = "Immutable"
    MUTABLE = "Mutable"


@dataclass(frozen=True)
class Operation:
    """An operator plus whatever it is applied to (function, struct, field)."""

    kind: OperationKind
    target: Optional[QualifiedName] = None
    field: Optional[Symbol] = None
    borrow: Optional[BorrowKind] = None


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValueExp:
    value: Value


@dataclass(frozen=True)
class LocalVarExp:
    name: Symbol


@dataclass(frozen=True)
class TemporaryExp:
    index: int


@dataclass(frozen=True)
class CallExp:
    oper: Operation
    args: tuple[Exp, ...] = ()


@dataclass(frozen=True)
class InvokeExp:
    callee: Exp
    args: tuple[Exp, ...] = ()


@dataclass(frozen=True)
class LambdaExp:
    pattern: Pattern
    body: Exp


@dataclass(frozen=True)
class QuantExp:
    kind: str
    ranges: tuple[tuple[Pattern, Exp], ...]
    condition: Optional[Exp]
    body: Exp


@dataclass(frozen=True)
class BlockExp:
    """`let pattern = binding; body` or a bare scope when `binding` is None."""

    pattern: Pattern
    binding: Optional[Exp]
    body: Exp


@dataclass(frozen=True)
class IfElseExp:
    cond: Exp
    then: Exp
    otherwise: Exp


@dataclass(frozen=True)
class MatchArm:
    pattern: Pattern
    condition: Optional[Exp]
    body: Exp


@dataclass(frozen=True)
class MatchExp:
    discriminator: Exp
    arms: tuple[MatchArm, ...]


@dataclass(frozen=True)
class ReturnExp:
    value: Exp


@dataclass(frozen=True)
class SequenceExp:
    items: tuple[Exp, ...] = ()


@dataclass(frozen=True)
class LoopExp:
    body: Exp


@dataclass(frozen=True)
class LoopContExp:
    """`continue` (is_continue=True) or `break` out of `nest` enclosing loops."""

    nest: int
    is_continue: bool


@dataclass(frozen=True)
class AssignExp:
    pattern: Pattern
    rhs: Exp


@dataclass(frozen=True)
class MutateExp:
    lhs: Exp
    rhs: Exp


@dataclass(frozen=True)
class SpecBlockExp:
    """Inline specification block; its contents are not part of the model view."""

    text: str = ""


@dataclass(frozen=True)
class InvalidExp:
    pass


@dataclass(frozen=True)
class OpaqueExp:
    """A node kind the decoder does not know, kept with its raw payload."""

    kind: str
    payload: Any = field(default=None, compare=False)


Exp = Union[
    ValueExp,
    LocalVarExp,
    TemporaryExp,
    CallExp,
    InvokeExp,
    LambdaExp,
    QuantExp,
    BlockExp,
    IfElseExp,
    MatchExp,
    ReturnExp,
    SequenceExp,
    LoopExp,
    LoopContExp,
    AssignExp,
    MutateExp,
    SpecBlockExp,
    InvalidExp,
    OpaqueExp,
]
