"""Decode a frontend model dump into a `GlobalEnv`.

The dump is plain JSON-compatible data. Names arrive as strings and are
interned into a fresh `SymbolPool`. Expected shape:

```yaml
diagnostics:
  - {severity: error, message: "undeclared type `Foo`", location: "main.move:3:5"}
modules:
  - address: "0x1"
    name: BasicCoin
    is_script: false
    attributes: [{name: test_only}]
    structs:
      - name: Coin
        abilities: [Store]
        type_params: [{name: T, abilities: [Drop], is_phantom: true}]
        fields: [{name: value, type: u64}]
    functions:
      - name: mint
        visibility: Public
        kind: Regular
        is_entry: true
        params: [{name: account, type: {ref: signer}}]
        result: {tuple: []}
        body: {kind: Call, op: MoveTo, target: "0x1::BasicCoin::Coin", args: [...]}
```

Types are either a primitive name (`u64`), `error`, or one of the mappings
`{vector: T}`, `{ref: T, mut: bool}`, `{tuple: [T]}`, `{param: index}`,
`{struct: "0x1::m::S", args: [T]}`, `{fun: [T], result: T}`.

Unknown expression kinds become `OpaqueExp`. Unknown operator, ability,
visibility and function kind names decode to the enum's `UNKNOWN` member, and an
unknown severity is read as a warning. A field's `offset` is kept when present.
Anything else that does not fit raises `ValueError`.
"""

from __future__ import annotations

from typing import Any, Optional

from moveexport.model.env import (
    ApplyAttribute,
    AssignAttribute,
    Attribute,
    AttributeValue,
    Diagnostic,
    FunctionKind,
    GlobalEnv,
    ModuleEnv,
    NameAttributeValue,
    Parameter,
    Severity,
    ValueAttributeValue,
    Visibility,
)
from moveexport.model.exp import (
    AddressArrayValue,
    AddressValue,
    AssignExp,
    BlockExp,
    BoolValue,
    BorrowKind,
    ByteArrayValue,
    CallExp,
    Exp,
    IfElseExp,
    InvalidExp,
    InvokeExp,
    LambdaExp,
    LocalVarExp,
    LoopContExp,
    LoopExp,
    MatchArm,
    MatchExp,
    MutateExp,
    NumberValue,
    OpaqueExp,
    Operation,
    OperationKind,
    Pattern,
    QuantExp,
    ReturnExp,
    SequenceExp,
    SpecBlockExp,
    StructPattern,
    TemporaryExp,
    TuplePattern,
    TupleValue,
    Value,
    ValueExp,
    VarPattern,
    VectorValue,
    WildcardPattern,
)
from moveexport.model.symbols import SymbolPool
from moveexport.model.types import (
    UNIT,
    Ability,
    Address,
    ErrorType,
    FunctionType,
    ModuleName,
    NumericalAddress,
    QualifiedName,
    ReferenceType,
    StructType,
    SymbolicAddress,
    TupleType,
    Type,
    TypeParameter,
    TypeParameterType,
    VectorType,
    primitive,
)


def load_env(data: dict[str, Any]) -> GlobalEnv:
    """Build a `GlobalEnv` from a parsed model dump.

    Args:
        data: Parsed dump (see module docstring for the shape).

    Returns:
        The decoded environment, modules in dump order.

    Raises:
        ValueError: If the dump does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Model dump must be a mapping, got {type(data).__name__}")
    try:
        return _Decoder().decode(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Malformed model dump: {e!r}") from e


class _Decoder:
    def __init__(self) -> None:
        self.env = GlobalEnv(symbol_pool=SymbolPool())

    @property
    def pool(self) -> SymbolPool:
        return self.env.symbol_pool

    def decode(self, data: dict[str, Any]) -> GlobalEnv:
        for d in data.get("diagnostics", []):
            self.env.diagnostics.append(
                Diagnostic(
                    severity=Severity(d.get("severity", "error")),
                    message=d["message"],
                    location=d.get("location", ""),
                )
            )
        for md in data.get("modules", []):
            self._module(md)
        return self.env

    # -- entities ------------------------------------------------------------

    def _module(self, md: dict[str, Any]) -> ModuleEnv:
        name = ModuleName(self._address(md["address"]), self.pool.make(md["name"]))
        module = self.env.add_module(name, is_script=md.get("is_script", False))
        module.attributes.extend(self._attributes(md))

        for sd in md.get("structs", []):
            struct = module.add_struct(
                self.pool.make(sd["name"]),
                abilities=[Ability(a) for a in sd.get("abilities", [])],
                type_params=self._type_params(sd),
                attributes=self._attributes(sd),
                is_native=sd.get("is_native", False),
                is_ghost_memory=sd.get("is_ghost_memory", False),
            )
            for fd in sd.get("fields", []):
                variant = fd.get("variant")
                struct.add_field(
                    self.pool.make(fd["name"]),
                    self._type(fd["type"]),
                    variant=self.pool.make(variant) if variant else None,
                    offset=int(fd["offset"]) if fd.get("offset") is not None else None,
                )

        for fd in md.get("functions", []):
            body = fd.get("body")
            module.add_function(
                self.pool.make(fd["name"]),
                visibility=Visibility(fd.get("visibility", "Private")),
                kind=FunctionKind(fd.get("kind", "Regular")),
                type_params=self._type_params(fd),
                params=[
                    Parameter(self.pool.make(p["name"]), self._type(p["type"]))
                    for p in fd.get("params", [])
                ],
                result_type=self._type(fd["result"]) if "result" in fd else UNIT,
                attributes=self._attributes(fd),
                is_native=fd.get("is_native", False),
                is_intrinsic=fd.get("is_intrinsic", False),
                is_entry=fd.get("is_entry", False),
                body=self._exp(body) if body is not None else None,
            )
        return module

    def _type_params(self, d: dict[str, Any]) -> list[TypeParameter]:
        params = []
        for tp in d.get("type_params", []):
            if isinstance(tp, str):
                params.append(TypeParameter(self.pool.make(tp)))
            else:
                params.append(
                    TypeParameter(
                        self.pool.make(tp["name"]),
                        abilities=tuple(Ability(a) for a in tp.get("abilities", [])),
                        is_phantom=tp.get("is_phantom", False),
                    )
                )
        return params

    def _attributes(self, d: dict[str, Any]) -> list[Attribute]:
        return [self._attribute(a) for a in d.get("attributes", [])]

    def _attribute(self, a: dict[str, Any]) -> Attribute:
        name = self.pool.make(a["name"])
        if "value" in a:
            return AssignAttribute(name, self._attribute_value(a["value"]))
        return ApplyAttribute(name, tuple(self._attribute(x) for x in a.get("args", [])))

    def _attribute_value(self, v: dict[str, Any]) -> AttributeValue:
        if "value" in v:
            return ValueAttributeValue(self._value(v["value"]))
        module: Optional[ModuleName] = None
        parts = v["name"].split("::")
        if len(parts) >= 3:
            module = ModuleName(self._address(parts[0]), self.pool.make(parts[1]))
        return NameAttributeValue(module, self.pool.make(parts[-1]))

    # -- names, types, values ------------------------------------------------

    def _address(self, text: str) -> Address:
        text = str(text)
        if text.startswith("0x"):
            return NumericalAddress(int(text, 16))
        if text.isdigit():
            return NumericalAddress(int(text))
        return SymbolicAddress(self.pool.make(text))

    def _qualified(self, text: str) -> QualifiedName:
        parts = text.split("::")
        if len(parts) != 3:
            raise ValueError(f"Expected `address::module::name`, got {text!r}")
        addr, module, name = parts
        return QualifiedName(
            ModuleName(self._address(addr), self.pool.make(module)),
            self.pool.make(name),
        )

    def _type(self, t: Any) -> Type:
        if isinstance(t, str):
            if t == "error":
                return ErrorType()
            prim = primitive(t)
            if prim is None:
                raise ValueError(f"Unknown primitive type {t!r}")
            return prim
        if "vector" in t:
            return VectorType(self._type(t["vector"]))
        if "ref" in t:
            return ReferenceType(t.get("mut", False), self._type(t["ref"]))
        if "tuple" in t:
            return TupleType(tuple(self._type(x) for x in t["tuple"]))
        if "param" in t:
            return TypeParameterType(int(t["param"]))
        if "struct" in t:
            return StructType(
                self._qualified(t["struct"]),
                tuple(self._type(x) for x in t.get("args", [])),
            )
        if "fun" in t:
            return FunctionType(
                tuple(self._type(x) for x in t["fun"]),
                self._type(t.get("result", {"tuple": []})),
            )
        raise ValueError(f"Unknown type encoding {t!r}")

    def _value(self, v: dict[str, Any]) -> Value:
        if "number" in v:
            return NumberValue(int(v["number"]))
        if "bool" in v:
            return BoolValue(bool(v["bool"]))
        if "address" in v:
            return AddressValue(self._address(v["address"]))
        if "bytes" in v:
            return ByteArrayValue(bytes.fromhex(v["bytes"]))
        if "addresses" in v:
            return AddressArrayValue(tuple(self._address(a) for a in v["addresses"]))
        if "vector" in v:
            return VectorValue(tuple(self._value(x) for x in v["vector"]))
        if "tuple" in v:
            return TupleValue(tuple(self._value(x) for x in v["tuple"]))
        raise ValueError(f"Unknown value encoding {v!r}")

    def _pattern(self, p: Any) -> Pattern:
        if p == "_":
            return WildcardPattern()
        if "var" in p:
            return VarPattern(self.pool.make(p["var"]))
        if "tuple" in p:
            return TuplePattern(tuple(self._pattern(x) for x in p["tuple"]))
        if "struct" in p:
            variant = p.get("variant")
            return StructPattern(
                self._qualified(p["struct"]),
                tuple(self._pattern(x) for x in p.get("items", [])),
                variant=self.pool.make(variant) if variant else None,
            )
        raise ValueError(f"Unknown pattern encoding {p!r}")

    # -- expressions ---------------------------------------------------------

    def _exps(self, items: list[Any]) -> tuple[Exp, ...]:
        return tuple(self._exp(x) for x in items)

    def _opt_exp(self, e: Any) -> Optional[Exp]:
        return self._exp(e) if e is not None else None

    def _exp(self, e: dict[str, Any]) -> Exp:
        kind = e["kind"]
        if kind == "Value":
            return ValueExp(self._value(e["value"]))
        if kind == "LocalVar":
            return LocalVarExp(self.pool.make(e["name"]))
        if kind == "Temporary":
            return TemporaryExp(int(e["index"]))
        if kind == "Call":
            return CallExp(self._operation(e), self._exps(e.get("args", [])))
        if kind == "Invoke":
            return InvokeExp(self._exp(e["callee"]), self._exps(e.get("args", [])))
        if kind == "Lambda":
            return LambdaExp(self._pattern(e["pattern"]), self._exp(e["body"]))
        if kind == "Quant":
            return QuantExp(
                e.get("quant", "Forall"),
                tuple((self._pattern(p), self._exp(r)) for p, r in e.get("ranges", [])),
                self._opt_exp(e.get("condition")),
                self._exp(e["body"]),
            )
        if kind == "Block":
            return BlockExp(
                self._pattern(e.get("pattern", {"tuple": []})),
                self._opt_exp(e.get("binding")),
                self._exp(e["body"]),
            )
        if kind == "IfElse":
            return IfElseExp(self._exp(e["cond"]), self._exp(e["then"]), self._exp(e["else"]))
        if kind == "Match":
            return MatchExp(
                self._exp(e["discriminator"]),
                tuple(
                    MatchArm(
                        self._pattern(a["pattern"]),
                        self._opt_exp(a.get("condition")),
                        self._exp(a["body"]),
                    )
                    for a in e.get("arms", [])
                ),
            )
        if kind == "Return":
            return ReturnExp(self._exp(e["value"]))
        if kind == "Sequence":
            return SequenceExp(self._exps(e.get("items", [])))
        if kind == "Loop":
            return LoopExp(self._exp(e["body"]))
        if kind == "LoopCont":
            return LoopContExp(int(e.get("nest", 0)), bool(e.get("continue", False)))
        if kind == "Assign":
            return AssignExp(self._pattern(e["pattern"]), self._exp(e["rhs"]))
        if kind == "Mutate":
            return MutateExp(self._exp(e["lhs"]), self._exp(e["rhs"]))
        if kind == "SpecBlock":
            return SpecBlockExp(e.get("text", ""))
        if kind == "Invalid":
            return InvalidExp()
        return OpaqueExp(kind, payload={k: v for k, v in e.items() if k != "kind"})

    def _operation(self, e: dict[str, Any]) -> Operation:
        target = e.get("target")
        field_name = e.get("field")
        borrow = e.get("borrow")
        return Operation(
            kind=OperationKind(e["op"]),
            target=self._qualified(target) if target else None,
            field=self.pool.make(field_name) if field_name else None,
            borrow=BorrowKind(borrow) if borrow else None,
        )
