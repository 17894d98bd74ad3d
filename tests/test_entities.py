"""Tests for struct, function and attribute records."""

import pytest

from moveexport.export.entities import (
    UNKNOWN_TAG,
    VISIBILITY_TAGS,
    attrs_to_records,
    full_function_to_record,
    full_struct_to_record,
    function_to_record,
    struct_to_record,
    _tag,
)
from moveexport.model.dump import load_env


def _module(env, name):
    for m in env.get_modules():
        if env.symbol_pool.string(m.name.name) == name:
            return m
    raise KeyError(name)


def _struct(env, module, name):
    m = _module(env, module)
    return next(s for s in m.structs if env.symbol_pool.string(s.name) == name)


def _function(env, module, name):
    m = _module(env, module)
    return next(f for f in m.functions if env.symbol_pool.string(f.name) == name)


class TestStructRecords:
    def test_plain_struct(self, basic_coin_env):
        rec = struct_to_record(_struct(basic_coin_env, "BasicCoin", "Coin"))
        assert rec.name == "Coin"
        assert rec.abilities == ["Store", "Drop"]
        assert rec.type_params == []
        assert [(f.name, f.ty, f.offset) for f in rec.fields] == [
            ("value", "u64", 0),
            ("owner", "address", 1),
        ]
        assert rec.is_native is False
        assert rec.is_ghost_memory is False

    def test_generic_struct_renders_type_params(self, basic_coin_env):
        rec = struct_to_record(_struct(basic_coin_env, "Vault", "Vault"))
        assert rec.type_params == ["T"]
        assert [f.ty for f in rec.fields] == ["vector<T>", "address", "0x1::BasicCoin::Coin"]

    def test_variant_tags_preserved(self, basic_coin_env):
        rec = struct_to_record(_struct(basic_coin_env, "Vault", "Shape"))
        assert [(f.name, f.variant) for f in rec.fields] == [
            ("radius", "Circle"),
            ("width", "Rect"),
            ("height", "Rect"),
        ]

    def test_ghost_memory_flag(self, basic_coin_env):
        rec = struct_to_record(_struct(basic_coin_env, "Vault", "GhostCounter"))
        assert rec.is_ghost_memory is True
        assert rec.fields[0].ty == "num"

    def test_offsets_unique_and_ordered(self, basic_coin_env):
        for m in basic_coin_env.get_modules():
            for s in m.get_structs():
                offsets = [f.offset for f in struct_to_record(s).fields]
                assert len(set(offsets)) == len(offsets)
                assert offsets == sorted(offsets)


class TestFunctionRecords:
    def test_entry_function(self, basic_coin_env):
        rec = function_to_record(_function(basic_coin_env, "BasicCoin", "mint"))
        assert rec.visibility == "Public"
        assert rec.kind == "Regular"
        assert rec.is_entry is True
        assert [(p.name, p.ty) for p in rec.parameters] == [("account", "&signer")]
        assert rec.results == []

    def test_generic_function(self, basic_coin_env):
        rec = function_to_record(_function(basic_coin_env, "Vault", "deposit"))
        assert rec.type_params == ["T"]
        assert [p.ty for p in rec.parameters] == ["&mut Vault<T>", "T"]

    def test_native_tuple_result_is_flattened(self, basic_coin_env):
        rec = function_to_record(_function(basic_coin_env, "Vault", "balance_of"))
        assert rec.visibility == "Friend"
        assert rec.is_native is True
        assert rec.results == ["u64", "bool"]

    def test_inline_kind(self, basic_coin_env):
        rec = function_to_record(_function(basic_coin_env, "Vault", "check"))
        assert rec.kind == "Inline"
        assert rec.results == ["u64"]

    def test_unknown_tag(self):
        assert _tag(VISIBILITY_TAGS, "Protected") == UNKNOWN_TAG

    def test_unknown_tags_from_dump(self):
        env = load_env(
            {
                "modules": [
                    {
                        "address": "0x1",
                        "name": "M",
                        "structs": [{"name": "S", "abilities": ["Key", "Phantom"]}],
                        "functions": [
                            {"name": "f", "visibility": "Package(friend)", "kind": "Entry"}
                        ],
                    }
                ]
            }
        )
        struct = struct_to_record(env.modules[0].structs[0])
        func = function_to_record(env.modules[0].functions[0])
        assert struct.abilities == ["Key", UNKNOWN_TAG]
        assert (func.visibility, func.kind) == (UNKNOWN_TAG, UNKNOWN_TAG)


class TestFullRecords:
    def test_struct_fields_as_strings(self, basic_coin_env):
        rec = full_struct_to_record(_struct(basic_coin_env, "BasicCoin", "Coin"))
        assert rec.fields == ["value: u64", "owner: address"]
        assert rec.attrs == []

    def test_struct_attribute(self, basic_coin_env):
        rec = full_struct_to_record(_struct(basic_coin_env, "Vault", "Vault"))
        assert len(rec.attrs) == 1
        assert rec.attrs[0].name == "resource_group_member"
        assert rec.attrs[0].value == (
            "Apply(resource_group_member, [Assign(group, Name(0x1::object::ObjectGroup))])"
        )

    def test_function_with_body(self, basic_coin_env):
        rec = full_function_to_record(_function(basic_coin_env, "BasicCoin", "mint"))
        assert rec.params == ["account: &signer"]
        assert rec.ret == "()"
        assert rec.body.kind == "Call::MoveTo"
        assert rec.body.value == "Coin"
        pack = rec.body.children[1]
        assert pack.kind == "Call::Pack"
        assert pack.children[1].value == "0x1::signer::address_of"

    def test_native_function_has_no_body(self, basic_coin_env):
        rec = full_function_to_record(_function(basic_coin_env, "Vault", "balance_of"))
        assert rec.ret == "(u64, bool)"
        assert rec.body is None

    def test_function_attribute(self, basic_coin_env):
        rec = full_function_to_record(_function(basic_coin_env, "Vault", "check"))
        assert [a.value for a in rec.attrs] == [
            "Apply(expected_failure, [Assign(abort_code, Value(5))])"
        ]
        assert rec.body.kind == "Let"

    @pytest.mark.parametrize("module,expected", [("BasicCoin", ["test_only"]), ("Vault", [])])
    def test_module_attributes(self, basic_coin_env, module, expected):
        m = _module(basic_coin_env, module)
        assert [a.name for a in attrs_to_records(m.attributes, m.symbol_pool)] == expected
