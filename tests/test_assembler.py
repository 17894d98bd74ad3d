"""Tests for document assembly and JSON output."""

import json

import pytest

from moveexport.errors import SerializationError
from moveexport.export.assembler import (
    assemble,
    build_document,
    build_full_document,
    build_summary,
)
from moveexport.export.schema import (
    Document,
    ExportFormat,
    ExpNode,
    FullFunctionRecord,
    FullModuleRecord,
)
from moveexport.export.serializer import document_to_dict, serialize_document
from moveexport.model.dump import load_env


class TestBasicDocument:
    def test_modules_in_declaration_order(self, basic_coin_env):
        doc = build_document(basic_coin_env)
        assert [m.name for m in doc.modules] == ["BasicCoin", "Vault"]
        assert all(m.address == "0x1" for m in doc.modules)

    def test_counts_and_order_match_source(self, basic_coin_env):
        doc = build_document(basic_coin_env)
        for module, record in zip(basic_coin_env.get_modules(), doc.modules):
            assert len(record.structs) == module.struct_count
            assert len(record.functions) == module.function_count
        vault = doc.modules[1]
        assert [s.name for s in vault.structs] == ["Vault", "Shape", "GhostCounter"]
        assert [f.name for f in vault.functions] == ["deposit", "balance_of", "check"]

    def test_example_scenario(self, basic_coin_env):
        data = json.loads(serialize_document(build_document(basic_coin_env)))
        coin = data["modules"][0]
        assert coin["is_script"] is False
        assert len(coin["structs"][0]["fields"]) == 2
        assert [f["offset"] for f in coin["structs"][0]["fields"]] == [0, 1]
        assert coin["functions"][0]["is_entry"] is True
        assert len(coin["functions"][0]["parameters"]) == 1
        assert coin["functions"][0]["results"] == []

    def test_basic_keys(self, basic_coin_env):
        data = document_to_dict(build_document(basic_coin_env))
        module = data["modules"][0]
        assert set(module) == {"name", "address", "is_script", "structs", "functions"}
        assert set(module["structs"][0]) == {
            "name", "abilities", "type_params", "fields", "is_native", "is_ghost_memory",
        }
        assert set(module["functions"][0]) == {
            "name", "visibility", "kind", "type_params", "parameters", "results",
            "is_native", "is_intrinsic", "is_entry",
        }
        assert set(module["structs"][0]["fields"][0]) == {"name", "ty", "offset", "variant"}


class TestFullDocument:
    def test_full_module_shape(self, basic_coin_env):
        data = document_to_dict(build_full_document(basic_coin_env))
        module = data["modules"][0]
        assert module["name"] == "0x1::BasicCoin"
        assert set(module) == {"name", "structs", "functions", "attrs"}
        assert module["attrs"] == [{"name": "test_only", "value": "Apply(test_only, [])"}]
        func = module["functions"][0]
        assert set(func) == {"name", "params", "ret", "attrs", "body"}
        assert set(func["body"]) == {"kind", "value", "children"}

    def test_body_tree_is_nested_json(self, basic_coin_env):
        data = json.loads(serialize_document(build_full_document(basic_coin_env)))
        deposit = data["modules"][1]["functions"][0]
        assert deposit["body"]["kind"] == "Call::MoveFunction"
        assert deposit["body"]["value"] == "0x1::vector::push_back"
        borrow = deposit["body"]["children"][0]
        assert borrow == {
            "kind": "Call::Borrow",
            "value": "Mutable",
            "children": [
                {
                    "kind": "Call::Select",
                    "value": "Vault.items",
                    "children": [{"kind": "LocalVar", "value": "vault", "children": []}],
                }
            ],
        }


class TestSummary:
    def test_summary_counts(self, basic_coin_env):
        summary = build_summary(basic_coin_env)
        assert summary.modules == ["BasicCoin", "Vault"]
        assert summary.stats.structs == 4
        assert summary.stats.functions == 4

    def test_summary_names_omit_address(self):
        env = load_env({"modules": [{"address": "0xcafe", "name": "M"}]})
        assert build_summary(env).modules == ["M"]

    def test_summary_json(self, basic_coin_env):
        data = json.loads(serialize_document(build_summary(basic_coin_env)))
        assert data == {
            "modules": ["BasicCoin", "Vault"],
            "stats": {"functions": 4, "structs": 4},
        }


class TestSerializer:
    @pytest.mark.parametrize("fmt", list(ExportFormat))
    def test_deterministic_output(self, basic_coin_dump, fmt):
        json1 = serialize_document(assemble(load_env(basic_coin_dump), fmt))
        json2 = serialize_document(assemble(load_env(basic_coin_dump), fmt))
        assert json1 == json2

    def test_pretty_printed_sorted_keys(self, basic_coin_env):
        text = serialize_document(build_summary(basic_coin_env))
        assert text.startswith('{\n  "modules"')
        assert text.index('"functions"') < text.index('"structs"')

    def test_empty_env(self):
        assert json.loads(serialize_document(build_document(load_env({})))) == {"modules": []}

    def test_unencodable_value_raises(self):
        doc = Document(modules=[FullModuleRecord(name=object())])
        with pytest.raises(SerializationError):
            serialize_document(doc)

    def test_deep_tree_encodes(self):
        node = ExpNode("Value", "0")
        for _ in range(200):
            node = ExpNode("Return", None, [node])
        func = FullFunctionRecord(name="f", body=node)
        doc = Document(modules=[FullModuleRecord(name="0x1::M", functions=[func])])

        data = json.loads(serialize_document(doc))
        body = data["modules"][0]["functions"][0]["body"]
        depth = 0
        while body["children"]:
            body = body["children"][0]
            depth += 1
        assert depth == 200
        assert body == {"kind": "Value", "value": "0", "children": []}
