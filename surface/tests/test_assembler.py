"""Tests for output ordering, serialization and loading."""

import json
import unittest

from surface.assembler import (
    ExtractionStats,
    assemble_output,
    load_output,
    serialize_output,
    sort_modules,
)
from surface.errors import OutputSerializationError, UnsupportedSchemaError
from surface.models import (
    ExtractedField,
    ExtractedFunction,
    ExtractOutput,
    ModuleRecord,
    PendingMethods,
)


def method(name: str) -> ExtractedFunction:
    return ExtractedFunction(name=name, type_params=[], params=[], return_type="()")


class TestSortModules(unittest.TestCase):

    def test_root_first_then_path_then_file(self):
        """Test that modules sort by path with the root first, then by file."""
        modules = [
            ModuleRecord(file="/c/src/b.rs", parts=["b"]),
            ModuleRecord(file="/c/src/a/z.rs", parts=["a", "z"]),
            ModuleRecord(file="/c/src/lib.rs", parts=[]),
            ModuleRecord(file="/c/src/a.rs", parts=["a"]),
            ModuleRecord(file="/c/src/a2.rs", parts=["a"]),
        ]
        ordered = sort_modules(modules)
        self.assertEqual(
            [(m.path_key, m.file) for m in ordered],
            [
                ("", "/c/src/lib.rs"),
                ("a", "/c/src/a.rs"),
                ("a", "/c/src/a2.rs"),
                ("a::z", "/c/src/a/z.rs"),
                ("b", "/c/src/b.rs"),
            ],
        )

    def test_pending_methods_sorted_stably_by_target(self):
        """Test that pending groups sort by target and keep source order on ties."""
        module = ModuleRecord(file="lib.rs", parts=[])
        module.pending_methods = [
            PendingMethods("Zeta", [method("z")]),
            PendingMethods("Alpha", [method("first")]),
            PendingMethods("Alpha", [method("second")]),
        ]
        sort_modules([module])
        self.assertEqual(
            [(p.target, p.methods[0].name) for p in module.pending_methods],
            [("Alpha", "first"), ("Alpha", "second"), ("Zeta", "z")],
        )


class TestSerialization(unittest.TestCase):

    def _output(self) -> ExtractOutput:
        module = ModuleRecord(file="/c/src/lib.rs", parts=[])
        module.consts.append(ExtractedField("GREETING", "&'static str"))
        module.functions.append(
            ExtractedFunction("hello", ["T"], [ExtractedField("name", "T")], "String")
        )
        module.add_issue("struct", "Pair", "Tuple structs are not representable.")
        return assemble_output([module])

    def test_compact_document_shape(self):
        """Test the key order and compact encoding of the document."""
        text = serialize_output(self._output())
        self.assertNotIn("\n", text)
        self.assertTrue(text.startswith('{"schema":1,"modules":['))
        payload = json.loads(text)
        module = payload["modules"][0]
        self.assertEqual(
            list(module),
            [
                "file", "parts", "consts", "enums", "structs", "traits",
                "functions", "pendingMethods", "issues",
            ],
        )
        self.assertEqual(
            module["functions"][0],
            {
                "name": "hello",
                "typeParams": ["T"],
                "params": [{"name": "name", "type": "T"}],
                "returnType": "String",
            },
        )
        self.assertEqual(
            module["issues"][0],
            {
                "file": "/c/src/lib.rs",
                "kind": "struct",
                "snippet": "Pair",
                "reason": "Tuple structs are not representable.",
            },
        )

    def test_non_ascii_is_kept(self):
        """Test that non-ASCII text is written unescaped."""
        module = ModuleRecord(file="/c/src/lib.rs", parts=[])
        module.consts.append(ExtractedField("CAFÉ", "&str"))
        text = serialize_output(assemble_output([module]))
        self.assertIn("CAFÉ", text)

    def test_serialization_failure(self):
        """Test that an unencodable value raises a serialization error."""
        module = ModuleRecord(file="/c/src/lib.rs", parts=[])
        module.consts.append(ExtractedField("BAD", object()))
        with self.assertRaises(OutputSerializationError):
            serialize_output(ExtractOutput(schema=1, modules=[module]))

    def test_load_output(self):
        """Test that a written document loads back to equal models."""
        original = self._output()
        loaded = load_output(serialize_output(original))
        self.assertEqual(loaded, original)

    def test_load_rejects_other_schema(self):
        """Test that unknown or missing schema tags are rejected."""
        with self.assertRaises(UnsupportedSchemaError):
            load_output('{"schema":2,"modules":[]}')
        with self.assertRaises(UnsupportedSchemaError):
            load_output("[]")

    def test_load_rejects_malformed_module(self):
        """Test that a module missing keys is rejected."""
        with self.assertRaises(ValueError):
            load_output('{"schema":1,"modules":[{"file":"lib.rs"}]}')


class TestExtractionStats(unittest.TestCase):

    def test_counts(self):
        """Test per-kind totals across modules."""
        root = ModuleRecord(file="/c/src/lib.rs", parts=[])
        root.functions.append(method("a"))
        root.add_issue("param", "(a, b)", "reason")
        inline = ModuleRecord(file="/c/src/lib.rs", parts=["inner"])
        inline.add_issue("param", "_", "reason")
        inline.add_issue("enum", "V", "reason")

        stats = ExtractionStats.from_modules([root, inline])
        self.assertEqual(stats.modules, 2)
        self.assertEqual(stats.files, 1)
        self.assertEqual(stats.functions, 1)
        self.assertEqual(stats.issues, 3)
        self.assertEqual(stats.to_dict()["issues_by_kind"], {"enum": 1, "param": 2})
        self.assertIn("modules=2", str(stats))


if __name__ == "__main__":
    unittest.main()
