"""Tests for canonical type and snippet rendering."""

import unittest

from surface.parser import parse_bytes
from surface.render import is_public, join_tokens, render_return_type, render_type


def param_type(type_source: str) -> str:
    """Render the type of the single parameter of ``fn f(x: <type_source>)``."""
    tree = parse_bytes(f"fn f(x: {type_source}) {{}}".encode("utf-8"))
    function = tree.root_node.named_children[0]
    parameter = function.child_by_field_name("parameters").named_children[0]
    return render_type(parameter.child_by_field_name("type"))


class TestRenderType(unittest.TestCase):
    """Types render the same regardless of source formatting."""

    def test_generic_path(self):
        """Test generic and scoped path spacing."""
        self.assertEqual(param_type("Vec < i32 >"), "Vec<i32>")
        self.assertEqual(param_type("HashMap<String,Vec<u8>>"), "HashMap<String, Vec<u8>>")
        self.assertEqual(param_type("std :: collections :: HashMap<K, V>"), "std::collections::HashMap<K, V>")

    def test_references(self):
        """Test reference and lifetime spacing."""
        self.assertEqual(param_type("& 'a  mut  Foo"), "&'a mut Foo")
        self.assertEqual(param_type("&str"), "&str")
        self.assertEqual(param_type("&mut [u8]"), "&mut [u8]")
        self.assertEqual(param_type("&'static str"), "&'static str")

    def test_pointers(self):
        """Test raw pointer spacing."""
        self.assertEqual(param_type("*const u8"), "*const u8")
        self.assertEqual(param_type("*mut T"), "*mut T")

    def test_tuples_and_arrays(self):
        """Test tuple, unit and array spacing."""
        self.assertEqual(param_type("( i32 , String )"), "(i32, String)")
        self.assertEqual(param_type("()"), "()")
        self.assertEqual(param_type("[u8;4]"), "[u8; 4]")
        self.assertEqual(param_type("[T]"), "[T]")

    def test_trait_objects_and_impl(self):
        """Test impl Trait, Fn sugar and trait object spacing."""
        self.assertEqual(param_type("impl Fn(i32) -> i32"), "impl Fn(i32) -> i32")
        self.assertEqual(param_type("Box<dyn Error + Send>"), "Box<dyn Error + Send>")
        self.assertEqual(param_type("impl  Iterator<Item = u8>"), "impl Iterator<Item = u8>")

    def test_comments_are_dropped(self):
        """Test that comments inside a type are dropped."""
        self.assertEqual(param_type("Vec</* inner */ i32>"), "Vec<i32>")

    def test_macro_types(self):
        """Test that macro delimiters attach to the bang."""
        self.assertEqual(param_type("vec_t! (u8)"), "vec_t!(u8)")
        self.assertEqual(param_type("arr_t![u8]"), "arr_t![u8]")

    def test_missing_return_type_is_unit(self):
        """Test that an omitted return type renders as the unit type."""
        self.assertEqual(render_return_type(None), "()")
        self.assertEqual(render_type(None), "")


class TestJoinTokens(unittest.TestCase):

    def test_join(self):
        """Test joining raw token lists."""
        self.assertEqual(join_tokens(["Option", "<", "T", ">"]), "Option<T>")
        self.assertEqual(join_tokens(["const", "N", ":", "usize"]), "const N: usize")
        self.assertEqual(join_tokens(["&", "mut", "(", "A", ",", "B", ")"]), "&mut (A, B)")
        self.assertEqual(join_tokens(["a", "+", "b"]), "a + b")


class TestIsPublic(unittest.TestCase):

    def _first_item(self, source: bytes):
        return parse_bytes(source).root_node.named_children[0]

    def test_visibility(self):
        """Test that only bare pub is public."""
        self.assertTrue(is_public(self._first_item(b"pub fn a() {}")))
        self.assertFalse(is_public(self._first_item(b"fn a() {}")))
        self.assertFalse(is_public(self._first_item(b"pub(crate) fn a() {}")))
        self.assertFalse(is_public(self._first_item(b"pub(super) fn a() {}")))
        self.assertFalse(is_public(self._first_item(b"pub(in crate::x) fn a() {}")))


if __name__ == "__main__":
    unittest.main()
