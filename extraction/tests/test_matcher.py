"""
Unit tests for matcher.py

Tests own-level property matching, the exclusion/section filter, and the
end-to-end class name extraction contract.
"""

import unittest
from unittest import mock

from extraction.config import DEFAULT_EXCLUDED_CLASSES
from extraction.matcher import (
    build_child_index,
    extract_class_names,
    find_matching_spans,
    has_own_property,
    own_level_text,
    should_include,
    strip_comments,
)
from extraction.models import ClassSpan
from extraction.scanner import scan_class_spans

NESTED_DOC = (
    "class CfgWeapons { class Base { scope=0; class Child { scope=2; }; }; "
    "class Standalone: Base { scope=2; }; };"
)


def _span(doc, name):
    for span in scan_class_spans(doc):
        if span.name == name:
            return span
    raise AssertionError(f"class {name} not found")


class TestOwnLevelText(unittest.TestCase):
    """Test subtraction of nested classes from a body."""

    def test_children_removed(self):
        doc = "class A { x = 1; class B { y = 2; }; z = 3; };"
        text = own_level_text(_span(doc, "A"), doc)
        self.assertNotIn("y = 2", text)
        self.assertNotIn("class B", text)
        self.assertIn("x = 1;", text)
        self.assertIn("z = 3;", text)

    def test_transitive_descendants_removed(self):
        doc = "class A { class B { class C { scope = 2; }; }; };"
        self.assertNotIn("scope", own_level_text(_span(doc, "A"), doc))
        self.assertNotIn("scope", own_level_text(_span(doc, "B"), doc))
        self.assertIn("scope = 2;", own_level_text(_span(doc, "C"), doc))

    def test_explicit_children_match_scanned_children(self):
        doc = "class A { a = 1; class B {}; b = 2; class C { c = 3; }; };"
        spans = list(scan_class_spans(doc))
        index = build_child_index(spans)
        outer = spans[0]
        self.assertEqual(
            own_level_text(outer, doc, index[outer.header_start]),
            own_level_text(outer, doc),
        )

    def test_leaf_text_is_whole_body(self):
        doc = "class Leaf { scope = 2; };"
        span = _span(doc, "Leaf")
        self.assertEqual(own_level_text(span, doc), span.body(doc))


class TestHasOwnProperty(unittest.TestCase):
    """Test the scope = 2 detection."""

    def test_direct_property(self):
        doc = "class Rifle { scope = 2; };"
        self.assertTrue(has_own_property(_span(doc, "Rifle"), doc))

    def test_whitespace_variants(self):
        for body in ("scope=2;", "scope = 2 ;", "\n\tscope\n=\n2\n;\n"):
            doc = f"class R {{ {body} }};"
            self.assertTrue(has_own_property(_span(doc, "R"), doc), body)

    def test_property_only_in_child_does_not_count(self):
        doc = "class Parent { scope = 1; class ItemInfo { scope = 2; }; };"
        self.assertFalse(has_own_property(_span(doc, "Parent"), doc))
        self.assertTrue(has_own_property(_span(doc, "ItemInfo"), doc))

    def test_other_values_do_not_match(self):
        for body in ("scope = 1;", "scope = 20;", "scope = 2.5;", "scope = 2"):
            doc = f"class R {{ {body} }};"
            self.assertFalse(has_own_property(_span(doc, "R"), doc), body)

    def test_similar_property_names_do_not_match(self):
        for body in ("scopeCurator = 2;", "scopeArsenal = 2;", "myscope = 2;"):
            doc = f"class R {{ {body} }};"
            self.assertFalse(has_own_property(_span(doc, "R"), doc), body)

    def test_commented_property_ignored(self):
        doc = "class R { // scope = 2;\n /* scope = 2; */ scope = 1; };"
        self.assertFalse(has_own_property(_span(doc, "R"), doc))

    def test_comment_before_property(self):
        doc = "class R { /* public */ scope = 2; // visible\n };"
        self.assertTrue(has_own_property(_span(doc, "R"), doc))

    def test_strip_comments(self):
        self.assertEqual(strip_comments("a // b\nc /* d\ne */ f").split(), ["a", "c", "f"])

    def test_strip_comments_keeps_strings(self):
        text = 'url = "https://x.org/*a*/"; q = "say ""//hi"""; // gone'
        self.assertEqual(
            strip_comments(text).rstrip(),
            'url = "https://x.org/*a*/"; q = "say ""//hi""";',
        )

    def test_url_in_string_before_property(self):
        doc = 'class Hat { author = "https://example.com"; scope = 2; };'
        self.assertTrue(has_own_property(_span(doc, "Hat"), doc))

    def test_comment_marker_in_string_does_not_hide_class(self):
        doc = 'class CfgWeapons { class Hat { author = "https://example.com"; scope = 2; }; };'
        self.assertEqual(extract_class_names(doc), ["Hat"])


class TestShouldInclude(unittest.TestCase):
    """Test exclusion and section boundary rules."""

    def _make(self, name, header_start):
        return ClassSpan(
            name=name,
            base_name=None,
            header_start=header_start,
            body_start=header_start + 10,
            body_end=header_start + 20,
        )

    def test_excluded_name(self):
        self.assertFalse(should_include(self._make("ItemCore", 50), None, DEFAULT_EXCLUDED_CLASSES))

    def test_before_boundary(self):
        self.assertFalse(should_include(self._make("Rifle", 5), 10, frozenset()))

    def test_at_boundary(self):
        self.assertTrue(should_include(self._make("Rifle", 10), 10, frozenset()))

    def test_no_boundary(self):
        self.assertTrue(should_include(self._make("Rifle", 0), None, frozenset()))

    def test_exclusion_overrides_section(self):
        self.assertFalse(should_include(self._make("Rifle", 100), 10, frozenset({"Rifle"})))


class TestExtractClassNames(unittest.TestCase):
    """Test the extraction driver contract."""

    def test_nested_scenario(self):
        result = extract_class_names(NESTED_DOC, "CfgWeapons", frozenset({"Base"}))
        self.assertEqual(result, ["Child", "Standalone"])

    def test_missing_section_uses_document_start(self):
        result = extract_class_names(NESTED_DOC, "NoSuchSection", frozenset({"Base"}))
        self.assertEqual(result, ["Child", "Standalone"])

    def test_broken_class_excluded_without_error(self):
        doc = "class CfgWeapons { class Fine { scope = 2; }; };\nclass Broken { scope = 2;"
        self.assertEqual(extract_class_names(doc), ["Fine"])

    def test_only_broken_class(self):
        self.assertEqual(extract_class_names("class Broken { scope = 2;"), [])

    def test_empty_document(self):
        self.assertEqual(extract_class_names(""), [])
        self.assertEqual(extract_class_names("scope = 2;"), [])

    def test_classes_before_section_excluded(self):
        doc = (
            "class CfgPatches { class my_addon { scope = 2; }; };\n"
            "class CfgWeapons { class my_rifle { scope = 2; }; };"
        )
        self.assertEqual(extract_class_names(doc), ["my_rifle"])

    def test_span_starting_before_boundary_is_still_excluded(self):
        # Wrapper opens before the section and encloses it
        doc = "class Wrapper { scope = 2; class CfgWeapons { class Gun { scope = 2; }; }; };"
        self.assertEqual(extract_class_names(doc), ["Gun"])

    def test_exclusion_overrides_property_and_section(self):
        doc = "class CfgWeapons { class ItemCore { scope = 2; }; class HeadgearItem { scope = 2; }; };"
        self.assertEqual(extract_class_names(doc), [])

    def test_duplicates_kept_in_first_seen_order(self):
        doc = (
            "class CfgWeapons { class B { scope = 2; }; class A { scope = 2; }; "
            "class B { scope = 2; }; };"
        )
        self.assertEqual(extract_class_names(doc), ["B", "A", "B"])

    def test_identical_headers_use_structural_offsets(self):
        # Same header text before and after the section start
        doc = (
            "class Early { class Twin { scope = 2; }; };\n"
            "class CfgWeapons { class Twin { scope = 2; }; };"
        )
        spans = find_matching_spans(doc)
        self.assertEqual([s.name for s in spans], ["Twin"])
        self.assertGreater(spans[0].header_start, doc.index("class CfgWeapons"))

    def test_idempotent(self):
        first = extract_class_names(NESTED_DOC, "CfgWeapons", frozenset({"Base"}))
        second = extract_class_names(NESTED_DOC, "CfgWeapons", frozenset({"Base"}))
        self.assertEqual(first, second)

    def test_result_bounded_by_header_count(self):
        doc = NESTED_DOC + " class CfgWeapons { class Extra; };"
        result = extract_class_names(doc, "CfgWeapons", frozenset())
        self.assertLessEqual(len(result), doc.count("class "))

    def test_empty_section_keyword_disables_restriction(self):
        doc = "class Early { scope = 2; }; class CfgWeapons { class Late { scope = 2; }; };"
        self.assertEqual(extract_class_names(doc, "", frozenset()), ["Early", "Late"])
        self.assertEqual(extract_class_names(doc, None, frozenset()), ["Early", "Late"])

    def test_realistic_config(self):
        doc = """
class CfgPatches
{
    class rhs_weapons
    {
        units[] = {};
        weapons[] = {"rhs_weap_m4a1"};
        requiredAddons[] = {"A3_Weapons_F"};
    };
};
class CfgWeapons
{
    class ItemCore;
    class InventoryItem_Base_F;
    class rhs_weap_m4a1 : ItemCore
    {
        scope = 2;
        displayName = "M4A1";
        class ItemInfo : InventoryItem_Base_F
        {
            scope = 2; // nested info block
            mass = 40;
        };
    };
    class rhs_weap_m4_base : ItemCore
    {
        scope = 1;
        class WeaponSlotsInfo
        {
            scope = 2;
        };
    };
    class rhs_acc_grip : ItemCore
    {
        scope=2;
    };
};
"""
        self.assertEqual(
            extract_class_names(doc),
            ["rhs_weap_m4a1", "WeaponSlotsInfo", "rhs_acc_grip"],
        )

    def test_internal_failure_returns_partial_result(self):
        doc = "class CfgWeapons { class A { scope = 2; }; class B { scope = 2; }; };"
        real = should_include

        def flaky(span, boundary, exclusion_set):
            if span.name == "B":
                raise RuntimeError("boom")
            return real(span, boundary, exclusion_set)

        with mock.patch("extraction.matcher.should_include", side_effect=flaky):
            with self.assertLogs("extraction.matcher", level="ERROR"):
                result = extract_class_names(doc)
        self.assertEqual(result, ["A"])


if __name__ == "__main__":
    unittest.main()
