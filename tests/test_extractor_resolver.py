"""
These tests cover:
    extract_tags:
    - Offsets, names and end tag flags
    - Attributes of start tags
    select_candidates:
    - Tags of names no handler accepts are dropped
    - Every tag of an accepted name is kept for pairing
    fold_end_tags / filter_overlapping:
    - Pairing with the nearest unpaired start tag
    - Unpaired end tags
    - Tags nested in a claimed span
    - Unwanted start tags pair before being dropped
"""

import unittest
from dataclasses import FrozenInstanceError
from shortcode.extractor import extract_tags, select_candidates
from shortcode.grammar import TagGrammar
from shortcode.resolver import fold_end_tags, filter_overlapping, resolve_tags


class TestExtractTags(unittest.TestCase):

    def setUp(self):
        self.grammar = TagGrammar.build()

    def test_no_tags(self):
        self.assertEqual(extract_tags("This is some content without any tags.", self.grammar), [])

    def test_empty_content(self):
        self.assertEqual(extract_tags("", self.grammar), [])

    def test_offsets_and_flags(self):
        text = "say [[TEST a=1]]x[[/TEST]]"
        tags = extract_tags(text, self.grammar)
        self.assertEqual([(t.tag_name, t.end_tag) for t in tags], [("TEST", False), ("TEST", True)])
        start_tag, end_tag = tags
        self.assertEqual((start_tag.start, start_tag.end), (4, 16))
        self.assertEqual(text[start_tag.start:start_tag.end], start_tag.full_match)
        self.assertEqual(start_tag.tag_contents, "TEST a=1")
        self.assertEqual(start_tag.attributes, {"a": "1", 1: {"a": "1"}})
        self.assertEqual(start_tag.content, "")
        self.assertTrue(start_tag.self_closing)
        self.assertEqual(end_tag.full_match, "[[/TEST]]")
        self.assertEqual(end_tag.attributes, {})

    def test_unmatched_delimiters_are_ignored(self):
        tags = extract_tags("[[incomplete value ]] [[A]] ]]", self.grammar)
        self.assertEqual([t.tag_name for t in tags], ["incomplete", "A"])

    def test_tags_are_frozen(self):
        tag = extract_tags("[[A]]", self.grammar)[0]
        with self.assertRaises(FrozenInstanceError):
            tag.content = "changed"

    def test_select_candidates(self):
        tags = extract_tags("[[A]][[B]]x[[/B]][[/A]][[/C]]", self.grammar)
        kept = select_candidates(tags, lambda tag: tag.tag_name == "A")
        self.assertEqual([(t.tag_name, t.end_tag) for t in kept], [("A", False), ("A", True)])

    def test_select_candidates_keeps_every_tag_of_a_handled_name(self):
        tags = extract_tags("[[B k=1]] [[B]]x[[/B]]", self.grammar)
        kept = select_candidates(tags, lambda tag: "k" in tag.attributes)
        self.assertEqual([(t.tag_name, t.end_tag) for t in kept], [("B", False), ("B", False), ("B", True)])


class TestResolveTags(unittest.TestCase):

    def setUp(self):
        self.grammar = TagGrammar.build()

    def resolve(self, text):
        return resolve_tags(text, extract_tags(text, self.grammar))

    def test_pairing(self):
        tags = self.resolve("[[TEST]]content[[/TEST]]")
        self.assertEqual(len(tags), 1)
        tag = tags[0]
        self.assertEqual(tag.content, "content")
        self.assertFalse(tag.self_closing)
        self.assertFalse(tag.end_tag)
        self.assertEqual(tag.full_match, "[[TEST]]content[[/TEST]]")
        self.assertEqual((tag.start, tag.end), (0, 24))

    def test_end_tag_pairs_with_nearest_start(self):
        text = "[[A]]1[[A]]2[[/A]]3[[/A]]"
        folded = fold_end_tags(text, extract_tags(text, self.grammar))
        self.assertEqual([t.content for t in folded], ["1[[A]]2[[/A]]3", "2"])
        self.assertEqual([t.content for t in filter_overlapping(folded)], ["1[[A]]2[[/A]]3"])

    def test_second_end_tag_skips_folded_start(self):
        text = "[[A]]1[[/A]]2[[/A]]"
        tags = fold_end_tags(text, extract_tags(text, self.grammar))
        self.assertEqual(len(tags), 1)
        self.assertEqual(tags[0].content, "1")
        self.assertEqual(tags[0].end, 12)

    def test_self_closing_and_paired_with_same_name(self):
        tags = self.resolve("[[ai]] x [[ai]]test[[/ai]]")
        self.assertEqual([(t.self_closing, t.content) for t in tags], [(True, ""), (False, "test")])

    def test_unpaired_end_tag_is_dropped(self):
        tags = self.resolve("[[/B]] [[A]] [[/B]]")
        self.assertEqual([t.tag_name for t in tags], ["A"])
        self.assertTrue(tags[0].self_closing)

    def test_only_outermost(self):
        text = "[[name value]] test [[another]]blah[[/another]] [[/name]]"
        tags = self.resolve(text)
        self.assertEqual(len(tags), 1)
        self.assertEqual(tags[0].content, " test [[another]]blah[[/another]] ")

    def test_overlapping_pairs(self):
        tags = self.resolve("[[A]]x[[B]]y[[/A]]z[[/B]]")
        self.assertEqual([t.tag_name for t in tags], ["A"])
        self.assertEqual(tags[0].content, "x[[B]]y")

    def test_resolved_tags_do_not_overlap(self):
        tags = self.resolve("[[A]][[B]][[/A]][[C]][[D]]d[[/D]][[/C]][[E]]")
        for previous, current in zip(tags, tags[1:]):
            self.assertGreaterEqual(current.start, previous.end)
        self.assertEqual([t.tag_name for t in tags], ["A", "C", "E"])

    def test_unwanted_start_tags_still_pair(self):
        text = "[[B k=1]] [[B]]inner[[/B]]"
        tags = resolve_tags(text, extract_tags(text, self.grammar), keep=lambda tag: "k" in tag.attributes)
        self.assertEqual(len(tags), 1)
        self.assertEqual((tags[0].content, tags[0].self_closing), ("", True))
        self.assertEqual(tags[0].full_match, "[[B k=1]]")


if __name__ == '__main__':
    unittest.main()
