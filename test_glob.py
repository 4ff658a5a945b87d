from __future__ import annotations

import unittest

from siva.errors import InvalidPatternError
from siva.pathglob import compile_glob, matches, normalize_name, translate


class NormalizeNameTests(unittest.TestCase):
    def test_normalize(self):
        self.assertEqual(normalize_name("a//b///c"), "a/b/c")
        self.assertEqual(normalize_name("dir/"), "dir")
        self.assertEqual(normalize_name("/"), "/")
        self.assertEqual(normalize_name("/abs/x"), "/abs/x")


class MatchTests(unittest.TestCase):
    def check(self, pattern, yes=(), no=()):
        for name in yes:
            self.assertTrue(matches(pattern, name), f"{pattern!r} should match {name!r}")
        for name in no:
            self.assertFalse(matches(pattern, name), f"{pattern!r} should not match {name!r}")

    def test_star(self):
        self.check("*.txt", yes=["a.txt", ".txt", "x.y.txt"], no=["a.bin", "d/a.txt", "a.txt.bak"])
        self.check("dir/*", yes=["dir/a"], no=["dir/sub/b", "other", "dir", "dir/"])

    def test_double_star(self):
        self.check("**/*.go", yes=["a/b.go", "a/b/c.go"], no=["b.go"])
        self.check("src/**", yes=["src/a", "src/a/b"], no=["src", "other/a"])

    def test_question_mark(self):
        self.check("a?c", yes=["abc", "a.c"], no=["ac", "abbc", "a/c"])

    def test_classes(self):
        self.check("[ab].txt", yes=["a.txt", "b.txt"], no=["c.txt"])
        self.check("f[0-9]", yes=["f0", "f9"], no=["fa", "f10"])
        self.check("f[!0-9]", yes=["fa"], no=["f1", "f/"])
        self.check("[-a]", yes=["-", "a"], no=["b"])
        self.check("[a-]", yes=["-", "a"], no=["b"])
        self.check("[a-c-]", yes=["b", "-"], no=["d"])
        self.check("[a-cx-z]", yes=["b", "y"], no=["d", "-"])
        self.check("[.^]x", yes=[".x", "^x"], no=["ax"])

    def test_groups(self):
        self.check("*.{txt,md}", yes=["a.txt", "b.md"], no=["c.rst", "a.txt,md"])
        self.check("{docs,src}/*", yes=["docs/a", "src/b"], no=["lib/c"])
        self.check("a,b", yes=["a,b"])
        self.check("a}", yes=["a}"])

    def test_escape(self):
        self.check("\\*.txt", yes=["*.txt"], no=["a.txt"])
        self.check("a\\[b", yes=["a[b"])

    def test_literal_regex_characters(self):
        self.check("a+b(1).txt", yes=["a+b(1).txt"], no=["aab1.txt"])

    def test_name_is_normalized(self):
        self.check("dir/a", yes=["dir//a", "dir/a/"])


class InvalidPatternTests(unittest.TestCase):
    def test_errors(self):
        cases = {
            "[abc": "Missing ']'",
            "{a,b": "Missing '}'",
            "{a,{b}}": "Cannot nest groups",
            "[a/b]": "Explicit 'name separator' in class",
            "[]": "Empty character class",
            "[z-a]": "Invalid range",
            "[a-c-e]": "Invalid range",
            "[!--a]": "Invalid range",
            "abc\\": "No character to escape",
        }
        for pattern, reason in cases.items():
            with self.subTest(pattern=pattern):
                with self.assertRaises(InvalidPatternError) as ctx:
                    compile_glob(pattern)
                self.assertEqual(ctx.exception.reason, reason)
                self.assertEqual(ctx.exception.pattern, pattern)

    def test_is_value_error(self):
        with self.assertRaises(ValueError):
            translate("[")


if __name__ == "__main__":
    unittest.main()
