"""
Token cursor tests: movement, clamping and the index save/restore contract.
"""
import unittest
from unittest import TestCase

from argweave import Cursor, absent


class CursorTest(TestCase):

    def testStartsBeforeFirstToken(self):
        cursor = Cursor(["add", "3"])
        self.assertEqual(cursor.index, -1)
        self.assertEqual(cursor.tokens, ("add", "3"))
        self.assertEqual(len(cursor), 2)
        self.assertFalse(cursor.exhausted)

    def testNextWalksForward(self):
        cursor = Cursor(["add", "3"])
        self.assertEqual(cursor.next(), "add")
        self.assertEqual(cursor.next(), "3")
        self.assertTrue(cursor.exhausted)

    def testNextClampsOnLastToken(self):
        cursor = Cursor(["add"])
        cursor.next()
        # Repeated overruns never move past the last position.
        self.assertIs(cursor.next(), absent)
        self.assertIs(cursor.next(), absent)
        self.assertEqual(cursor.index, 0)

    def testEmptyStreamStaysBeforeStart(self):
        cursor = Cursor()
        self.assertTrue(cursor.exhausted)
        self.assertIs(cursor.next(), absent)
        self.assertEqual(cursor.index, -1)
        self.assertIs(cursor.previous(), absent)
        self.assertEqual(cursor.index, -1)

    def testPreviousWalksBackward(self):
        cursor = Cursor(["a", "b", "c"])
        cursor.next()
        cursor.next()
        self.assertEqual(cursor.previous(), "a")
        self.assertEqual(cursor.index, 0)

    def testPreviousClampsOnFirstToken(self):
        cursor = Cursor(["a", "b"])
        cursor.next()
        self.assertIs(cursor.previous(), absent)
        self.assertEqual(cursor.index, 0)

    def testIndexRestore(self):
        """
        Writing back a saved index is the only undo mechanism.
        """
        cursor = Cursor(["a", "b", "c"])
        start = cursor.index
        cursor.next()
        cursor.next()
        cursor.index = start
        self.assertEqual(cursor.next(), "a")

    def testIndexValidation(self):
        cursor = Cursor(["a"])
        with self.assertRaises(ValueError):
            cursor.index = 1
        with self.assertRaises(ValueError):
            cursor.index = -2
        with self.assertRaises(TypeError):
            cursor.index = True
        with self.assertRaises(TypeError):
            cursor.index = "0"

    def testSourceIsSnapshotted(self):
        tokens = ["a"]
        cursor = Cursor(tokens)
        tokens.append("b")
        self.assertEqual(cursor.tokens, ("a",))

    def testRejectsNonTokenInput(self):
        with self.assertRaises(TypeError):
            Cursor("add 3")
        with self.assertRaises(TypeError):
            Cursor(["add", 3])
        with self.assertRaises(TypeError):
            Cursor(42)

    def testRepr(self):
        self.assertEqual(repr(Cursor(["a"])), "cursor(tokens=('a',), index=-1)")


if __name__ == "__main__":
    unittest.main()
