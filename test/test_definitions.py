"""
Definitions module behavioral tests (help rendering and the parse scan).

Scope
- Validate help text layout for options, flags, defaults and every parameter shape.
- Validate parsing: positionals, flags, value options, defaults, missing values,
  missing parameters, repeated options, alias look-ahead and input normalization.
- Validate immutability and value semantics of the records.

Conventions
- Test method names follow CamelCase per project convention.
- Expected help text is joined with os.linesep (platform newline).
"""

from __future__ import annotations

import os
import sys
import unittest
from unittest import TestCase, mock

from cmdline import Definition, OptionSpec, ParameterSpec, define
from cmdline.faults import MissingOptionArgumentError, MissingParameterError, ParsingError


def createDefinition():
    return (
        define("test")
        .with_option(["-m", "--maxSize"], "max file size in KB", "size", "1024")
        .with_option("-v", "verbose")
        .with_parameter("file", "The output file")
        .build()
    )


def lines(*lines):
    return os.linesep.join(lines)


class TestHelp(TestCase):
    """Behavioral tests for Definition.help and the option/parameter help fragments."""

    def testFullHelp(self):
        self.assertEqual(createDefinition().help(), lines(
            "test [options] file",
            "  Options:",
            "  -m, --maxSize [<size>] : max file size in KB",
            "  -v : verbose",
        ))

    def testProgramOnly(self):
        self.assertEqual(define("bare").build().help(), "bare")

    def testNoOptionsSuffixWithoutOptions(self):
        self.assertEqual(define("tool").with_parameter("file", "a file").build().help(), "tool file")

    def testOptionsWithoutParameter(self):
        self.assertEqual(define("tool").with_option("-q", "quiet").build().help(), lines(
            "tool [options]",
            "  Options:",
            "  -q : quiet",
        ))

    def testOptionWithoutDefaultHasBareMetavar(self):
        option = OptionSpec(["-o", "--output"], "output path", "path")
        self.assertEqual(option.help(), "-o, --output <path> : output path")

    def testOptionWithoutDescription(self):
        self.assertEqual(OptionSpec(["-o"], "", "path", "a.txt").help(), "-o [<path>]")
        self.assertEqual(OptionSpec(["-v"]).help(), "-v")

    def testFlagDropsDefault(self):
        option = OptionSpec(["-v"], "", None, "x")
        self.assertIsNone(option.default)
        self.assertEqual(option.help(), "-v")

    def testRequiredSingleParameter(self):
        self.assertEqual(ParameterSpec("file").help(), "file")

    def testRequiredVariadicParameter(self):
        self.assertEqual(ParameterSpec("file", variadic=True).help(), "file [file2 file3 ...]")

    def testOptionalSingleParameter(self):
        self.assertEqual(ParameterSpec("file", required=False, defaults=["x"]).help(), "[file]")

    def testOptionalVariadicParameter(self):
        parameter = ParameterSpec("file", required=False, variadic=True)
        self.assertEqual(parameter.help(), "[file [file2 [file3] ...]]")

    def testRichRenderingMatchesHelp(self):
        definition = createDefinition()
        self.assertEqual(definition.__rich__().plain, definition.help())


class TestParse(TestCase):
    """Behavioral tests for Definition.parse."""

    def testEmptyDefinitionEmptyArgs(self):
        result = define("tool").build().parse([])
        self.assertEqual(result.parameters, ())
        self.assertEqual(dict(result.options), {})

    def testValueOptionAndParameter(self):
        result = createDefinition().parse(["-m", "512", "out.txt"])
        self.assertEqual(result.parameters, ("out.txt",))
        self.assertEqual(dict(result.options), {"-m": "512", "--maxSize": "512"})

    def testFlagStoredUnderEveryAlias(self):
        definition = define("tool").with_option(["-v", "--verbose"], "verbose").build()
        result = definition.parse(["--verbose"])
        self.assertEqual(dict(result.options), {"-v": None, "--verbose": None})

    def testMissingValueWithoutDefaultRaises(self):
        definition = (
            define("tool")
            .with_option("-v", "verbose")
            .with_option("-m", "max size", "size")
            .build()
        )
        with self.assertRaises(MissingOptionArgumentError) as context:
            definition.parse(["-v", "-m"])
        fault = context.exception
        self.assertEqual(fault.alias, "-m")
        self.assertEqual(fault.metavar, "size")
        self.assertIs(fault.definition, definition)
        self.assertIn("Option '-m' requires argument 'size'", str(fault))
        self.assertTrue(str(fault).endswith("Usage: " + definition.help()))

    def testValueFollowedByAliasWithoutDefaultRaises(self):
        definition = (
            define("tool")
            .with_option("-m", "max size", "size")
            .with_option("-v", "verbose")
            .build()
        )
        with self.assertRaises(MissingOptionArgumentError):
            definition.parse(["-m", "-v"])

    def testMissingValueFallsBackToDefault(self):
        result = createDefinition().parse(["out.txt", "-m"])
        self.assertTrue(result.has_option("-m"))
        self.assertEqual(result.option("-m"), "1024")

    def testAliasIsNotConsumedAsValue(self):
        result = createDefinition().parse(["-m", "-v", "out.txt"])
        self.assertEqual(result.option("-m"), "1024")
        self.assertTrue(result.has_option("-v"))
        self.assertEqual(result.parameter(), "out.txt")

    def testMissingRequiredParameterRaises(self):
        definition = createDefinition()
        with self.assertRaises(MissingParameterError) as context:
            definition.parse(["-m", "512"])
        fault = context.exception
        self.assertEqual(fault.name, "file")
        self.assertIs(fault.definition, definition)
        self.assertIn("Missing required parameter 'file'", str(fault))
        self.assertIn(definition.help(), str(fault))

    def testParsingErrorsShareBase(self):
        with self.assertRaises(ParsingError):
            createDefinition().parse([])

    def testOptionalParameterUsesDefaults(self):
        definition = define("tool").with_parameters("files", "files", ["a", "b"]).build()
        self.assertEqual(definition.parse([]).parameters, ("a", "b"))

    def testOptionalParameterWithEmptyDefaults(self):
        definition = define("tool").with_parameters("files", "files", []).build()
        self.assertEqual(definition.parse([]).parameters, ())

    def testExcessPositionalsRetained(self):
        definition = define("tool").with_parameter("file", "a file").build()
        self.assertEqual(definition.parse(["a", "b", "c"]).parameters, ("a", "b", "c"))

    def testPositionalsDroppedWithoutParameter(self):
        definition = define("tool").with_option("-v", "verbose").build()
        result = definition.parse(["stray", "-v", "tokens"])
        self.assertEqual(result.parameters, ())
        self.assertTrue(result.has_option("-v"))

    def testLastOccurrenceWins(self):
        result = createDefinition().parse(["-m", "1", "--maxSize", "2", "out.txt"])
        self.assertEqual(result.option("-m"), "2")
        self.assertEqual(result.option("--maxSize"), "2")

    def testOptionMapKeepsFirstSeenOrder(self):
        result = createDefinition().parse(["-v", "-m", "1", "-v", "out.txt"])
        self.assertEqual(list(result.options), ["-v", "-m", "--maxSize"])

    def testExactMatchingOnly(self):
        definition = define("tool").with_option("--size", "size", "n").with_parameters("rest", "rest").build()
        result = definition.parse(["--size=3", "--si", "-vq"])
        self.assertEqual(result.parameters, ("--size=3", "--si", "-vq"))
        self.assertFalse(result.has_option("--size"))

    def testDuplicateAliasOwnedByFirstOption(self):
        definition = Definition(
            "tool",
            None,
            [OptionSpec(["-v", "--verbose"], "verbose"), OptionSpec(["-v", "--value"], "value", "x")],
        )
        result = definition.parse(["-v"])
        self.assertEqual(dict(result.options), {"-v": None, "--verbose": None})
        self.assertFalse(result.has_option("--value"))

    def testStringInputIsShellSplit(self):
        result = createDefinition().parse("-m 512 'my file.txt'")
        self.assertEqual(result.option("-m"), "512")
        self.assertEqual(result.parameter(), "my file.txt")

    def testDefaultInputIsArgv(self):
        with mock.patch.object(sys, "argv", ["prog", "-m", "7", "out.txt"]):
            result = createDefinition().parse()
        self.assertEqual(result.option("-m"), "7")
        self.assertEqual(result.parameter(), "out.txt")

    def testTokensAreNotTrimmed(self):
        result = createDefinition().parse([" -m", "out.txt"])
        self.assertEqual(result.parameters, (" -m", "out.txt"))

    def testNonStringTokenRejected(self):
        with self.assertRaises(TypeError):
            createDefinition().parse(["-m", 512, "out.txt"])

    def testNonIterableInputRejected(self):
        with self.assertRaises(TypeError):
            createDefinition().parse(512)

    def testParseIsIdempotent(self):
        definition = createDefinition()
        first = definition.parse(["-v", "-m", "512", "out.txt"])
        second = definition.parse(["-v", "-m", "512", "out.txt"])
        self.assertIsNot(first, second)
        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))


class TestRecords(TestCase):
    """Behavioral tests for record immutability and value semantics."""

    def testFieldsAreReadOnly(self):
        definition = createDefinition()
        with self.assertRaises(AttributeError):
            definition.program = "other"
        with self.assertRaises(AttributeError):
            definition.options[0].names = ("-x",)

    def testAliasTableIsReadOnly(self):
        definition = createDefinition()
        with self.assertRaises(TypeError):
            definition.aliases["-x"] = definition.options[0]

    def testOptionsAreATuple(self):
        self.assertIsInstance(createDefinition().options, tuple)

    def testValueEquality(self):
        self.assertEqual(OptionSpec(["-v"], "verbose"), OptionSpec(["-v"], "verbose"))
        self.assertNotEqual(OptionSpec(["-v"], "verbose"), OptionSpec(["-v"], "loud"))
        self.assertEqual(len({ParameterSpec("file"), ParameterSpec("file")}), 1)

    def testRecordsAreSealed(self):
        with self.assertRaises(TypeError):
            type("Derived", (Definition,), {})

    def testRepr(self):
        self.assertEqual(
            repr(OptionSpec(["-v"], "verbose")),
            "option-spec(names=('-v',), descr='verbose', metavar=None, default=None)",
        )


if __name__ == "__main__":
    unittest.main()
