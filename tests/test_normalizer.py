from __future__ import annotations

import os
import tempfile
import unittest

from mini_query import (
    EngineOptions,
    FormattingError,
    FunctionCall,
    InvalidFunctionError,
    InvalidQueryError,
    NamedPreparedStatement,
    ParameterizedText,
    PreparedFile,
    QueryFile,
    QueryFileError,
    RawText,
    StatementError,
    coerce_descriptor,
)
from mini_query.core.normalizer import apply_formatting, normalize_query


class _FailingFormatter:
    def format_query(self, text, values=None):  # noqa: ANN001,ANN201
        raise FormattingError("bad values")

    def format_function(self, name, values=None, capitalize=False):  # noqa: ANN001,ANN201
        raise FormattingError("bad function values")


class _NonTextFormatter:
    def format_query(self, text, values=None):  # noqa: ANN001,ANN201
        return 42

    def format_function(self, name, values=None, capitalize=False):  # noqa: ANN001,ANN201
        return None


def _normalize(query, values=None, **options):  # noqa: ANN001,ANN202,ANN003
    opts = EngineOptions(**options)
    return apply_formatting(normalize_query(query, values, opts), opts)


class CoerceDescriptorTests(unittest.TestCase):
    def test_loose_inputs(self) -> None:
        self.assertEqual(coerce_descriptor("SELECT 1"), RawText("SELECT 1"))
        qf = QueryFile("x.sql")
        self.assertEqual(coerce_descriptor(qf), PreparedFile(qf))
        self.assertEqual(
            coerce_descriptor({"func_name": "now"}),
            FunctionCall("now", None),
        )
        self.assertEqual(
            coerce_descriptor({"name": "find", "text": "SELECT $1", "values": [1]}),
            NamedPreparedStatement(name="find", text="SELECT $1", values=[1]),
        )
        self.assertEqual(
            coerce_descriptor({"text": "SELECT $1"}),
            ParameterizedText(text="SELECT $1"),
        )

    def test_descriptors_pass_through(self) -> None:
        descriptor = ParameterizedText("SELECT 1")
        self.assertIs(coerce_descriptor(descriptor), descriptor)

    def test_invalid_inputs(self) -> None:
        for query in (None, "", {}, {"other": 1}, 123, object()):
            with self.subTest(query=query):
                with self.assertRaises(InvalidQueryError):
                    coerce_descriptor(query)


class NormalizeQueryTests(unittest.TestCase):
    def test_absent_query_is_invalid(self) -> None:
        normalized = _normalize(None)
        self.assertIsInstance(normalized.error, InvalidQueryError)
        self.assertEqual(str(normalized.error), "Invalid query format.")

    def test_raw_text_is_formatted(self) -> None:
        normalized = _normalize("SELECT $1, $2", [1, "a"])
        self.assertIsNone(normalized.error)
        self.assertEqual(normalized.text, "SELECT 1, 'a'")
        self.assertIsNone(normalized.params)
        self.assertFalse(normalized.native)

    def test_raw_text_with_native_formatting(self) -> None:
        normalized = _normalize("SELECT ?", [1], native_formatting=True)
        self.assertIsNone(normalized.error)
        self.assertEqual(normalized.text, "SELECT ?")
        self.assertEqual(normalized.params, [1])

    def test_empty_raw_text_descriptor_is_invalid(self) -> None:
        self.assertIsInstance(_normalize(RawText("")).error, InvalidQueryError)

    def test_formatting_failure_keeps_original_values(self) -> None:
        normalized = _normalize("SELECT $3", [1])
        self.assertIsInstance(normalized.error, FormattingError)
        self.assertEqual(normalized.text, "SELECT $3")
        self.assertEqual(normalized.params, [1])

    def test_formatter_returning_non_text_fails(self) -> None:
        normalized = _normalize("SELECT 1", [1], formatter=_NonTextFormatter())
        self.assertIsInstance(normalized.error, FormattingError)

    def test_function_call_is_formatted(self) -> None:
        normalized = _normalize(FunctionCall("find_user"), [1, "x"])
        self.assertTrue(normalized.is_func)
        self.assertFalse(normalized.native)
        self.assertIsNone(normalized.error)
        self.assertEqual(normalized.text, "select * from find_user(1,'x')")
        self.assertIsNone(normalized.params)

    def test_function_call_uses_capitalize_flag(self) -> None:
        normalized = _normalize(FunctionCall("now"), capitalize_sql=True)
        self.assertEqual(normalized.text, "SELECT * FROM now()")

    def test_function_call_never_uses_native_formatting(self) -> None:
        normalized = _normalize(FunctionCall("f"), [1], native_formatting=True)
        self.assertTrue(normalized.is_func)
        self.assertFalse(normalized.native)
        self.assertEqual(normalized.text, "select * from f(1)")
        self.assertIsNone(normalized.params)

    def test_function_call_falls_back_to_descriptor_values(self) -> None:
        normalized = _normalize(FunctionCall("f", [2]))
        self.assertEqual(normalized.text, "select * from f(2)")
        normalized = _normalize(FunctionCall("f", [2]), [3])
        self.assertEqual(normalized.text, "select * from f(3)")

    def test_function_call_with_invalid_name(self) -> None:
        for name in (None, "", 5):
            with self.subTest(name=name):
                normalized = _normalize(FunctionCall(name))
                self.assertIsInstance(normalized.error, InvalidFunctionError)
                self.assertEqual(str(normalized.error), "Invalid function name.")

    def test_function_formatting_failure_uses_stub_text(self) -> None:
        normalized = _normalize(FunctionCall("f"), [1], formatter=_FailingFormatter())
        self.assertIsInstance(normalized.error, FormattingError)
        self.assertEqual(normalized.text, "select * from f(...)")
        self.assertIsNone(normalized.params)

        normalized = _normalize(
            FunctionCall("f"), [1], formatter=_FailingFormatter(), capitalize_sql=True
        )
        self.assertEqual(normalized.text, "SELECT * FROM f(...)")

    def test_parameterized_text_forces_native_formatting(self) -> None:
        normalized = _normalize(ParameterizedText("SELECT $1"), [5])
        self.assertIsNone(normalized.error)
        self.assertTrue(normalized.native)
        self.assertEqual(normalized.text, "SELECT $1")
        self.assertEqual(normalized.params, [5])

    def test_external_values_are_not_overwritten(self) -> None:
        query = ParameterizedText("SELECT $1", values=[1])
        normalized = _normalize(query, [2])
        self.assertEqual(normalized.params, [1])
        self.assertEqual(query.values, [1])

    def test_attaching_values_leaves_caller_object_unchanged(self) -> None:
        query = ParameterizedText("SELECT $1")
        _normalize(query, (9,))
        self.assertIsNone(query.values)

    def test_mapping_promotions(self) -> None:
        normalized = _normalize({"name": "get-one", "text": "SELECT $1"}, [1])
        self.assertTrue(normalized.native)
        self.assertEqual(normalized.statement_name, "get-one")
        self.assertEqual(normalized.params, [1])

        normalized = _normalize({"text": "SELECT 2"})
        self.assertTrue(normalized.native)
        self.assertIsNone(normalized.statement_name)
        self.assertEqual(normalized.text, "SELECT 2")

    def test_external_parse_errors(self) -> None:
        bad = (
            NamedPreparedStatement(name="", text="SELECT 1"),
            NamedPreparedStatement(name="n", text=None),
            ParameterizedText("   "),
            ParameterizedText("SELECT 1", values="oops"),
        )
        for query in bad:
            with self.subTest(query=query):
                normalized = _normalize(query)
                self.assertIsInstance(normalized.error, StatementError)
                self.assertIs(normalized.text, query)


class PreparedFileNormalizationTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

    def test_prepared_file_text_is_formatted(self) -> None:
        path = os.path.join(self._tmp.name, "q.sql")
        with open(path, "w", encoding="utf-8") as fh:
            fh.write("SELECT * FROM users WHERE id = ${id}")
        normalized = _normalize(QueryFile(path), {"id": 3})
        self.assertIsNone(normalized.error)
        self.assertEqual(normalized.text, "SELECT * FROM users WHERE id = 3")

    def test_failed_file_reports_display_name(self) -> None:
        path = os.path.join(self._tmp.name, "missing.sql")
        qf = QueryFile(path)
        normalized = _normalize(qf, [1])
        self.assertIsInstance(normalized.error, QueryFileError)
        self.assertIs(normalized.error, qf.error)
        self.assertEqual(normalized.text, path)

    def test_parameterized_text_from_file(self) -> None:
        path = os.path.join(self._tmp.name, "p.sql")
        with open(path, "w", encoding="utf-8") as fh:
            fh.write("SELECT $1")
        normalized = _normalize(ParameterizedText(QueryFile(path)), [1])
        self.assertIsNone(normalized.error)
        self.assertEqual(normalized.text, "SELECT $1")

        missing = ParameterizedText(QueryFile(os.path.join(self._tmp.name, "nope.sql")))
        self.assertIsInstance(_normalize(missing).error, QueryFileError)


if __name__ == "__main__":
    unittest.main()
