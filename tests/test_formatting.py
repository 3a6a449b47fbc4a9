from __future__ import annotations

import unittest
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from mini_query import FormattingError, QueryFormatter


class FormatQueryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.fmt = QueryFormatter()

    def test_no_values_returns_text_unchanged(self) -> None:
        self.assertEqual(self.fmt.format_query("SELECT $1", None), "SELECT $1")

    def test_positional_variables(self) -> None:
        sql = self.fmt.format_query(
            "SELECT * FROM t WHERE a = $1 AND b = $2 AND c = $10",
            [1, "x", 3, 4, 5, 6, 7, 8, 9, None],
        )
        self.assertEqual(sql, "SELECT * FROM t WHERE a = 1 AND b = 'x' AND c = null")

    def test_scalar_value_fills_first_variable(self) -> None:
        self.assertEqual(self.fmt.format_query("SELECT $1", "it's"), "SELECT 'it''s'")

    def test_positional_out_of_range(self) -> None:
        with self.assertRaisesRegex(FormattingError, r"Variable \$3 out of range"):
            self.fmt.format_query("SELECT $3", [1, 2])

    def test_named_variables(self) -> None:
        sql = self.fmt.format_query(
            "SELECT ${col~} FROM t WHERE id = $(id) AND meta = ${info.tag}",
            {"col": "name", "id": 7, "info": {"tag": "a"}},
        )
        self.assertEqual(sql, "SELECT \"name\" FROM t WHERE id = 7 AND meta = 'a'")

    def test_named_missing_property(self) -> None:
        with self.assertRaisesRegex(FormattingError, "Property 'missing' doesn't exist."):
            self.fmt.format_query("SELECT ${missing}", {"id": 1})

    def test_filters(self) -> None:
        self.assertEqual(self.fmt.format_query("SELECT $1^", ["now()"]), "SELECT now()")
        self.assertEqual(self.fmt.format_query("SELECT $1:raw", ["1 + 1"]), "SELECT 1 + 1")
        self.assertEqual(self.fmt.format_query("SELECT $1:name", ['we"ird']), 'SELECT "we""ird"')
        self.assertEqual(self.fmt.format_query("IN ($1:csv)", [[1, 2, "a"]]), "IN (1,2,'a')")
        self.assertEqual(
            self.fmt.format_query("SELECT $1:json", [{"a": 1}]),
            "SELECT '{\"a\": 1}'",
        )

    def test_value_types(self) -> None:
        fmt = self.fmt
        self.assertEqual(fmt.as_value(True), "true")
        self.assertEqual(fmt.as_value(False), "false")
        self.assertEqual(fmt.as_value(1.5), "1.5")
        self.assertEqual(fmt.as_value(float("nan")), "'NaN'")
        self.assertEqual(fmt.as_value(float("-inf")), "'-Infinity'")
        self.assertEqual(fmt.as_value(Decimal("1.10")), "1.10")
        self.assertEqual(fmt.as_value(b"\x01\xff"), "'\\x01ff'")
        self.assertEqual(fmt.as_value(date(2024, 1, 2)), "'2024-01-02'")
        self.assertEqual(fmt.as_value(datetime(2024, 1, 2, 3, 4, 5)), "'2024-01-02T03:04:05'")
        self.assertEqual(
            fmt.as_value(UUID("12345678-1234-5678-1234-567812345678")),
            "'12345678-1234-5678-1234-567812345678'",
        )
        self.assertEqual(fmt.as_value([1, [2, 3]]), "array[1,array[2,3]]")
        self.assertEqual(fmt.as_value(lambda: 5), "5")

    def test_unsupported_value_type(self) -> None:
        with self.assertRaisesRegex(FormattingError, "Cannot format value of type object"):
            self.fmt.as_value(object())


class FormatFunctionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.fmt = QueryFormatter()

    def test_function_without_values(self) -> None:
        self.assertEqual(self.fmt.format_function("now"), "select * from now()")

    def test_function_with_values_and_capitalization(self) -> None:
        self.assertEqual(
            self.fmt.format_function("app.find_user", [1, "bob"], True),
            "SELECT * FROM app.find_user(1,'bob')",
        )
        self.assertEqual(self.fmt.format_function("f", 3), "select * from f(3)")

    def test_invalid_function_name(self) -> None:
        for name in ("", "f(1)", "bad name", None):
            with self.subTest(name=name):
                with self.assertRaises(FormattingError):
                    self.fmt.format_function(name)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
