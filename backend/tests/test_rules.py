"""
Tests for the individual transformation rules.

Each rule is run through the cleaner on its own so the audit description
and summary are checked together with the rewritten cells.
"""
import pytest

from csvlens.cleaners import clean
from csvlens.cleaners.rules import RULE_REGISTRY, UnknownTransformationStep, build_step
from csvlens.schemas.cleaning import TransformationRule, TransformationType


def _run(dataset, rule):
    return clean(dataset, [rule])


def _values(result, column="value"):
    return [row.get(column, ...) for row in result.cleaned_data]


class TestRegistry:

    def test_every_type_registered(self):
        assert set(RULE_REGISTRY) == set(TransformationType)

    def test_unknown_type_gets_no_op_step(self):
        rule = TransformationRule(id="r1", column="a", type="pivot")
        assert isinstance(build_step(rule), UnknownTransformationStep)


class TestDateFormat:

    def test_day_first_dates_rewritten(self, single_column, make_rule):
        dataset = single_column(["31-12-2023", "5/1/2024", "2023-12-31", "", "not a date", ...])
        result = _run(dataset, make_rule("r1", "date_format"))

        assert _values(result) == ["2023-12-31", "2024-01-05", "2023-12-31", "", "not a date", ...]
        assert result.applied_transformations == [
            "Transformed 2 dates in column 'value' to format 'YYYY-MM-DD'"
        ]
        assert result.transformation_summary["r1"] == {"transformedCount": 2, "targetFormat": "YYYY-MM-DD"}

    def test_single_value(self, single_column, make_rule):
        result = _run(single_column(["31-12-2023"]), make_rule("r1", "date_format", targetFormat="YYYY-MM-DD"))
        assert _values(result) == ["2023-12-31"]
        assert result.transformation_summary["r1"]["transformedCount"] == 1

    def test_target_format(self, single_column, make_rule):
        result = _run(single_column(["31-12-2023"]), make_rule("r1", "date_format", targetFormat="DD/MM/YYYY"))
        assert _values(result) == ["31/12/2023"]

    def test_invalid_calendar_date_left_alone(self, single_column, make_rule):
        result = _run(single_column(["31-02-2023"]), make_rule("r1", "date_format"))
        assert _values(result) == ["31-02-2023"]
        assert result.transformation_summary["r1"]["transformedCount"] == 0

    def test_absent_rows_stay_absent(self, single_column, make_rule):
        result = _run(single_column([...]), make_rule("r1", "date_format"))
        assert result.cleaned_data == [{}]


class TestTimestampFormat:

    def test_default_format(self, single_column, make_rule):
        dataset = single_column([1700000000, "15-01-2024 14:30", "", 0, "garbage"])
        result = _run(dataset, make_rule("r1", "timestamp_format"))

        assert _values(result) == ["2023-11-14 22:13:20", "2024-01-15 14:30:00", "", 0, "garbage"]
        assert result.applied_transformations == [
            "Transformed 2 timestamps in column 'value' to format 'YYYY-MM-DD HH:mm:ss'"
        ]
        assert result.transformation_summary["r1"]["transformedCount"] == 2

    def test_unix_and_iso(self, single_column, make_rule):
        unix = _run(single_column(["2024-01-15T14:30:45Z"]), make_rule("r1", "timestamp_format", targetFormat="unix"))
        assert _values(unix) == ["1705329045"]

        iso = _run(single_column([1700000000000]), make_rule("r1", "timestamp_format", targetFormat="iso"))
        assert _values(iso) == ["2023-11-14T22:13:20.000Z"]


class TestNumberFormat:

    def test_integer_rounds_half_up(self, single_column, make_rule):
        dataset = single_column(["3.7", 2.5, "-2.5", "abc", "", None, True])
        result = _run(dataset, make_rule("r1", "number_format", operation="integer"))

        assert _values(result) == [4, 3, -2, "abc", "", None, True]
        assert result.applied_transformations == ["Applied integer operation to 3 values in column 'value'"]
        assert result.transformation_summary["r1"] == {"transformedCount": 3, "operation": "integer"}

    def test_zero_is_a_number(self, single_column, make_rule):
        result = _run(single_column([0, "0"]), make_rule("r1", "number_format", operation="integer"))
        assert _values(result) == [0, 0]
        assert result.transformation_summary["r1"]["transformedCount"] == 2

    def test_default_operation_is_integer(self, single_column, make_rule):
        result = _run(single_column(["1.5"]), make_rule("r1", "number_format"))
        assert _values(result) == [2]

    def test_ceiling_and_floor(self, single_column, make_rule):
        ceiling = _run(single_column(["1.2", -1.8]), make_rule("r1", "number_format", operation="ceiling"))
        assert _values(ceiling) == [2, -1]
        floor = _run(single_column(["1.8", -1.2]), make_rule("r1", "number_format", operation="floor"))
        assert _values(floor) == [1, -2]

    def test_decimal(self, single_column, make_rule):
        result = _run(single_column(["3.14159", 2.005]), make_rule("r1", "number_format", operation="decimal", decimalPlaces=2))
        assert _values(result) == [3.14, 2.01]

    def test_decimal_places_from_text(self, single_column, make_rule):
        result = _run(single_column([3.14159]), make_rule("r1", "number_format", operation="decimal", decimalPlaces="1"))
        assert _values(result) == [3.1]

    def test_invalid_decimal_places_use_default(self, single_column, make_rule):
        result = _run(single_column([3.14159]), make_rule("r1", "number_format", operation="decimal", decimalPlaces=-1))
        assert _values(result) == [3.14]

    def test_decimal_large_magnitudes(self, single_column, make_rule):
        result = _run(single_column(["1e30", -4.5e40]), make_rule("r1", "number_format", operation="decimal", decimalPlaces=2))
        assert _values(result) == [1e30, -4.5e40]
        assert result.transformation_summary["r1"]["transformedCount"] == 2

    def test_decimal_maximum_places(self, single_column, make_rule):
        rule = make_rule("r1", "number_format", operation="decimal", decimalPlaces=15)
        result = _run(single_column(["123456789012345.5"]), rule)
        assert _values(result) == [123456789012345.5]

    def test_unknown_operation_changes_nothing(self, single_column, make_rule):
        result = _run(single_column(["4.2"]), make_rule("r1", "number_format", operation="sqrt"))
        assert _values(result) == ["4.2"]
        assert result.applied_transformations == ["Applied sqrt operation to 0 values in column 'value'"]


class TestRemoveDuplicates:

    def test_first_occurrence_kept(self, customers, make_rule):
        result = _run(customers, make_rule("dedupe", "remove_duplicates", column=""))

        assert len(result.cleaned_data) == 5
        assert result.rows_removed == 1
        assert [row["customer_id"] for row in result.cleaned_data] == ["1", "2", "3", "4", "5"]
        assert result.applied_transformations == ["Removed 1 duplicate rows"]
        assert result.transformation_summary["dedupe"] == {"duplicateCount": 1, "uniqueRows": 5}

    def test_idempotent(self, customers, make_rule):
        result = clean(customers, [
            make_rule("first", "remove_duplicates"),
            make_rule("second", "remove_duplicates"),
        ])
        assert result.rows_removed == 1
        assert result.transformation_summary["second"]["duplicateCount"] == 0

    def test_key_order_ignored(self, make_rule):
        dataset = {"headers": ["a", "b"], "data": [{"a": "1", "b": "2"}, {"b": "2", "a": "1"}]}
        assert _run(dataset, make_rule("r1", "remove_duplicates")).rows_removed == 1


class TestSubsetColumn:

    def test_start_and_length(self, single_column, make_rule):
        dataset = single_column(["abcdef", "xy", "", None, 42])
        result = _run(dataset, make_rule("r1", "subset_column", startIndex=1, length=3))

        assert _values(result) == ["bcd", "y", "", None, 42]
        assert result.applied_transformations == ["Extracted substring from 2 values in column 'value'"]
        assert result.transformation_summary["r1"] == {"transformedCount": 2, "startIndex": 1, "length": 3}

    def test_missing_length_keeps_rest(self, single_column, make_rule):
        result = _run(single_column(["abcdef"]), make_rule("r1", "subset_column", startIndex=2))
        assert _values(result) == ["cdef"]
        assert result.transformation_summary["r1"]["length"] is None

    def test_non_positive_length_keeps_rest(self, single_column, make_rule):
        result = _run(single_column(["abcdef"]), make_rule("r1", "subset_column", startIndex=2, length=0))
        assert _values(result) == ["cdef"]

    def test_negative_start_clamped(self, single_column, make_rule):
        result = _run(single_column(["abcdef"]), make_rule("r1", "subset_column", startIndex=-2, length=2))
        assert _values(result) == ["ab"]

    def test_unchanged_values_still_counted(self, single_column, make_rule):
        result = _run(single_column(["ab"]), make_rule("r1", "subset_column", startIndex=0))
        assert result.transformation_summary["r1"]["transformedCount"] == 1


class TestReplaceNulls:

    def test_blank_and_null_literal(self, single_column, make_rule):
        dataset = single_column(["", None, ..., "null", "NULL", "x"])
        result = _run(dataset, make_rule("r1", "replace_nulls", replacementValue="N/A"))

        assert _values(result) == ["N/A", "N/A", "N/A", "N/A", "NULL", "x"]
        assert result.applied_transformations == ["Replaced 4 null values in column 'value' with 'N/A'"]
        assert result.transformation_summary["r1"] == {"replacedCount": 4, "replacementValue": "N/A"}

    def test_zero_is_not_null(self, single_column, make_rule):
        result = _run(single_column([0, False]), make_rule("r1", "replace_nulls", replacementValue="N/A"))
        assert _values(result) == [0, False]

    def test_default_replacement_is_empty(self, single_column, make_rule):
        result = _run(single_column([None]), make_rule("r1", "replace_nulls"))
        assert _values(result) == [""]
        assert result.transformation_summary["r1"]["replacedCount"] == 1

    def test_numeric_replacement_rendered_as_text(self, single_column, make_rule):
        result = _run(single_column([""]), make_rule("r1", "replace_nulls", replacementValue=0))
        assert _values(result) == ["0"]


class TestCoalesce:

    def test_fallback_columns_in_order(self, contacts, make_rule):
        rule = make_rule("r1", "coalesce", column="phone", fallbackColumns=["mobile", "home_phone"])
        result = _run(contacts, rule)

        assert _values(result, "phone") == ["555-1234", "555-9999", "555-4321"]
        assert result.applied_transformations == [
            "Coalesced 2 values in column 'phone' using fallback columns"
        ]
        assert result.transformation_summary["r1"] == {
            "coalescedCount": 2,
            "fallbackColumns": ["mobile", "home_phone"],
            "defaultValue": "",
        }

    def test_single_row(self, make_rule):
        dataset = {
            "headers": ["phone", "mobile", "home_phone"],
            "data": [{"phone": "", "mobile": "555-1234", "home_phone": ""}],
        }
        rule = make_rule("r1", "coalesce", column="phone", fallbackColumns=["mobile", "home_phone"])
        result = _run(dataset, rule)
        assert result.cleaned_data[0]["phone"] == "555-1234"
        assert result.transformation_summary["r1"]["coalescedCount"] == 1

    def test_default_value(self, contacts, make_rule):
        rule = make_rule("r1", "coalesce", column="phone", fallbackColumns=["mobile"], defaultValue="unknown")
        result = _run(contacts, rule)

        assert _values(result, "phone") == ["555-1234", "555-9999", "unknown"]
        assert result.applied_transformations == [
            "Coalesced 2 values in column 'phone' using fallback columns and default value 'unknown'"
        ]

    def test_comma_separated_fallbacks(self, contacts, make_rule):
        rule = make_rule("r1", "coalesce", column="phone", fallbackColumns="mobile, home_phone")
        result = _run(contacts, rule)
        assert result.transformation_summary["r1"]["fallbackColumns"] == ["mobile", "home_phone"]
        assert result.transformation_summary["r1"]["coalescedCount"] == 2

    def test_zero_counts_as_empty(self, make_rule):
        dataset = {"headers": ["a", "b"], "data": [{"a": 0, "b": "x"}, {"a": "0", "b": "y"}]}
        result = _run(dataset, make_rule("r1", "coalesce", column="a", fallbackColumns=["b"]))
        assert _values(result, "a") == ["x", "0"]

    def test_nothing_to_fill(self, contacts, make_rule):
        result = _run(contacts, make_rule("r1", "coalesce", column="name", fallbackColumns=["phone"]))
        assert result.transformation_summary["r1"]["coalescedCount"] == 0


class TestTextManipulation:

    def test_add_at_end(self, single_column, make_rule):
        result = _run(single_column(["a", "", None]), make_rule("r1", "text_manipulation", operation="add", text="_x"))
        assert _values(result) == ["a_x", "", None]
        assert result.applied_transformations == ["Applied text add to 1 values in column 'value'"]

    def test_add_at_start(self, single_column, make_rule):
        rule = make_rule("r1", "text_manipulation", operation="add", text="pre-", position="start")
        assert _values(_run(single_column(["a"]), rule)) == ["pre-a"]

    def test_remove_every_occurrence(self, single_column, make_rule):
        rule = make_rule("r1", "text_manipulation", operation="remove", text="-")
        result = _run(single_column(["a-b-c", "abc"]), rule)
        assert _values(result) == ["abc", "abc"]
        assert result.transformation_summary["r1"]["transformedCount"] == 1

    def test_replace(self, single_column, make_rule):
        rule = make_rule("r1", "text_manipulation", operation="replace", searchText="-", text="_")
        result = _run(single_column(["foo-bar"]), rule)

        assert _values(result) == ["foo_bar"]
        assert result.applied_transformations == [
            "Applied text replace to 1 values in column 'value' (replaced \"-\" with \"_\")"
        ]
        assert result.transformation_summary["r1"] == {
            "transformedCount": 1,
            "operation": "replace",
            "text": "_",
            "position": "end",
            "searchText": "-",
        }

        again = _run({"headers": result.headers, "data": result.cleaned_data}, rule)
        assert _values(again) == ["foo_bar"]
        assert again.transformation_summary["r1"]["transformedCount"] == 0

    def test_search_text_is_literal(self, single_column, make_rule):
        rule = make_rule("r1", "text_manipulation", operation="replace", searchText=".", text="!")
        assert _values(_run(single_column(["a.b", "ab"]), rule)) == ["a!b", "ab"]

    def test_empty_search_text_is_no_op(self, single_column, make_rule):
        rule = make_rule("r1", "text_manipulation", operation="replace", searchText="", text="x")
        result = _run(single_column(["abc"]), rule)
        assert _values(result) == ["abc"]
        assert result.transformation_summary["r1"]["transformedCount"] == 0

    @pytest.mark.parametrize("operation", ["reverse", "upper"])
    def test_unknown_operation(self, single_column, make_rule, operation):
        rule = make_rule("r1", "text_manipulation", operation=operation, text="x")
        result = _run(single_column(["abc"]), rule)
        assert _values(result) == ["abc"]
        assert result.transformation_summary["r1"]["transformedCount"] == 0


class TestUnknownType:

    def test_recorded_as_no_op(self, customers, make_rule):
        result = _run(customers, make_rule("r1", "pivot", column="status"))

        assert result.cleaned_data == customers["data"]
        assert result.applied_transformations == ["Unknown transformation type: pivot"]
        assert result.transformation_summary == {"r1": {}}
        assert result.rows_removed == 0
