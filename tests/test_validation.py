from filter_engine.specs import FilterSpec
from filter_engine.validation import validate_filter_spec, validate_filter_specs


def test_valid_specs(anchor):
    assert validate_filter_spec(FilterSpec("plant", ("A",))).is_valid is True
    result = validate_filter_spec({"columnId": "orderDate", "values": [], "dateExpression": "1 week ago"}, anchor=anchor)
    assert result.is_valid is True
    assert result.warnings == []


def test_missing_column_id():
    result = validate_filter_spec({"values": ["A"]})
    assert result.is_valid is False
    assert result.errors == ["Column id is required"]


def test_unknown_condition_and_empty_values():
    result = validate_filter_spec({"columnId": "plant", "condition": "startsWith", "values": []})
    assert result.is_valid is False
    assert "Unknown condition 'startsWith'" in result.errors
    assert "Filter must have at least one value" in result.errors


def test_unresolvable_date_expression_is_a_warning():
    result = validate_filter_spec({"columnId": "orderDate", "values": [], "dateExpression": "last tuesday"})
    assert result.is_valid is True
    assert len(result.warnings) == 1
    assert "cannot be resolved" in result.warnings[0]


def test_ordering_with_extra_values_is_a_warning():
    result = validate_filter_spec({"columnId": "qty", "condition": "greaterThan", "values": [1, 2, 3]})
    assert result.is_valid is True
    assert result.warnings == ["Condition 'greaterThan' only uses the first value; 2 ignored"]


def test_validate_filter_specs_prefixes_positions():
    result = validate_filter_specs(
        [
            {"columnId": "plant", "values": ["A"]},
            {"columnId": "", "values": ["A"]},
            {"columnId": "orderDate", "dateExpression": "whenever"},
        ]
    )
    assert result.is_valid is False
    assert result.errors == ["filters[1]: Column id is required"]
    assert result.warnings[0].startswith("filters[2]: ")


def test_validate_nothing_is_valid():
    assert validate_filter_specs(None).is_valid is True
