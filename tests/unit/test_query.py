import pytest

from nhncloud_cli.errors import EvaluationFailure, InvalidExpression
from nhncloud_cli.query import apply_query, compile_query

DOCUMENT = {
    "registries": [
        {"id": 1, "name": "web", "status": "AVAILABLE", "isPublic": True},
        {"id": 2, "name": "batch", "status": "DELETING", "isPublic": False},
        {"id": 3, "name": "infra", "status": "AVAILABLE", "isPublic": False},
    ],
    "totalCount": 3,
}


@pytest.mark.unit
class TestApplyQuery:
    @pytest.mark.parametrize("expression", [None, ""])
    def test_no_expression_returns_document_unchanged(self, expression):
        assert apply_query(DOCUMENT, expression) is DOCUMENT

    def test_field_access(self):
        assert apply_query(DOCUMENT, "totalCount") == 3

    def test_projection(self):
        assert apply_query(DOCUMENT, "registries[].name") == ["web", "batch", "infra"]

    def test_filter_expression(self):
        result = apply_query(DOCUMENT, "registries[?status=='AVAILABLE'].id")
        assert result == [1, 3]

    def test_index_and_slice(self):
        assert apply_query(DOCUMENT, "registries[0].name") == "web"
        assert apply_query(DOCUMENT, "registries[1:].name") == ["batch", "infra"]

    def test_multi_select_and_pipe(self):
        result = apply_query(DOCUMENT, "registries[?isPublic] | [0].{n: name, s: status}")
        assert result == {"n": "web", "s": "AVAILABLE"}

    def test_no_match_becomes_empty_list(self):
        assert apply_query(DOCUMENT, "missing") == []

    def test_index_into_scalar_becomes_empty_list(self):
        assert apply_query(DOCUMENT, "totalCount[0]") == []

    def test_falsy_results_are_kept(self):
        assert apply_query({"count": 0, "flag": False}, "count") == 0
        assert apply_query({"count": 0, "flag": False}, "flag") is False


@pytest.mark.unit
class TestQueryErrors:
    @pytest.mark.parametrize("expression", ["registries[", "registries[?name==", "{a: b"])
    def test_malformed_expression_is_invalid(self, expression):
        with pytest.raises(InvalidExpression):
            apply_query(DOCUMENT, expression)

    def test_compile_query_reports_expression(self):
        with pytest.raises(InvalidExpression, match="registries\\["):
            compile_query("registries[")

    def test_function_type_mismatch_is_evaluation_failure(self):
        with pytest.raises(EvaluationFailure):
            apply_query(DOCUMENT, "length(totalCount)")

    def test_unknown_function_is_evaluation_failure(self):
        with pytest.raises(EvaluationFailure):
            apply_query(DOCUMENT, "no_such_function(registries)")
