"""Error Hierarchy — verifies codes, HTTP statuses and the JSON:API error envelope."""

from jsonapi_compound.core.errors import (
    ErrorCategory, ErrorSeverity, InvalidIncludeError, JsonApiError,
    ResourceNotFoundError, UnknownRelationshipError,
)


def test_invalid_include_points_at_query_parameter():
    error = InvalidIncludeError("bad include", "include")
    response = error.to_response()["errors"][0]
    assert response["status"] == "400"
    assert response["code"] == "INVALID_INCLUDE"
    assert response["source"] == {"parameter": "include"}
    assert error.category is ErrorCategory.VALIDATION


def test_resource_not_found_is_404():
    error = ResourceNotFoundError("posts", "99")
    assert error.http_status == 404
    assert error.message == "posts '99' not found"
    assert "source" not in error.to_response()["errors"][0]


def test_unknown_relationship_hides_internals_from_detail():
    error = UnknownRelationshipError("author", "comments.", "dict")
    response = error.to_response()["errors"][0]
    assert response["status"] == "500"
    assert response["code"] == "UNKNOWN_RELATIONSHIP"
    assert "dict" not in response["detail"]
    assert error.context.debug_info == {"value_type": "dict"}
    assert "comments.author" in error.message
    assert error.severity is ErrorSeverity.CRITICAL


def test_all_errors_share_base_class():
    for error in (
        InvalidIncludeError("x", "include"),
        ResourceNotFoundError("posts", "1"),
        UnknownRelationshipError("author", "", "int"),
    ):
        assert isinstance(error, JsonApiError)
        assert error.to_response()["errors"][0]["meta"]["severity"] == error.severity.value
