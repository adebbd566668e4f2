"""Compound-Document Flattener — verifies included() ordering, dedup and filtering.

Tests cover:
    - post#1 scenario: user#9 once, at its first depth-first position
    - Depth-first per root relationship before the next root relationship
    - Idempotence with zero extra deferred evaluations
    - Absent (None) resources and unknown relationships never appear
    - Requested paths deeper than the declarations do not crash
"""

from jsonapi_compound.core.domain_types import UnknownRelationshipPolicy
from jsonapi_compound.core.flatten import flatten, flatten_included, unique_resources

from tests.core.fakes import (
    CountingResolvers, Record, RecordResource, build_post_graph, identities, make_request,
)


def test_post_scenario_includes_shared_author_once():
    post = build_post_graph(CountingResolvers())
    included = post.included(make_request("author,comments,comments.author"))
    assert identities(included) == ["users:9", "comments:5", "comments:6"]


def test_included_is_idempotent_and_evaluates_nothing_twice():
    resolvers = CountingResolvers()
    post = build_post_graph(resolvers)
    request = make_request("author,comments,comments.author")

    first = post.included(request)
    evaluations = resolvers.total
    second = post.included(request)

    assert identities(first) == identities(second)
    assert resolvers.total == evaluations == 3
    assert all(count == 1 for count in resolvers.calls.values())


def test_order_is_depth_first_per_root_relationship():
    company = Record("companies", 3)
    user = Record("users", 9, {"company": lambda: RecordResource(company)})
    comment = Record("comments", 5)
    post = RecordResource(Record("posts", 1, {
        "author": lambda: RecordResource(user),
        "comments": lambda: RecordResource.collection([comment]),
    }))
    included = post.included(make_request("comments,author.company"))
    assert identities(included) == ["users:9", "companies:3", "comments:5"]


def test_entity_reached_through_two_paths_is_resolved_per_path_but_emitted_once():
    resolvers = CountingResolvers()
    post = build_post_graph(resolvers)
    post.included(make_request("author,comments.author"))
    assert resolvers.calls["post.author"] == 1
    assert resolvers.calls["comment5.author"] == 1


def test_nested_path_without_declaration_is_ignored():
    user = Record("users", 9)
    post = RecordResource(Record("posts", 1, {"author": lambda: RecordResource(user)}))
    included = post.included(make_request("author.company"))
    assert identities(included) == ["users:9"]


def test_unrequested_nested_relationships_are_not_included():
    post = build_post_graph(CountingResolvers())
    included = post.included(make_request("comments"))
    assert identities(included) == ["comments:5", "comments:6"]


def test_absent_resource_is_filtered_from_included():
    post = RecordResource(Record("posts", 1, {
        "author": lambda: RecordResource(None),
        "editor": lambda: RecordResource(Record("users", 12)),
    }))
    included = post.included(make_request("author,editor"))
    assert identities(included) == ["users:12"]


def test_absent_collection_members_are_filtered():
    post = RecordResource(Record("posts", 1, {
        "comments": lambda: RecordResource.collection([
            RecordResource(None), Record("comments", 6),
        ]),
    }))
    assert identities(post.included(make_request("comments"))) == ["comments:6"]


def test_unknown_relationship_contributes_nothing_under_wrap_policy():
    class LenientResource(RecordResource):
        unknown_relationship_policy = UnknownRelationshipPolicy.WRAP

    post = LenientResource(Record("posts", 1, {
        "legacy": lambda: object(),
        "author": lambda: RecordResource(Record("users", 9)),
    }))
    assert identities(post.included(make_request("legacy,author"))) == ["users:9"]


def test_collection_primary_data_dedupes_across_members():
    shared_author = Record("users", 9)
    posts = [
        Record("posts", 1, {"author": lambda: RecordResource(shared_author)}),
        Record("posts", 2, {"author": lambda: RecordResource(shared_author)}),
        Record("posts", 3, {"author": lambda: RecordResource(Record("users", 12))}),
    ]
    collection = RecordResource.collection(posts)
    assert identities(collection.included(make_request("author"))) == ["users:9", "users:12"]


def test_three_levels_deep():
    country = Record("countries", 1)
    company = Record("companies", 3, {"country": lambda: RecordResource(country)})
    user = Record("users", 9, {"company": lambda: RecordResource(company)})
    post = RecordResource(Record("posts", 1, {"author": lambda: RecordResource(user)}))
    included = post.included(make_request("author.company.country"))
    assert identities(included) == ["users:9", "companies:3", "countries:1"]


def test_flatten_handles_arbitrary_nesting():
    assert list(flatten([1, [2, (3, [4])], []])) == [1, 2, 3, 4]


def test_unique_resources_keeps_first_occurrence():
    first = RecordResource(Record("users", 9))
    duplicate = RecordResource(Record("users", 9))
    other = RecordResource(Record("users", 12))
    result = unique_resources([first, other, duplicate])
    assert result == [first, other]
    assert result[0] is first


def test_flatten_included_filters_before_deduplicating():
    absent = RecordResource(None)
    present = RecordResource(Record("users", 9))
    assert flatten_included([[absent], [present, [present]]]) == [present]


def _comment_thread_with_employed_author():
    """post#1 declares only comments; comment#5 → author user#9 → company#3."""
    company = Record("companies", 3)
    user = Record("users", 9, {"company": lambda: RecordResource(company)})
    comment = Record("comments", 5, {"author": lambda: RecordResource(user)})
    return RecordResource(Record("posts", 1, {
        "comments": lambda: RecordResource.collection([comment]),
    }))


def test_three_levels_deep_through_a_collection():
    post = _comment_thread_with_employed_author()
    included = post.included(make_request("comments.author.company"))
    assert identities(included) == ["comments:5", "users:9", "companies:3"]


def test_paths_from_another_branch_do_not_leak_into_nested_resources():
    post = _comment_thread_with_employed_author()
    included = post.included(make_request("comments.author,author.company"))
    assert identities(included) == ["comments:5", "users:9"]
