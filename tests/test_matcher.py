"""
tests.test_matcher

Path classification, independent of methods registered in the route table.
"""

from __future__ import annotations

import pytest

from webshop.routing.matcher import (
    Collection,
    SingleResource,
    StaticAsset,
    Unmatched,
    match_route,
)


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/", "index.html"),
        ("", "index.html"),
        ("/index.html", "/index.html"),
        ("/js/cart.js", "/js/cart.js"),
        ("/users/0123456789abcdef01234567", "/users/0123456789abcdef01234567"),
    ],
)
def test_non_api_get_is_static(path: str, expected: str) -> None:
    assert match_route("GET", path) == StaticAsset(path=expected)


def test_static_only_applies_to_get() -> None:
    assert match_route("POST", "/index.html") == Unmatched("/index.html")
    assert match_route("get", "/index.html") == StaticAsset("/index.html")


@pytest.mark.parametrize("collection", ["users", "products", "orders"])
@pytest.mark.parametrize("resource_id", ["abcdefgh", "0123456789abcdef01234567", "a1b2c3d4e5"])
def test_single_resource_ids(collection: str, resource_id: str) -> None:
    for method in ("GET", "PUT", "DELETE"):
        assert match_route(method, f"/api/{collection}/{resource_id}") == SingleResource(
            collection=collection, id=resource_id
        )


def test_single_resource_without_api_prefix() -> None:
    assert match_route("PUT", "/products/abcdefgh") == SingleResource("products", "abcdefgh")


@pytest.mark.parametrize(
    "resource_id",
    ["abcdefg", "0123456789abcdef012345678", "ABCDEFGH", "abcd-efgh", "abcdefgh\n"],
)
def test_invalid_ids_do_not_match(resource_id: str) -> None:
    assert match_route("GET", f"/api/users/{resource_id}") == Unmatched(
        f"/api/users/{resource_id}"
    )


def test_register_has_no_single_resource() -> None:
    assert isinstance(match_route("GET", "/api/register/abcdefgh"), Unmatched)


@pytest.mark.parametrize("name", ["register", "users", "products", "orders"])
def test_collections(name: str) -> None:
    match = match_route("POST", f"/api/{name}")
    assert match == Collection(name=name)
    assert match.template == f"/api/{name}"


@pytest.mark.parametrize("path", ["/api", "/api/", "/api/carts", "/api/users/", "/apiusers"])
def test_unknown_api_paths(path: str) -> None:
    assert match_route("GET", path) == Unmatched(path)
