"""
webshop.routing.table

Declarative route table.

Responsibilities:
- One `RouteRule` per (method, path template) with its auth, role and body requirements.
- Derive the allowed-methods table used for 405 checks and CORS preflight answers.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from webshop.controllers import orders, products, users
from webshop.domain import Role
from webshop.routing.context import Handler


@dataclass(frozen=True, slots=True)
class RouteRule:
    method: str
    template: str
    handler: Handler
    authenticate: bool = True
    # Checked right after authentication.
    required_role: Role | None = None
    # Requires `Content-Type: application/json` (400 otherwise).
    json_body: bool = False
    # Checked after the content-type check.
    forbidden_role: Role | None = None
    parse_body: bool = False


ROUTES: tuple[RouteRule, ...] = (
    # Collections
    RouteRule(
        "POST",
        "/api/register",
        users.register_user,
        authenticate=False,
        json_body=True,
        parse_body=True,
    ),
    RouteRule("GET", "/api/users", users.list_users, required_role=Role.admin),
    RouteRule("GET", "/api/products", products.list_products),
    RouteRule(
        "POST",
        "/api/products",
        products.create_product,
        required_role=Role.admin,
        json_body=True,
        parse_body=True,
    ),
    RouteRule("GET", "/api/orders", orders.list_orders),
    RouteRule(
        "POST",
        "/api/orders",
        orders.create_order,
        json_body=True,
        forbidden_role=Role.admin,
        parse_body=True,
    ),
    # Single resources
    RouteRule("GET", "/api/users/{id}", users.view_user),
    RouteRule("PUT", "/api/users/{id}", users.update_user, parse_body=True),
    RouteRule("DELETE", "/api/users/{id}", users.delete_user),
    RouteRule("GET", "/api/products/{id}", products.view_product),
    RouteRule(
        "PUT",
        "/api/products/{id}",
        products.update_product,
        required_role=Role.admin,
        parse_body=True,
    ),
    RouteRule(
        "DELETE", "/api/products/{id}", products.delete_product, required_role=Role.admin
    ),
    RouteRule("GET", "/api/orders/{id}", orders.view_order),
)

# Role demanded for every method of a single-resource collection, checked
# before content negotiation.
RESOURCE_ROLES: Mapping[str, Role] = MappingProxyType({"users": Role.admin})


class RouteTable:
    def __init__(
        self,
        rules: Iterable[RouteRule] = ROUTES,
        *,
        resource_roles: Mapping[str, Role] = RESOURCE_ROLES,
    ) -> None:
        self._rules: dict[tuple[str, str], RouteRule] = {}
        methods: dict[str, list[str]] = {}
        for rule in rules:
            key = (rule.template, rule.method)
            if key in self._rules:
                raise ValueError(f"duplicate route: {rule.method} {rule.template}")
            self._rules[key] = rule
            methods.setdefault(rule.template, []).append(rule.method)
        self._allowed = MappingProxyType({t: tuple(m) for t, m in methods.items()})
        self._resource_roles = resource_roles

    @property
    def allowed_methods(self) -> Mapping[str, tuple[str, ...]]:
        return self._allowed

    def methods_for(self, template: str) -> tuple[str, ...]:
        return self._allowed.get(template, ())

    def find(self, template: str, method: str) -> RouteRule | None:
        return self._rules.get((template, method.upper()))

    def resource_role(self, collection: str) -> Role | None:
        return self._resource_roles.get(collection)


# --- Module Notes -----------------------------------------------------------
# Precedence of the checks themselves lives in `routing.gate`; this module only
# says what each route requires.
