"""Tests for rapidfront.generator.planner."""

from __future__ import annotations

import pytest

from rapidfront.generator.grouper import group_modules
from rapidfront.generator.planner import (
    INDEX_HEADER,
    TYPES_HEADER,
    file_extension,
    plan_file_name,
    plan_folder_name,
    plan_index,
    plan_module_path,
    plan_types,
    reachable_schemas,
)
from rapidfront.models import (
    EndpointRecord,
    HTTPMethod,
    Language,
    Library,
    ModuleRecord,
    ResponseRecord,
)
from rapidfront.parser.catalog import SchemaCatalog, index_schemas


# ---------------------------------------------------------------------------
# File and folder names
# ---------------------------------------------------------------------------


class TestFileNames:
    """Test library-specific file naming."""

    @pytest.mark.parametrize(
        ("library", "language", "expected"),
        [
            (Library.ZUSTAND, Language.TYPESCRIPT, "useUsersStore.ts"),
            (Library.REDUX_TOOLKIT, Language.TYPESCRIPT, "usersSlice.ts"),
            (Library.AXIOS_HOOKS, Language.JAVASCRIPT, "useUsers.js"),
            (Library.FETCH_API, Language.TYPESCRIPT, "useUsers.ts"),
        ],
    )
    def test_plan_file_name(self, library: Library, language: Language, expected: str) -> None:
        assert plan_file_name("Users", library, language) == expected

    def test_file_extension(self) -> None:
        assert file_extension(Language.TYPESCRIPT) == ".ts"
        assert file_extension(Language.JAVASCRIPT) == ".js"

    def test_folder_name_is_kebab_case(self) -> None:
        assert plan_folder_name("UserManagement") == "user-management"

    def test_module_path(self, users_modules: list[ModuleRecord]) -> None:
        history = users_modules[2]
        assert plan_module_path(history, Library.REDUX_TOOLKIT, Language.TYPESCRIPT) == (
            "order-history/orderHistorySlice.ts"
        )


# ---------------------------------------------------------------------------
# Index file
# ---------------------------------------------------------------------------


class TestPlanIndex:
    """Test the re-exporting index file."""

    def test_zustand_typescript(self, users_modules: list[ModuleRecord]) -> None:
        index = plan_index(users_modules, Library.ZUSTAND, Language.TYPESCRIPT)
        assert index == (
            f"{INDEX_HEADER}\n"
            "\n"
            "export { useUsersStore } from './users/useUsersStore';\n"
            "export { useOrdersStore } from './orders/useOrdersStore';\n"
            "export { useOrderHistoryStore } from './order-history/useOrderHistoryStore';\n"
            "\n"
            "export * from './types';\n"
        )

    def test_redux_exports_reducer_and_actions(self, users_modules: list[ModuleRecord]) -> None:
        index = plan_index(users_modules[:1], Library.REDUX_TOOLKIT, Language.JAVASCRIPT)
        assert index == (
            f"{INDEX_HEADER}\n"
            "\n"
            "export { default as usersReducer } from './users/usersSlice';\n"
            "export * from './users/usersSlice';\n"
        )

    def test_hooks_export_star(self, users_modules: list[ModuleRecord]) -> None:
        index = plan_index(users_modules[:1], Library.FETCH_API, Language.TYPESCRIPT)
        assert "export * from './users/useUsers';" in index

    def test_javascript_has_no_types_export(self, users_modules: list[ModuleRecord]) -> None:
        index = plan_index(users_modules, Library.AXIOS_HOOKS, Language.JAVASCRIPT)
        assert "./types" not in index


# ---------------------------------------------------------------------------
# Types file
# ---------------------------------------------------------------------------


class TestPlanTypes:
    """Test the TypeScript types file."""

    def test_reachable_schemas_follow_properties(
        self, users_modules: list[ModuleRecord], users_catalog: SchemaCatalog
    ) -> None:
        assert reachable_schemas(users_modules, users_catalog) == [
            "User",
            "NewUser",
            "Address",
            "Order",
        ]

    def test_unused_schema_excluded(
        self, users_modules: list[ModuleRecord], users_catalog: SchemaCatalog
    ) -> None:
        assert "Unused" not in plan_types(users_modules, users_catalog)

    def test_interface_rendering(
        self, users_modules: list[ModuleRecord], users_catalog: SchemaCatalog
    ) -> None:
        types = plan_types(users_modules, users_catalog)
        assert types.startswith(TYPES_HEADER + "\n\n")
        assert (
            "export interface User {\n"
            "  id: number;\n"
            "  name: string;\n"
            "  email?: string;\n"
            "  address?: Address;\n"
            "}"
        ) in types
        assert "  'zip-code'?: string;" in types
        assert "  items?: string[];" in types
        assert types.endswith("}\n")

    def test_unknown_property_reference_prints_any(self) -> None:
        catalog = index_schemas(
            {
                "definitions": {
                    "Box": {"properties": {"inner": {"$ref": "#/definitions/Missing"}}},
                }
            }
        )
        module = _module_referencing("Box")
        assert "  inner?: any;" in plan_types([module], catalog)

    def test_invalid_schema_names_declared_as_identifiers(self) -> None:
        catalog = index_schemas(
            {
                "definitions": {
                    "app.User": {
                        "properties": {"profile": {"$ref": "#/definitions/user-dto"}},
                    },
                    "user-dto": {"properties": {"bio": {"type": "string"}}},
                }
            }
        )
        module = _module_referencing("app.User")
        assert reachable_schemas([module], catalog) == ["app.User", "user-dto"]
        types = plan_types([module], catalog)
        assert "export interface AppUser {\n  profile?: UserDto;\n}" in types
        assert "export interface UserDto {" in types
        assert "app.User" not in types

    def test_no_schemas(self) -> None:
        assert plan_types([], index_schemas({})) == TYPES_HEADER + "\n"


def _module_referencing(schema_name: str) -> ModuleRecord:
    endpoint = EndpointRecord(
        operation_id="getBox",
        call_name="getBox",
        method=HTTPMethod.GET,
        path="/box",
        responses=[ResponseRecord(status_code="200", schema_ref=schema_name)],
    )
    catalog = index_schemas({"definitions": {schema_name: {}}})
    return group_modules([endpoint], catalog)[0]
