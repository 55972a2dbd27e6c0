"""Plan output file names and the aggregate files of a generation run.

Module files live in one folder per module::

    <output>/
        users/useUsersStore.ts
        user-management/useUserManagementStore.ts
        index.ts
        types.ts          (TypeScript only)
        README.md

File names depend on the library, folder names are the kebab-case module
name. No collision detection is performed: two modules with the same folder
and file name map to the same path and the later one wins when written.
"""

from __future__ import annotations

from typing import AbstractSet, Iterable

from rapidfront.generator.helpers import property_key, referenced_type_names, type_reference
from rapidfront.generator.renderer import TemplateRenderer
from rapidfront.models import GenerationOptions, Language, Library, ModuleRecord
from rapidfront.naming import lower_first, to_kebab_case, type_identifier
from rapidfront.parser.catalog import SchemaCatalog
from rapidfront.parser.types import base_type_name, resolve_type

INDEX_HEADER = "// Auto-generated index file"
TYPES_HEADER = "// Auto-generated type definitions"


def file_extension(language: Language) -> str:
    """``.ts`` for TypeScript, ``.js`` for JavaScript."""
    return ".ts" if language == Language.TYPESCRIPT else ".js"


def plan_file_name(module_name: str, library: Library, language: Language) -> str:
    """Library-specific file name of a module.

    * zustand: ``use<Module>Store``
    * redux-toolkit: ``<module>Slice``
    * axios-hooks, fetch-api: ``use<Module>``
    """
    if library == Library.ZUSTAND:
        stem = f"use{module_name}Store"
    elif library == Library.REDUX_TOOLKIT:
        stem = f"{lower_first(module_name)}Slice"
    else:
        stem = f"use{module_name}"
    return stem + file_extension(language)


def plan_folder_name(module_name: str) -> str:
    """Kebab-case folder name of a module: ``UserManagement`` -> ``user-management``."""
    return to_kebab_case(module_name)


def plan_module_path(module: ModuleRecord, library: Library, language: Language) -> str:
    """POSIX path of a module file relative to the output directory."""
    folder = plan_folder_name(module.module_name)
    return f"{folder}/{plan_file_name(module.module_name, library, language)}"


def plan_index(modules: Iterable[ModuleRecord], library: Library, language: Language) -> str:
    """Render the index file re-exporting every module."""
    ext = file_extension(language)
    lines = [INDEX_HEADER, ""]
    for module in modules:
        stem = plan_file_name(module.module_name, library, language)[: -len(ext)]
        module_path = f"./{plan_folder_name(module.module_name)}/{stem}"
        if library == Library.ZUSTAND:
            lines.append(f"export {{ use{module.module_name}Store }} from '{module_path}';")
        elif library == Library.REDUX_TOOLKIT:
            reducer = f"{lower_first(module.module_name)}Reducer"
            lines.append(f"export {{ default as {reducer} }} from '{module_path}';")
            lines.append(f"export * from '{module_path}';")
        else:
            lines.append(f"export * from '{module_path}';")

    if language == Language.TYPESCRIPT:
        lines.append("")
        lines.append("export * from './types';")
    return "\n".join(lines) + "\n"


def reachable_schemas(modules: Iterable[ModuleRecord], catalog: SchemaCatalog) -> list[str]:
    """Names of the catalog schemas the generated code can reach.

    Starts from every schema a module references or imports and follows
    property types transitively. The result keeps catalog order.
    """
    known = frozenset(catalog)
    pending: list[str] = []
    for module in modules:
        pending.extend(s.name for s in module.referenced_schemas)
        pending.extend(referenced_type_names(module, known))

    reached: set[str] = set()
    while pending:
        name = pending.pop()
        if name in reached or name not in catalog:
            continue
        reached.add(name)
        for node in catalog[name].properties.values():
            pending.append(base_type_name(resolve_type(node)))

    return [name for name in catalog if name in reached]


def plan_types(modules: Iterable[ModuleRecord], catalog: SchemaCatalog) -> str:
    """Render the TypeScript types file, one interface per reachable schema.

    Properties not listed in ``required`` are optional. Property types come
    from :func:`~rapidfront.parser.types.resolve_type`. Interfaces are
    named by :func:`~rapidfront.naming.type_identifier`.
    """
    names = reachable_schemas(modules, catalog)
    known: AbstractSet[str] = frozenset(catalog)
    blocks = [TYPES_HEADER]
    for name in names:
        record = catalog[name]
        lines = [f"export interface {type_identifier(name)} {{"]
        for prop_name, node in record.properties.items():
            optional = "" if prop_name in record.required else "?"
            prop_type = type_reference(resolve_type(node), known)
            lines.append(f"  {property_key(prop_name)}{optional}: {prop_type};")
        lines.append("}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks).rstrip("\n") + "\n"


def plan_readme(
    modules: list[ModuleRecord],
    options: GenerationOptions,
    renderer: TemplateRenderer,
) -> str:
    """Render ``README.md`` with usage examples for the chosen library."""
    return renderer.render_readme(modules, options)
