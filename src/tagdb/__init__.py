"""tagdb - Hierarchical tags and tag queries for image collections."""

from importlib.metadata import version, PackageNotFoundError

_pkg = __package__.split('.')[0]

try:
    __version__: str = version(_pkg)
except PackageNotFoundError:
    __version__: str = "0.0.1-dev"  # fallback for running directly from source

from .core import (
    # Items
    create_item,
    delete_item,
    delete_item_by_path,
    get_item,
    get_item_by_path,
    item_path,
    update_item_path,
    list_items,
    # Tags
    create_tag,
    create_tags,
    delete_tag,
    delete_tags,
    rename_tag,
    get_tag,
    get_tag_by_name,
    tag_name,
    list_tags,
    # Assignment
    assign,
    assign_tags,
    unassign,
    tags_of_item,
    items_with_tag,
    # Hierarchy
    add_hierarchy_edge,
    remove_hierarchy_edge,
    has_edge,
    ancestors,
    descendants,
    parents,
    children,
    list_edges,
    # Search
    compile_and_run,
    search_tags,
    # Namespaces
    create_namespace,
    delete_namespace,
    rename_namespace,
    get_namespace_by_name,
    namespace_name,
    list_namespaces,
    set_namespace,
    clear_namespace,
    namespace_of_tag,
    tags_in_namespace,
    # Maintenance
    orphan_tags,
    orphan_namespaces,
    orphan_items,
    delete_all,
)
from .errors import (
    TagDBError,
    UniqueViolation,
    NotFound,
    UnknownTag,
    HierarchyError,
    DuplicateEdge,
    WouldCreateCycle,
)
from .store import Edge, Item, Namespace, Tag

__all__ = [
    # Items
    "create_item",
    "delete_item",
    "delete_item_by_path",
    "get_item",
    "get_item_by_path",
    "item_path",
    "update_item_path",
    "list_items",
    # Tags
    "create_tag",
    "create_tags",
    "delete_tag",
    "delete_tags",
    "rename_tag",
    "get_tag",
    "get_tag_by_name",
    "tag_name",
    "list_tags",
    # Assignment
    "assign",
    "assign_tags",
    "unassign",
    "tags_of_item",
    "items_with_tag",
    # Hierarchy
    "add_hierarchy_edge",
    "remove_hierarchy_edge",
    "has_edge",
    "ancestors",
    "descendants",
    "parents",
    "children",
    "list_edges",
    # Search
    "compile_and_run",
    "search_tags",
    # Namespaces
    "create_namespace",
    "delete_namespace",
    "rename_namespace",
    "get_namespace_by_name",
    "namespace_name",
    "list_namespaces",
    "set_namespace",
    "clear_namespace",
    "namespace_of_tag",
    "tags_in_namespace",
    # Maintenance
    "orphan_tags",
    "orphan_namespaces",
    "orphan_items",
    "delete_all",
    # Errors
    "TagDBError",
    "UniqueViolation",
    "NotFound",
    "UnknownTag",
    "HierarchyError",
    "DuplicateEdge",
    "WouldCreateCycle",
    # Rows
    "Edge",
    "Item",
    "Namespace",
    "Tag",
]
