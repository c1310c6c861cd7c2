from .service import (
    DEFAULT_ICON,
    add_todo_item,
    create_todo_list,
    delete_todo_item,
    delete_todo_list,
    find_item,
    list_visible_todo_lists,
    update_todo_item,
    update_todo_list,
)

__all__ = [
    "DEFAULT_ICON",
    "add_todo_item",
    "create_todo_list",
    "delete_todo_item",
    "delete_todo_list",
    "find_item",
    "list_visible_todo_lists",
    "update_todo_item",
    "update_todo_list",
]
