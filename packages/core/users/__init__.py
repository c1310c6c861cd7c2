from .service import (
    can_access,
    create_user,
    delete_user,
    set_partner,
    update_user,
    visible_owner_ids,
)

__all__ = [
    "can_access",
    "create_user",
    "delete_user",
    "set_partner",
    "update_user",
    "visible_owner_ids",
]
