from scorecard.db.database import get_session, init_db
from scorecard.db.operations import (
    apply_record,
    card_to_model,
    delete_card,
    get_card,
    insert_card,
    list_cards,
    listing_from_card,
    update_card,
)

__all__ = [
    "apply_record",
    "card_to_model",
    "delete_card",
    "get_card",
    "get_session",
    "init_db",
    "insert_card",
    "list_cards",
    "listing_from_card",
    "update_card",
]
