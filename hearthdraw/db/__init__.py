from hearthdraw.db.database import get_session, init_db
from hearthdraw.db.operations import (
    CORE_EVENT_SETS,
    CardFilter,
    card_to_model,
    create_update_log,
    get_card_set,
    get_card_sets,
    get_cards_by_dbf_ids,
    get_cards_by_ids,
    get_cards_by_set,
    get_cards_by_sets,
    get_update_logs,
    search_cards,
    upsert_card_set,
    upsert_cards,
)

__all__ = [
    "CORE_EVENT_SETS",
    "CardFilter",
    "card_to_model",
    "create_update_log",
    "get_card_set",
    "get_card_sets",
    "get_cards_by_dbf_ids",
    "get_cards_by_ids",
    "get_cards_by_set",
    "get_cards_by_sets",
    "get_session",
    "get_update_logs",
    "init_db",
    "search_cards",
    "upsert_card_set",
    "upsert_cards",
]
