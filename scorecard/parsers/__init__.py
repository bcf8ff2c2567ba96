from scorecard.parsers.card_set import extract_card_set
from scorecard.parsers.card_type import extract_card_type
from scorecard.parsers.flags import is_autograph, is_rookie
from scorecard.parsers.normalizer import normalize_title
from scorecard.parsers.numbering import extract_card_number, extract_print_run
from scorecard.parsers.player_name import (
    candidate_name_tokens,
    extract_player_name,
    repair_player_name,
)
from scorecard.parsers.year import extract_year

__all__ = [
    "candidate_name_tokens",
    "extract_card_number",
    "extract_card_set",
    "extract_card_type",
    "extract_player_name",
    "extract_print_run",
    "extract_year",
    "is_autograph",
    "is_rookie",
    "normalize_title",
    "repair_player_name",
]
