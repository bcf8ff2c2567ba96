"""
Scorecard services.

Sport classification, summary composition and the extraction pipeline.
"""

from scorecard.services.pipeline import extract_card_fields, process_listing
from scorecard.services.reference_db import ReferenceDatabase
from scorecard.services.sport_classifier import (
    SportClassifier,
    build_sport_classifier,
    classify_by_keywords,
)
from scorecard.services.sport_lookup import SportLookupClient, get_sport_lookup_client
from scorecard.services.summary_title import compose_summary_title

__all__ = [
    "ReferenceDatabase",
    "SportClassifier",
    "SportLookupClient",
    "build_sport_classifier",
    "classify_by_keywords",
    "compose_summary_title",
    "extract_card_fields",
    "get_sport_lookup_client",
    "process_listing",
]
