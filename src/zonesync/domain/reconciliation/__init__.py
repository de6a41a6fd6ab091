"""Generic reconciliation of a remote listing against local projections.

Flow of one pass (``SyncTask.run``):
1) list lightweight projections for the scope
2) classify them against the remote items through a matcher chain
3) bulk-remove unmatched projections
4) bulk-create entities for unmatched remote items
5) load full entities for matched pairs in one batch
6) reconcile fields and bulk-save only the entities that changed
"""

from __future__ import annotations

from .batching import iter_batches
from .classify import classify
from .contracts import Classification, MatchedPair, SyncOutcome, UpdateItem
from .engine import SyncTask
from .fields import FieldChange, apply_field_changes
from .load import load_update_items
from .matching import Matcher, MatcherChain

__all__ = [
    "Classification",
    "FieldChange",
    "MatchedPair",
    "Matcher",
    "MatcherChain",
    "SyncOutcome",
    "SyncTask",
    "UpdateItem",
    "apply_field_changes",
    "classify",
    "iter_batches",
    "load_update_items",
]
