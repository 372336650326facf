"""Synchronization helpers for end-to-end tests of Phoenix LiveView UIs."""

from .actions import click_and_settle, fill_and_validate, submit_and_settle
from .assertions import assert_collection_count, assert_message_banner
from .config import E2EConfig, SyncConfig
from .connection import ConnectionAccessor, is_connected, wait_for_connected
from .errors import AssertionTimeout, MissingCapability, SyncError, Timeout
from .events import EventSubscriber, wait_for_event
from .network import DriverNetworkIdle, NetworkActivity
from .settle import SettlementDetector, wait_for_settlement
from .wait import Deadline, PagePredicate, wait_for_predicate

__all__ = [
    "AssertionTimeout",
    "ConnectionAccessor",
    "Deadline",
    "DriverNetworkIdle",
    "E2EConfig",
    "EventSubscriber",
    "MissingCapability",
    "NetworkActivity",
    "PagePredicate",
    "SettlementDetector",
    "SyncConfig",
    "SyncError",
    "Timeout",
    "assert_collection_count",
    "assert_message_banner",
    "click_and_settle",
    "fill_and_validate",
    "is_connected",
    "submit_and_settle",
    "wait_for_connected",
    "wait_for_event",
    "wait_for_predicate",
    "wait_for_settlement",
]
