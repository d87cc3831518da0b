"""Exceptions raised while synchronizing a remote schedule feed.

Every error aborts the whole sync pass.  Nothing staged during a failed pass
is ever written to the store.
"""


class FeedSyncError(Exception):
    """Base class for schedule feed sync failures."""


class FeedFormatError(FeedSyncError, ValueError):
    """A required feed cell is missing or cannot be parsed."""


class ReconciliationInvariantViolation(FeedSyncError):  # noqa: N818
    """A derived block id matched a stored block with a different span."""


class StoreError(FeedSyncError, RuntimeError):
    """The store failed to read metadata or apply a batch."""


class FeedFetchError(FeedSyncError, RuntimeError):
    """The feed document could not be downloaded."""
