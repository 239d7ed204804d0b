"""Permission tokens carried on a resolved actor."""

from typing import Final

# See every channel and post regardless of visibility flag or ownership.
IGNORE_VISIBILITY: Final = "ignore_visibility"
# Mutate or delete any channel; also accepted for forced post and comment deletes.
MANAGE_CHANNELS: Final = "manage_channels"
MANAGE_TAGS: Final = "manage_tags"

ALL_PERMISSIONS: Final = frozenset({IGNORE_VISIBILITY, MANAGE_CHANNELS, MANAGE_TAGS})
