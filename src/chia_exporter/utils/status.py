"""Node status enumerations."""

from enum import IntEnum


class SyncStatus(IntEnum):
    """Sync state of a full node or wallet, as exported."""

    NOT_SYNCED = 0
    SYNCING = 1
    SYNCED = 2

    @classmethod
    def from_flags(cls, syncing: bool, synced: bool) -> "SyncStatus":
        """
        Collapse the node's two sync flags into one value.

        A node that reports both flags is treated as still syncing.

        Args:
            syncing: Sync-in-progress flag (``sync_mode`` / ``syncing``)
            synced: Fully-synced flag

        Returns:
            SyncStatus: Combined status
        """
        if syncing:
            return cls.SYNCING
        if synced:
            return cls.SYNCED
        return cls.NOT_SYNCED


class NodeType(IntEnum):
    """Peer type codes from the node's shared protocol."""

    FULL_NODE = 1
    HARVESTER = 2
    FARMER = 3
    TIMELORD = 4
    INTRODUCER = 5
    WALLET = 6
    DATA_LAYER = 7
