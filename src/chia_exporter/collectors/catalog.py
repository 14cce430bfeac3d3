"""Definitions of every metric the exporter publishes.

All specs are module constants built once at import time and never
mutated; collectors only read them.
"""

from ..utils.metrics import MetricSpec

WALLET_LABELS = ("wallet_id", "wallet_fingerprint")
POOL_LABELS = ("launcher_id", "pool_url")
HARVESTER_LABELS = ("harvester", "node_id")

# Full node
PEERS_COUNT = MetricSpec("chia_peers_count", "Number of peers currently connected.", ("type",))
BLOCKCHAIN_SYNC_STATUS = MetricSpec(
    "chia_blockchain_sync_status", "Sync status, 0=not synced, 1=syncing, 2=synced"
)
BLOCKCHAIN_HEIGHT = MetricSpec("chia_blockchain_height", "Current height")
BLOCKCHAIN_DIFFICULTY = MetricSpec("chia_blockchain_difficulty", "Current difficulty")
BLOCKCHAIN_SPACE = MetricSpec("chia_blockchain_space_bytes", "Estimated current netspace")
BLOCKCHAIN_TOTAL_ITERS = MetricSpec("chia_blockchain_total_iters", "Current total iterations")

# Wallet
WALLET_CONFIRMED_BALANCE = MetricSpec(
    "chia_wallet_confirmed_balance_mojo", "Confirmed wallet balance.", WALLET_LABELS
)
WALLET_UNCONFIRMED_BALANCE = MetricSpec(
    "chia_wallet_unconfirmed_balance_mojo", "Unconfirmed wallet balance.", WALLET_LABELS
)
WALLET_SPENDABLE_BALANCE = MetricSpec(
    "chia_wallet_spendable_balance_mojo", "Spendable wallet balance.", WALLET_LABELS
)
WALLET_MAX_SEND = MetricSpec("chia_wallet_max_send_mojo", "Maximum sendable amount.", WALLET_LABELS)
WALLET_PENDING_CHANGE = MetricSpec(
    "chia_wallet_pending_change_mojo", "Pending change amount.", WALLET_LABELS
)
WALLET_SYNC_STATUS = MetricSpec(
    "chia_wallet_sync_status", "Sync status, 0=not synced, 1=syncing, 2=synced", WALLET_LABELS
)
WALLET_HEIGHT = MetricSpec("chia_wallet_height", "Wallet synced height.", WALLET_LABELS)
WALLET_FARMED_AMOUNT = MetricSpec("chia_wallet_farmed_amount", "Farmed amount", WALLET_LABELS)
WALLET_REWARD_AMOUNT = MetricSpec("chia_wallet_reward_amount", "Reward amount", WALLET_LABELS)
WALLET_FEE_AMOUNT = MetricSpec("chia_wallet_fee_amount", "Fee amount", WALLET_LABELS)
WALLET_LAST_HEIGHT_FARMED = MetricSpec(
    "chia_wallet_last_height_farmed", "Last height farmed", WALLET_LABELS
)
WALLET_POOL_REWARD_AMOUNT = MetricSpec(
    "chia_wallet_pool_reward_amount", "Pool Reward amount", WALLET_LABELS
)

# Farmer: pools
POOL_CURRENT_DIFFICULTY = MetricSpec(
    "chia_pool_current_difficulty", "Current difficulty on pool.", POOL_LABELS
)
POOL_CURRENT_POINTS = MetricSpec("chia_pool_current_points", "Current points on pool.", POOL_LABELS)
POOL_POINTS_ACKNOWLEDGED_24H = MetricSpec(
    "chia_pool_points_acknowledged_24h", "Points acknowledged last 24h on pool.", POOL_LABELS
)
POOL_POINTS_FOUND_24H = MetricSpec(
    "chia_pool_points_found_24h", "Points found last 24h on pool.", POOL_LABELS
)

# Farmer: harvesters
FARMER_HARVESTERS = MetricSpec(
    "chia_farmer_harvesters", "Number of harvesters connected to the farmer."
)
FARMER_PLOTS_FAILED_TO_OPEN = MetricSpec(
    "chia_farmer_plots_failed_to_open", "Number of plot files failed to open.", HARVESTER_LABELS
)
FARMER_PLOTS_NO_KEY = MetricSpec(
    "chia_farmer_plots_no_key", "Number of plots with no key.", HARVESTER_LABELS
)
FARMER_PLOTS = MetricSpec(
    "chia_farmer_plots",
    "Number of plots currently harvesting.",
    HARVESTER_LABELS + ("pool_public_key", "pool_contract_puzzle_hash", "size"),
)

# Harvester
PLOTS_FAILED_TO_OPEN = MetricSpec("chia_plots_failed_to_open", "Number of plots files failed to open.")
PLOTS_NOT_FOUND = MetricSpec("chia_plots_not_found", "Number of plots files not found.")
PLOTS = MetricSpec("chia_plots", "Number of plots currently using.")

ALL_SPECS = (
    PEERS_COUNT,
    BLOCKCHAIN_SYNC_STATUS,
    BLOCKCHAIN_HEIGHT,
    BLOCKCHAIN_DIFFICULTY,
    BLOCKCHAIN_SPACE,
    BLOCKCHAIN_TOTAL_ITERS,
    WALLET_CONFIRMED_BALANCE,
    WALLET_UNCONFIRMED_BALANCE,
    WALLET_SPENDABLE_BALANCE,
    WALLET_MAX_SEND,
    WALLET_PENDING_CHANGE,
    WALLET_SYNC_STATUS,
    WALLET_HEIGHT,
    WALLET_FARMED_AMOUNT,
    WALLET_REWARD_AMOUNT,
    WALLET_FEE_AMOUNT,
    WALLET_LAST_HEIGHT_FARMED,
    WALLET_POOL_REWARD_AMOUNT,
    POOL_CURRENT_DIFFICULTY,
    POOL_CURRENT_POINTS,
    POOL_POINTS_ACKNOWLEDGED_24H,
    POOL_POINTS_FOUND_24H,
    FARMER_HARVESTERS,
    FARMER_PLOTS_FAILED_TO_OPEN,
    FARMER_PLOTS_NO_KEY,
    FARMER_PLOTS,
    PLOTS_FAILED_TO_OPEN,
    PLOTS_NOT_FOUND,
    PLOTS,
)
