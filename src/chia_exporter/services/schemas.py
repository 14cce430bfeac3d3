"""Pydantic models for the node RPC responses the exporter reads.

Only the fields that feed a metric are declared; anything else in a
response is ignored. Every optional field has a zero value that is used
when the field is missing or ``null``. A field that is present with the
wrong type fails validation, which the RPC client reports as a decode
error.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class RPCModel(BaseModel):
    """Base for response models: unknown keys ignored, ``null`` means absent."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            field_info = cls.model_fields[info.field_name]
            if not field_info.is_required():
                return field_info.get_default(call_default_factory=True)
        return value


# get_connections (full node)

class Connection(RPCModel):
    type: int = 0
    peer_host: str = ""
    node_id: str = ""


class Connections(RPCModel):
    connections: List[Connection] = Field(default_factory=list)


# get_blockchain_state (full node)

class SyncState(RPCModel):
    sync_mode: bool = False
    synced: bool = False


class Peak(RPCModel):
    height: int = 0
    total_iters: int = 0


class BlockchainState(RPCModel):
    sync: SyncState = Field(default_factory=SyncState)
    peak: Peak = Field(default_factory=Peak)
    difficulty: int = 0
    space: float = 0.0


class BlockchainStateResponse(RPCModel):
    blockchain_state: BlockchainState = Field(default_factory=BlockchainState)


# Wallet endpoint

class WalletInfo(RPCModel):
    """One entry of ``get_wallets``; ``id`` must be present."""

    id: int
    name: str = ""
    type: int = 0


class Wallets(RPCModel):
    wallets: List[WalletInfo] = Field(default_factory=list)


class PublicKeys(RPCModel):
    public_key_fingerprints: List[int] = Field(default_factory=list)


class WalletBalance(RPCModel):
    confirmed_wallet_balance: int = 0
    unconfirmed_wallet_balance: int = 0
    spendable_balance: int = 0
    max_send_amount: int = 0
    pending_change: int = 0


class WalletBalanceResponse(RPCModel):
    wallet_balance: WalletBalance = Field(default_factory=WalletBalance)


class WalletSyncStatus(RPCModel):
    syncing: bool = False
    synced: bool = False


class HeightInfo(RPCModel):
    height: int = 0


class FarmedAmount(RPCModel):
    farmed_amount: int = 0
    farmer_reward_amount: int = 0
    fee_amount: int = 0
    last_height_farmed: int = 0
    pool_reward_amount: int = 0


# Farmer endpoint

class PoolConfig(RPCModel):
    launcher_id: str = ""
    pool_url: str = ""


class PoolStateEntry(RPCModel):
    pool_config: PoolConfig = Field(default_factory=PoolConfig)
    current_difficulty: int = 0
    current_points: int = 0
    points_acknowledged_24h: List[Any] = Field(default_factory=list)
    points_found_24h: List[Any] = Field(default_factory=list)


class PoolState(RPCModel):
    pool_state: List[PoolStateEntry] = Field(default_factory=list)


class HarvesterConnection(RPCModel):
    host: str = ""
    node_id: str = ""


class PlotEntry(RPCModel):
    pool_public_key: str = ""
    pool_contract_puzzle_hash: str = ""
    size: int = 0


class HarvesterInfo(RPCModel):
    connection: HarvesterConnection = Field(default_factory=HarvesterConnection)
    plots: List[PlotEntry] = Field(default_factory=list)
    failed_to_open_filenames: List[Any] = Field(default_factory=list)
    no_key_filenames: List[Any] = Field(default_factory=list)


class Harvesters(RPCModel):
    harvesters: List[HarvesterInfo] = Field(default_factory=list)


# get_plots (harvester)

class PlotFiles(RPCModel):
    plots: List[Any] = Field(default_factory=list)
    failed_to_open_filenames: List[Any] = Field(default_factory=list)
    not_found_filenames: List[Any] = Field(default_factory=list)
