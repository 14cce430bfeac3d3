"""Wallet collector: per-wallet balance, sync and farming metrics."""

from dataclasses import dataclass, field
from typing import Callable, List

from ..services.rpc_client import RPCError
from ..services.schemas import (
    FarmedAmount,
    HeightInfo,
    PublicKeys,
    WalletBalanceResponse,
    WalletInfo,
    Wallets,
    WalletSyncStatus,
)
from ..utils.metrics import MetricSample
from ..utils.status import SyncStatus
from . import catalog
from .base import BaseCollector


@dataclass(frozen=True)
class Wallet:
    """A wallet enumerated during one scrape, with its label values."""

    id: int
    fingerprint: str = ""

    @property
    def string_id(self) -> str:
        return str(self.id)

    @property
    def labels(self) -> tuple:
        return (self.string_id, self.fingerprint)


@dataclass
class WalletBundle:
    """Samples gathered for one wallet and the sub-calls that failed."""

    wallet: Wallet
    samples: List[MetricSample] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failures


def balance_samples(wallet: Wallet, response: WalletBalanceResponse) -> List[MetricSample]:
    balance = response.wallet_balance
    return [
        catalog.WALLET_CONFIRMED_BALANCE.sample(balance.confirmed_wallet_balance, *wallet.labels),
        catalog.WALLET_UNCONFIRMED_BALANCE.sample(balance.unconfirmed_wallet_balance, *wallet.labels),
        catalog.WALLET_SPENDABLE_BALANCE.sample(balance.spendable_balance, *wallet.labels),
        catalog.WALLET_MAX_SEND.sample(balance.max_send_amount, *wallet.labels),
        catalog.WALLET_PENDING_CHANGE.sample(balance.pending_change, *wallet.labels),
    ]


def sync_samples(wallet: Wallet, status: WalletSyncStatus) -> List[MetricSample]:
    sync = SyncStatus.from_flags(status.syncing, status.synced)
    return [catalog.WALLET_SYNC_STATUS.sample(sync, *wallet.labels)]


def height_samples(wallet: Wallet, info: HeightInfo) -> List[MetricSample]:
    return [catalog.WALLET_HEIGHT.sample(info.height, *wallet.labels)]


def farmed_samples(wallet: Wallet, farmed: FarmedAmount) -> List[MetricSample]:
    return [
        catalog.WALLET_FARMED_AMOUNT.sample(farmed.farmed_amount, *wallet.labels),
        catalog.WALLET_REWARD_AMOUNT.sample(farmed.farmer_reward_amount, *wallet.labels),
        catalog.WALLET_FEE_AMOUNT.sample(farmed.fee_amount, *wallet.labels),
        catalog.WALLET_LAST_HEIGHT_FARMED.sample(farmed.last_height_farmed, *wallet.labels),
        catalog.WALLET_POOL_REWARD_AMOUNT.sample(farmed.pool_reward_amount, *wallet.labels),
    ]


class WalletCollector(BaseCollector):
    """
    Collector for the wallet RPC service.

    Wallets are listed once per scrape, then each wallet runs its own
    pipeline of calls (public key, balance, sync status, height, farmed
    amount). A failing call only removes that call's samples.
    """

    def collect(self) -> List[MetricSample]:
        try:
            wallets = self.list_wallets()
        except RPCError as e:
            self.logger.error(str(e), extra={"rpc_path": e.path})
            return []

        samples: List[MetricSample] = []
        for info in wallets:
            bundle = self.collect_wallet(info)
            if not bundle.complete:
                self.logger.debug(
                    f"Wallet {bundle.wallet.id}: {len(bundle.failures)} call(s) failed",
                    extra={"wallet_id": bundle.wallet.id}
                )
            samples.extend(bundle.samples)
        return samples

    def list_wallets(self) -> List[WalletInfo]:
        """
        Enumerate the wallets known to the wallet service.

        Raises:
            RPCError: If ``get_wallets`` fails
        """
        return self._call("get_wallets", Wallets).wallets

    def get_public_key(self, wallet_id: int) -> str:
        """
        Return the fingerprint of the wallet's first public key.

        Zero keys, or a failed call, give an empty string; more than one
        key logs a warning and the first is used.

        Args:
            wallet_id: Wallet ID

        Returns:
            str: Fingerprint as a decimal string, or ""
        """
        try:
            keys = self._call("get_public_keys", PublicKeys, {"wallet_id": wallet_id})
        except RPCError as e:
            self.logger.error(str(e), extra={"rpc_path": e.path, "wallet_id": wallet_id})
            return ""

        fingerprints = keys.public_key_fingerprints
        if not fingerprints:
            self.logger.warning("no public key", extra={"wallet_id": wallet_id})
            return ""
        if len(fingerprints) > 1:
            self.logger.warning(
                "more than one public key; using first",
                extra={"wallet_id": wallet_id, "key_count": len(fingerprints)}
            )
        return str(fingerprints[0])

    def collect_wallet(self, info: WalletInfo) -> WalletBundle:
        """
        Run the full per-wallet pipeline.

        Args:
            info: Wallet entry from ``get_wallets``

        Returns:
            WalletBundle: Samples from the calls that succeeded, plus the
            error message of each call that failed
        """
        wallet = Wallet(id=info.id, fingerprint=self.get_public_key(info.id))
        bundle = WalletBundle(wallet=wallet)

        for step in (
            self.collect_balance,
            self.collect_sync,
            self.collect_height,
            self.collect_farmed_amount,
        ):
            self._run_step(bundle, step)

        return bundle

    def _run_step(self, bundle: WalletBundle, step: Callable[[Wallet], List[MetricSample]]) -> None:
        try:
            bundle.samples.extend(step(bundle.wallet))
        except RPCError as e:
            self.logger.error(str(e), extra={"rpc_path": e.path, "wallet_id": bundle.wallet.id})
            bundle.failures.append(str(e))

    def _wallet_params(self, wallet: Wallet) -> dict:
        return {"wallet_id": wallet.id}

    def collect_balance(self, wallet: Wallet) -> List[MetricSample]:
        response = self._call("get_wallet_balance", WalletBalanceResponse, self._wallet_params(wallet))
        return balance_samples(wallet, response)

    def collect_sync(self, wallet: Wallet) -> List[MetricSample]:
        status = self._call("get_sync_status", WalletSyncStatus, self._wallet_params(wallet))
        return sync_samples(wallet, status)

    def collect_height(self, wallet: Wallet) -> List[MetricSample]:
        info = self._call("get_height_info", HeightInfo, self._wallet_params(wallet))
        return height_samples(wallet, info)

    def collect_farmed_amount(self, wallet: Wallet) -> List[MetricSample]:
        farmed = self._call("get_farmed_amount", FarmedAmount, self._wallet_params(wallet))
        return farmed_samples(wallet, farmed)
