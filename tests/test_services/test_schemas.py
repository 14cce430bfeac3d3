"""Tests for RPC response models."""

import pytest
from pydantic import ValidationError

from chia_exporter.services.schemas import (
    Harvesters,
    PlotEntry,
    PoolState,
    WalletBalanceResponse,
    Wallets,
)


def test_unknown_keys_ignored():
    wallets = Wallets.model_validate({
        "wallets": [{"id": 1, "name": "Chia Wallet", "type": 0, "data": "", "authorized": True}],
        "fingerprint": 3141592653,
        "success": True,
    })

    assert wallets.wallets[0].id == 1


def test_wallet_id_required():
    with pytest.raises(ValidationError):
        Wallets.model_validate({"wallets": [{"name": "no id"}]})


def test_null_plot_keys_are_empty():
    plot = PlotEntry.model_validate({
        "pool_public_key": None,
        "pool_contract_puzzle_hash": "0xabc",
        "size": 32,
    })

    assert plot.pool_public_key == ""
    assert plot.pool_contract_puzzle_hash == "0xabc"


def test_missing_balance_is_zero():
    balance = WalletBalanceResponse.model_validate({"wallet_balance": {"wallet_id": 1}}).wallet_balance

    assert balance.confirmed_wallet_balance == 0
    assert balance.max_send_amount == 0


def test_pool_lists_counted_as_reported():
    state = PoolState.model_validate({
        "pool_state": [{"points_found_24h": [[1, 1], [2, 1]], "points_acknowledged_24h": None}]
    })

    entry = state.pool_state[0]
    assert len(entry.points_found_24h) == 2
    assert entry.points_acknowledged_24h == []
    assert entry.pool_config.launcher_id == ""


def test_harvester_defaults():
    harvester = Harvesters.model_validate({"harvesters": [{}]}).harvesters[0]

    assert harvester.connection.host == ""
    assert harvester.plots == []
    assert harvester.no_key_filenames == []


def test_models_frozen():
    plot = PlotEntry(size=32)

    with pytest.raises(ValidationError):
        plot.size = 33


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
