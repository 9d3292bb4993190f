"""Tests for balance snapshots and deltas."""

import pytest
from solders.pubkey import Pubkey

from conftest import MockAccount, MockConnection, token_account
from gorb_amm import BalanceReconciler, BalanceSnapshot, delta


class TestDelta:
    def test_zero_delta(self):
        address = Pubkey.new_unique()
        before = BalanceSnapshot({address: 100})
        after = BalanceSnapshot({address: 100})

        change = delta(before, after)

        assert change.is_zero()
        assert change.changed() == {}
        assert change[address] == 0

    def test_signed_changes(self):
        spent = Pubkey.new_unique()
        received = Pubkey.new_unique()
        before = BalanceSnapshot({spent: 1_000, received: 0})
        after = BalanceSnapshot({spent: 400, received: 250})

        change = delta(before, after)

        assert not change.is_zero()
        assert change[spent] == -600
        assert change[received] == 250

    def test_union_of_addresses(self):
        only_before = Pubkey.new_unique()
        only_after = Pubkey.new_unique()

        change = delta(
            BalanceSnapshot({only_before: 10}), BalanceSnapshot({only_after: 7})
        )

        assert change.changed() == {only_before: -10, only_after: 7}

    def test_snapshot_is_read_only(self):
        snapshot = BalanceSnapshot({Pubkey.new_unique(): 1})
        with pytest.raises(TypeError):
            snapshot.balances[Pubkey.new_unique()] = 2


@pytest.mark.asyncio
class TestBalanceReconciler:
    async def test_token_and_native_balances(self):
        token = Pubkey.new_unique()
        wallet = Pubkey.new_unique()
        missing = Pubkey.new_unique()
        connection = MockConnection(
            accounts={
                token: token_account(5_000),
                wallet: MockAccount(lamports=1_500_000_000),
            }
        )

        snapshot = await BalanceReconciler(connection).snapshot([token, wallet, missing])

        assert snapshot[token] == 5_000
        assert snapshot[wallet] == 1_500_000_000
        assert snapshot[missing] == 0

    async def test_duplicate_addresses_read_once(self):
        token = Pubkey.new_unique()
        connection = MockConnection(accounts={token: token_account(1)})

        snapshot = await BalanceReconciler(connection).snapshot([token, token])

        assert list(snapshot.balances) == [token]

    async def test_delta_across_change(self):
        token = Pubkey.new_unique()
        connection = MockConnection(accounts={token: token_account(100)})
        reconciler = BalanceReconciler(connection)

        before = await reconciler.snapshot([token])
        connection.accounts[token] = token_account(40)
        after = await reconciler.snapshot([token])

        assert delta(before, after)[token] == -60
