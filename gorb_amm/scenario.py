"""Pool lifecycle scenario: init, add liquidity, swap, remove liquidity, collect fees."""

import logging
from typing import Dict, Mapping, Optional, Sequence

from solders.keypair import Keypair
from solders.pubkey import Pubkey

from .balances import BalanceReconciler, BalanceSnapshot, delta, log_delta
from .program.assembler import Request
from .program.client import GorbAmmClient
from .program.types import (
    AddLiquidityParams,
    InitPoolParams,
    PoolKeys,
    RemoveLiquidityParams,
    SwapParams,
)
from .workflow import WorkflowRecord, WorkflowStore

logger = logging.getLogger(__name__)


class PoolScenario:
    """Runs the lifecycle of one pool, one step at a time.

    Every step reads what it needs from the current workflow record and
    fails with MissingKeyError when an earlier step has not run.
    """

    def __init__(
        self,
        client: GorbAmmClient,
        payer: Keypair,
        store: Optional[WorkflowStore] = None,
        record: Optional[WorkflowRecord] = None,
    ):
        self.client = client
        self.payer = payer
        self.store = store
        self.record = record or WorkflowRecord.start({"payer": payer.pubkey()})
        self.reconciler = BalanceReconciler(
            client.connection, client.config.token_program_id
        )

    @classmethod
    def resume(
        cls, client: GorbAmmClient, payer: Keypair, store: WorkflowStore
    ) -> "PoolScenario":
        """Continue from the record saved in ``store``, or start fresh."""
        record = store.load() if store.exists() else None
        return cls(client, payer, store, record)

    @property
    def user(self) -> Pubkey:
        return self.payer.pubkey()

    def pool_keys(self) -> PoolKeys:
        """Rebuild the pool's addresses from the current record."""
        return PoolKeys(
            pool=self.record.resolve("pool"),
            bump=self.record.resolve_int("pool_bump"),
            token_a=self.record.resolve("token_a"),
            token_b=self.record.resolve("token_b"),
            vault_a=self.record.resolve("vault_a"),
            vault_b=self.record.resolve("vault_b"),
            lp_mint=self.record.resolve("lp_mint"),
        )

    # =========================================================================
    # Steps
    # =========================================================================

    async def init_pool(
        self,
        token_a: Pubkey,
        token_b: Pubkey,
        amount_a: int,
        amount_b: int,
    ) -> WorkflowRecord:
        """Create the pool for ``token_a``/``token_b`` with its initial reserves."""
        keys = self.client.pool_keys(token_a, token_b)
        user_token_a = self.client.associated_token_address(self.user, token_a)
        user_token_b = self.client.associated_token_address(self.user, token_b)

        request = await self.client.init_pool(
            InitPoolParams(
                payer=self.user,
                token_a=token_a,
                token_b=token_b,
                amount_a=amount_a,
                amount_b=amount_b,
                user_token_a=user_token_a,
                user_token_b=user_token_b,
            )
        )
        watch = {
            user_token_a: "user_token_a",
            user_token_b: "user_token_b",
        }
        signature, _ = await self._submit(request, watch)

        return self._advance(
            "init_pool",
            {
                "token_a": token_a,
                "token_b": token_b,
                "pool": keys.pool,
                "pool_bump": keys.bump,
                "vault_a": keys.vault_a,
                "vault_b": keys.vault_b,
                "lp_mint": keys.lp_mint,
                "user_token_a": user_token_a,
                "user_token_b": user_token_b,
                "initial_amount_a": amount_a,
                "initial_amount_b": amount_b,
            },
            signature,
        )

    async def add_liquidity(self, amount_a: int, amount_b: int) -> WorkflowRecord:
        """Deposit both tokens and record the LP tokens received."""
        keys = self.pool_keys()
        user_lp = self.client.associated_token_address(self.user, keys.lp_mint)

        request = await self.client.add_liquidity(
            AddLiquidityParams(
                user=self.user, keys=keys, amount_a=amount_a, amount_b=amount_b
            )
        )
        watch = self._user_accounts(keys)
        watch[user_lp] = "user_lp"
        signature, change = await self._submit(request, watch)

        lp_balance = self.record.get("lp_balance", 0) + change[user_lp]
        return self._advance(
            "add_liquidity",
            {
                "user_lp": user_lp,
                "liquidity_amount_a": amount_a,
                "liquidity_amount_b": amount_b,
                "lp_received": change[user_lp],
                "lp_balance": lp_balance,
            },
            signature,
        )

    async def swap(self, amount_in: int, direction_a_to_b: bool = True) -> WorkflowRecord:
        """Swap ``amount_in`` through the pool and record the amount received."""
        keys = self.pool_keys()

        request = await self.client.swap(
            SwapParams(
                user=self.user,
                keys=keys,
                amount_in=amount_in,
                direction_a_to_b=direction_a_to_b,
            )
        )
        watch = self._user_accounts(keys)
        signature, change = await self._submit(request, watch)

        output = self.record.resolve("user_token_b" if direction_a_to_b else "user_token_a")
        return self._advance(
            "swap",
            {
                "swap_amount_in": amount_in,
                "swap_direction": "a_to_b" if direction_a_to_b else "b_to_a",
                "swap_amount_out": change[output],
            },
            signature,
        )

    async def remove_liquidity(self, lp_amount: Optional[int] = None) -> WorkflowRecord:
        """Burn LP tokens, all recorded ones by default."""
        keys = self.pool_keys()
        user_lp = self.record.resolve("user_lp")
        if lp_amount is None:
            lp_amount = self.record.resolve_int("lp_balance")

        request = await self.client.remove_liquidity(
            RemoveLiquidityParams(user=self.user, keys=keys, lp_amount=lp_amount)
        )
        watch = self._user_accounts(keys)
        watch[user_lp] = "user_lp"
        signature, change = await self._submit(request, watch)

        return self._advance(
            "remove_liquidity",
            {
                "lp_burned": lp_amount,
                "lp_balance": self.record.resolve_int("lp_balance") + change[user_lp],
                "withdrawn_amount_a": change[self.record.resolve("user_token_a")],
                "withdrawn_amount_b": change[self.record.resolve("user_token_b")],
            },
            signature,
        )

    async def collect_fees(self, treasury: Optional[Pubkey] = None) -> WorkflowRecord:
        """Collect the pool's accrued fees to ``treasury`` (the payer by default)."""
        pool = self.record.resolve("pool")
        treasury = treasury or self.user

        request = await self.client.collect_fees(self.user, pool, treasury)
        signature, _ = await self._submit(request, {treasury: "treasury"})

        state = await self.client.get_pool_by_address(pool)
        return self._advance(
            "collect_fees",
            {
                "fee_treasury": treasury,
                "fee_collected_a": state.fee_collected_a,
                "fee_collected_b": state.fee_collected_b,
            },
            signature,
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _user_accounts(self, keys: PoolKeys) -> Dict[Pubkey, str]:
        return {
            self.record.resolve("user_token_a"): "user_token_a",
            self.record.resolve("user_token_b"): "user_token_b",
            keys.vault_a: "vault_a",
            keys.vault_b: "vault_b",
        }

    async def _submit(self, request: Request, watch: Mapping[Pubkey, str]):
        """Submit ``request`` between two balance snapshots of ``watch``."""
        addresses: Sequence[Pubkey] = list(watch)
        before: BalanceSnapshot = await self.reconciler.snapshot(addresses, watch)
        signature = await self.client.submit(request, [self.payer])
        after = await self.reconciler.snapshot(addresses, watch)

        change = delta(before, after)
        log_delta(change, watch)
        return str(signature), change

    def _advance(self, step: str, fields: Mapping, signature: str) -> WorkflowRecord:
        self.record = self.record.extend(step, fields, signature)
        logger.info(f"Completed step '{step}' ({signature})")
        if self.store is not None:
            self.store.save(self.record)
        return self.record
