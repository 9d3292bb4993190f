"""Balance snapshots taken around a submission, and their differences."""

import logging
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from solana.rpc.async_api import AsyncClient
from solders.pubkey import Pubkey

from .program.accounts import deserialize_token_amount
from .program.constants import TOKEN_ACCOUNT_SIZE, TOKEN_PROGRAM_ID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalanceSnapshot:
    """Balances of a set of addresses at one point in time.

    Token accounts hold their token amount, every other address its
    lamports. Accounts that do not exist read as 0.
    """

    balances: Mapping[Pubkey, int]
    taken_at: float = field(default_factory=time.time)

    def __post_init__(self):
        object.__setattr__(self, "balances", MappingProxyType(dict(self.balances)))

    def __getitem__(self, address: Pubkey) -> int:
        return self.balances[address]

    def get(self, address: Pubkey) -> int:
        return self.balances.get(address, 0)


@dataclass(frozen=True)
class BalanceDelta:
    """Signed change per address between two snapshots."""

    changes: Mapping[Pubkey, int]

    def __getitem__(self, address: Pubkey) -> int:
        return self.changes.get(address, 0)

    def is_zero(self) -> bool:
        return all(change == 0 for change in self.changes.values())

    def changed(self) -> Dict[Pubkey, int]:
        """Addresses whose balance moved, with their change."""
        return {address: change for address, change in self.changes.items() if change}


def delta(before: BalanceSnapshot, after: BalanceSnapshot) -> BalanceDelta:
    """Compute ``after - before`` over the union of both snapshots' addresses."""
    addresses = list(before.balances)
    addresses.extend(a for a in after.balances if a not in before.balances)
    return BalanceDelta(
        changes=MappingProxyType(
            {address: after.get(address) - before.get(address) for address in addresses}
        )
    )


class BalanceReconciler:
    """Reads balances through the ledger transport.

    Snapshots are observational only; nothing here decides whether a
    request is submitted.
    """

    def __init__(self, ledger: AsyncClient, token_program_id: Pubkey = TOKEN_PROGRAM_ID):
        self.ledger = ledger
        self.token_program_id = token_program_id

    async def balance_of(self, address: Pubkey) -> int:
        """Token amount of a token account, lamports otherwise, 0 if missing."""
        response = await self.ledger.get_account_info(address)
        account = response.value
        if account is None:
            return 0

        if account.owner == self.token_program_id and len(account.data) >= TOKEN_ACCOUNT_SIZE:
            return deserialize_token_amount(account.data)
        return account.lamports

    async def snapshot(
        self,
        addresses: Iterable[Pubkey],
        labels: Optional[Mapping[Pubkey, str]] = None,
    ) -> BalanceSnapshot:
        """Read the current balance of each address."""
        balances = {}
        for address in addresses:
            if address in balances:
                continue
            balances[address] = await self.balance_of(address)
            name = labels.get(address, str(address)) if labels else str(address)
            logger.info(f"Balance {name}: {balances[address]}")
        return BalanceSnapshot(balances=balances)


def log_delta(change: BalanceDelta, labels: Optional[Mapping[Pubkey, str]] = None) -> None:
    """Log every non-zero change, or a single line when nothing moved."""
    if change.is_zero():
        logger.info("No balance changes")
        return
    for address, amount in change.changed().items():
        name = labels.get(address, str(address)) if labels else str(address)
        logger.info(f"Balance change {name}: {amount:+d}")
