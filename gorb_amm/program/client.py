"""Async client for the GorbChain AMM program."""

import asyncio
import logging
from typing import List, Optional, Sequence

from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction_status import TransactionConfirmationStatus

from ..config import ClientConfig
from .accounts import deserialize_native_pool, deserialize_pool
from .assembler import (
    Request,
    assemble,
    build_create_associated_token_account_instruction,
    sign_request,
)
from .errors import AccountNotFoundError, SubmissionFailure
from .instructions import (
    build_add_liquidity_instruction,
    build_add_liquidity_native_sol_instruction,
    build_collect_fees_instruction,
    build_find_pools_by_token_instruction,
    build_init_native_sol_pool_instruction,
    build_init_pool_instruction,
    build_multihop_swap_instruction,
    build_remove_liquidity_instruction,
    build_remove_liquidity_native_sol_instruction,
    build_set_fee_treasury_instruction,
    build_swap_instruction,
    build_swap_native_sol_to_token_instruction,
    build_swap_token_to_native_sol_instruction,
    build_withdraw_fees_instruction,
)
from .pda import derive_native_pool_keys, derive_pool_keys
from .types import (
    AddLiquidityParams,
    InitPoolParams,
    NativePoolKeys,
    NativePoolState,
    PoolKeys,
    PoolState,
    RemoveLiquidityParams,
    SwapHop,
    SwapParams,
    WithdrawFeesParams,
)
from .utils import get_associated_token_address

logger = logging.getLogger(__name__)

# Weakest to strongest
CONFIRMATION_LEVELS = (
    TransactionConfirmationStatus.Processed,
    TransactionConfirmationStatus.Confirmed,
    TransactionConfirmationStatus.Finalized,
)
COMMITMENT_LEVELS = ("processed", "confirmed", "finalized")


class GorbAmmClient:
    """Async client for interacting with the AMM program."""

    def __init__(
        self,
        connection: AsyncClient,
        config: Optional[ClientConfig] = None,
    ):
        """Initialize the client.

        Args:
            connection: Solana-compatible RPC async client
            config: Program ids, program build and confirmation settings
                (defaults to GorbChain)
        """
        self.connection = connection
        self.config = config or ClientConfig.gorbchain()

    @property
    def program_id(self) -> Pubkey:
        return self.config.program_id

    # =========================================================================
    # Addresses
    # =========================================================================

    def pool_keys(self, token_a: Pubkey, token_b: Pubkey) -> PoolKeys:
        """Derive the addresses of the pool for ``token_a``/``token_b`` in that order."""
        return derive_pool_keys(token_a, token_b, self.program_id)

    def native_pool_keys(self, token_mint: Pubkey) -> NativePoolKeys:
        """Derive the addresses of the native SOL pool for ``token_mint``."""
        return derive_native_pool_keys(token_mint, self.program_id)

    def associated_token_address(self, owner: Pubkey, mint: Pubkey) -> Pubkey:
        return get_associated_token_address(
            owner,
            mint,
            self.config.token_program_id,
            self.config.associated_token_program_id,
        )

    # =========================================================================
    # Account Fetchers
    # =========================================================================

    async def get_pool(self, token_a: Pubkey, token_b: Pubkey) -> PoolState:
        """Fetch and deserialize the pool account of a token pair."""
        pool = derive_pool_keys(token_a, token_b, self.program_id).pool
        return await self.get_pool_by_address(pool)

    async def get_pool_by_address(self, pool: Pubkey) -> PoolState:
        """Fetch and deserialize a pool account by its address."""
        response = await self.connection.get_account_info(pool)

        if response.value is None:
            raise AccountNotFoundError(str(pool))

        return deserialize_pool(response.value.data)

    async def get_native_pool(self, token_mint: Pubkey) -> NativePoolState:
        """Fetch and deserialize the native SOL pool account of a token."""
        pool = derive_native_pool_keys(token_mint, self.program_id).pool
        response = await self.connection.get_account_info(pool)

        if response.value is None:
            raise AccountNotFoundError(str(pool))

        return deserialize_native_pool(response.value.data)

    async def account_exists(self, address: Pubkey) -> bool:
        response = await self.connection.get_account_info(address)
        return response.value is not None

    # =========================================================================
    # Transaction Builders
    # =========================================================================

    async def init_pool(self, params: InitPoolParams) -> Request:
        """Build an InitPool request funded from the payer's token accounts."""
        keys = self.pool_keys(params.token_a, params.token_b)
        ix = build_init_pool_instruction(
            payer=params.payer,
            keys=keys,
            amount_a=params.amount_a,
            amount_b=params.amount_b,
            user_token_a=params.user_token_a
            or self.associated_token_address(params.payer, params.token_a),
            user_token_b=params.user_token_b
            or self.associated_token_address(params.payer, params.token_b),
            program_id=self.program_id,
            table=self.config.discriminators,
            token_program_id=self.config.token_program_id,
        )
        return assemble([ix], params.payer)

    async def add_liquidity(self, params: AddLiquidityParams) -> Request:
        """Build an AddLiquidity request, creating the user's LP account if missing."""
        instructions = await self._missing_token_accounts(
            params.user, [params.keys.lp_mint]
        )
        instructions.append(
            build_add_liquidity_instruction(
                user=params.user,
                keys=params.keys,
                amount_a=params.amount_a,
                amount_b=params.amount_b,
                program_id=self.program_id,
                table=self.config.discriminators,
                token_program_id=self.config.token_program_id,
            )
        )
        return assemble(instructions, params.user)

    async def remove_liquidity(self, params: RemoveLiquidityParams) -> Request:
        """Build a RemoveLiquidity request, creating missing output accounts."""
        instructions = await self._missing_token_accounts(
            params.user, [params.keys.token_a, params.keys.token_b]
        )
        instructions.append(
            build_remove_liquidity_instruction(
                user=params.user,
                keys=params.keys,
                lp_amount=params.lp_amount,
                program_id=self.program_id,
                table=self.config.discriminators,
                token_program_id=self.config.token_program_id,
                associated_token_program_id=self.config.associated_token_program_id,
            )
        )
        return assemble(instructions, params.user)

    async def swap(self, params: SwapParams) -> Request:
        """Build a Swap request, creating the output account if missing."""
        output_mint = (
            params.keys.token_b if params.direction_a_to_b else params.keys.token_a
        )
        instructions = await self._missing_token_accounts(params.user, [output_mint])
        instructions.append(
            build_swap_instruction(
                user=params.user,
                keys=params.keys,
                amount_in=params.amount_in,
                direction_a_to_b=params.direction_a_to_b,
                program_id=self.program_id,
                table=self.config.discriminators,
                token_program_id=self.config.token_program_id,
                associated_token_program_id=self.config.associated_token_program_id,
            )
        )
        return assemble(instructions, params.user)

    async def multihop_swap(
        self,
        user: Pubkey,
        user_source: Pubkey,
        hops: Sequence[SwapHop],
        amount_in: int,
        minimum_amount_out: int,
    ) -> Request:
        """Build a two-hop MultihopSwap request."""
        ix = build_multihop_swap_instruction(
            user=user,
            user_source=user_source,
            hops=hops,
            amount_in=amount_in,
            minimum_amount_out=minimum_amount_out,
            program_id=self.program_id,
            table=self.config.discriminators,
            token_program_id=self.config.token_program_id,
        )
        return assemble([ix], user)

    async def collect_fees(
        self, authority: Pubkey, pool: Pubkey, treasury: Pubkey
    ) -> Request:
        """Build a CollectFees request."""
        ix = build_collect_fees_instruction(
            authority, pool, treasury, self.program_id, self.config.discriminators
        )
        return assemble([ix], authority)

    async def withdraw_fees(self, params: WithdrawFeesParams) -> Request:
        """Build a WithdrawFees request."""
        ix = build_withdraw_fees_instruction(
            authority=params.authority,
            keys=params.keys,
            treasury=params.treasury,
            amount_a=params.amount_a,
            amount_b=params.amount_b,
            program_id=self.program_id,
            table=self.config.discriminators,
            token_program_id=self.config.token_program_id,
        )
        return assemble([ix], params.authority)

    async def set_fee_treasury(
        self, authority: Pubkey, pool: Pubkey, treasury: Pubkey
    ) -> Request:
        """Build a SetFeeTreasury request."""
        ix = build_set_fee_treasury_instruction(
            authority, pool, treasury, self.program_id, self.config.discriminators
        )
        return assemble([ix], authority)

    async def find_pools_by_token(self, payer: Pubkey, token: Pubkey) -> Request:
        """Build a FindPoolsByToken request; the program logs matching pools."""
        ix = build_find_pools_by_token_instruction(
            token, self.program_id, self.config.discriminators
        )
        return assemble([ix], payer)

    async def init_native_sol_pool(
        self,
        user: Pubkey,
        token_mint: Pubkey,
        amount_sol: int,
        amount_token: int,
    ) -> Request:
        """Build an InitNativeSolPool request."""
        ix = build_init_native_sol_pool_instruction(
            user=user,
            keys=self.native_pool_keys(token_mint),
            amount_sol=amount_sol,
            amount_token=amount_token,
            program_id=self.program_id,
            table=self.config.discriminators,
            token_program_id=self.config.token_program_id,
        )
        return assemble([ix], user)

    async def swap_native_sol_to_token(
        self,
        user: Pubkey,
        token_mint: Pubkey,
        amount_in: int,
        minimum_amount_out: int,
    ) -> Request:
        """Build a SwapNativeSolToToken request, creating the token account if missing."""
        instructions = await self._missing_token_accounts(user, [token_mint])
        instructions.append(
            build_swap_native_sol_to_token_instruction(
                user=user,
                keys=self.native_pool_keys(token_mint),
                amount_in=amount_in,
                minimum_amount_out=minimum_amount_out,
                program_id=self.program_id,
                table=self.config.discriminators,
                token_program_id=self.config.token_program_id,
            )
        )
        return assemble(instructions, user)

    async def swap_token_to_native_sol(
        self,
        user: Pubkey,
        token_mint: Pubkey,
        amount_in: int,
        minimum_amount_out: int,
    ) -> Request:
        """Build a SwapTokenToNativeSol request."""
        ix = build_swap_token_to_native_sol_instruction(
            user=user,
            keys=self.native_pool_keys(token_mint),
            amount_in=amount_in,
            minimum_amount_out=minimum_amount_out,
            program_id=self.program_id,
            table=self.config.discriminators,
            token_program_id=self.config.token_program_id,
        )
        return assemble([ix], user)

    async def add_liquidity_native_sol(
        self,
        user: Pubkey,
        token_mint: Pubkey,
        amount_sol: int,
        amount_token: int,
    ) -> Request:
        """Build an AddLiquidityNativeSol request, creating the LP account if missing."""
        keys = self.native_pool_keys(token_mint)
        instructions = await self._missing_token_accounts(user, [keys.lp_mint])
        instructions.append(
            build_add_liquidity_native_sol_instruction(
                user=user,
                keys=keys,
                amount_sol=amount_sol,
                amount_token=amount_token,
                program_id=self.program_id,
                table=self.config.discriminators,
                token_program_id=self.config.token_program_id,
            )
        )
        return assemble(instructions, user)

    async def remove_liquidity_native_sol(
        self,
        user: Pubkey,
        token_mint: Pubkey,
        lp_amount: int,
    ) -> Request:
        """Build a RemoveLiquidityNativeSol request."""
        ix = build_remove_liquidity_native_sol_instruction(
            user=user,
            keys=self.native_pool_keys(token_mint),
            lp_amount=lp_amount,
            program_id=self.program_id,
            table=self.config.discriminators,
            token_program_id=self.config.token_program_id,
        )
        return assemble([ix], user)

    # =========================================================================
    # Submission
    # =========================================================================

    async def submit(self, request: Request, signers: Sequence[Keypair]) -> Signature:
        """Sign, send and confirm a request.

        The request is sent once. Transport errors and on-chain failures
        are raised as SubmissionFailure with the transport's message intact.

        Raises:
            MissingSignerError: If a required signer has no keypair
            SubmissionFailure: If sending or confirmation fails
        """
        blockhash = await self._get_blockhash()
        tx = sign_request(request, signers, blockhash)

        try:
            result = await self.connection.send_raw_transaction(
                bytes(tx),
                opts=TxOpts(preflight_commitment=self.config.commitment),
            )
        except (RPCException, SolanaRpcException) as e:
            logger.error(f"Failed to send transaction: {e}")
            raise SubmissionFailure(str(e), cause=e) from e

        signature = result.value
        logger.info(f"Sent transaction {signature}")
        await self.confirm(signature)
        return signature

    async def confirm(self, signature: Signature) -> None:
        """Poll signature status until the configured commitment is reached.

        Raises:
            SubmissionFailure: If the transaction failed on-chain or was not
                confirmed in time
        """
        interval = self.config.confirm_poll_interval_secs
        attempts = max(1, int(self.config.confirm_timeout_secs / interval))

        for attempt in range(attempts):
            try:
                response = await self.connection.get_signature_statuses([signature])
            except (RPCException, SolanaRpcException) as e:
                raise SubmissionFailure(str(e), str(signature), cause=e) from e

            status = response.value[0]
            if status is not None:
                if status.err:
                    logger.error(f"Transaction {signature} failed: {status.err}")
                    raise SubmissionFailure(str(status.err), str(signature), cause=status.err)
                if self._meets_commitment(status.confirmation_status):
                    logger.info(f"Transaction {signature} {self.config.commitment}")
                    return

            if attempt + 1 < attempts:
                await asyncio.sleep(interval)

        raise SubmissionFailure(
            f"not confirmed after {self.config.confirm_timeout_secs}s",
            str(signature),
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _missing_token_accounts(
        self, owner: Pubkey, mints: Sequence[Pubkey]
    ) -> List[Instruction]:
        """Create-account instructions for each of ``owner``'s missing associated accounts."""
        instructions = []
        for mint in mints:
            address = self.associated_token_address(owner, mint)
            if not await self.account_exists(address):
                logger.info(f"Creating associated token account {address} for mint {mint}")
                instructions.append(
                    build_create_associated_token_account_instruction(
                        payer=owner,
                        owner=owner,
                        mint=mint,
                        token_program_id=self.config.token_program_id,
                        associated_token_program_id=self.config.associated_token_program_id,
                    )
                )
        return instructions

    def _meets_commitment(
        self, confirmation_status: Optional[TransactionConfirmationStatus]
    ) -> bool:
        # Nodes report no status once the transaction is rooted
        if confirmation_status is None:
            return True
        reached = CONFIRMATION_LEVELS.index(confirmation_status)
        return reached >= COMMITMENT_LEVELS.index(self.config.commitment)

    async def _get_blockhash(self) -> Hash:
        """Get the latest blockhash."""
        response = await self.connection.get_latest_blockhash()
        return response.value.blockhash
