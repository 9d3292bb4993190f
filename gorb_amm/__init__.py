"""gorb-amm SDK - Python client for the GorbChain AMM program.

Example:
    from gorb_amm import ClientConfig, GorbAmmClient, derive_pool_keys

    config = ClientConfig.from_env()
    client = GorbAmmClient(config.connect(), config)
    keys = derive_pool_keys(token_a, token_b, config.program_id)
"""

__version__ = "0.1.0"

# ============================================================================
# MODULE IMPORTS
# ============================================================================

from . import program

# ============================================================================
# CONVENIENCE RE-EXPORTS
# ============================================================================

from .balances import BalanceDelta, BalanceReconciler, BalanceSnapshot, delta
from .config import ClientConfig
from .program import (
    DEFAULT_DISCRIMINATORS,
    FEE_PROGRAM_DISCRIMINATORS,
    QUERY_PROGRAM_DISCRIMINATORS,
    DiscriminatorTable,
    GorbAmmClient,
    Request,
    assemble,
    build_accounts,
    decode,
    derive_native_pool_keys,
    derive_pool_keys,
    encode,
    payload_size,
    sign_request,
)
from .program.constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    NATIVE_SOL_MINT,
    PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)
from .program.errors import (
    AccountNotFoundError,
    DerivationFailure,
    DiscriminatorCollisionError,
    GorbAmmError,
    InvalidAccountDataError,
    MalformedPayload,
    MissingKeyError,
    MissingSignerError,
    SubmissionFailure,
    UnsupportedInstructionError,
)
from .program.types import (
    AddLiquidityData,
    AddLiquidityNativeSolData,
    AddLiquidityParams,
    CollectFeesData,
    FindPoolsByTokenData,
    InitNativeSolPoolData,
    InitPoolData,
    InitPoolParams,
    InstructionKind,
    MultihopSwapData,
    NativePoolKeys,
    NativePoolState,
    PoolKeys,
    PoolState,
    RemoveLiquidityData,
    RemoveLiquidityNativeSolData,
    RemoveLiquidityParams,
    SetFeeTreasuryData,
    SwapData,
    SwapHop,
    SwapNativeSolToTokenData,
    SwapParams,
    SwapTokenToNativeSolData,
    WithdrawFeesData,
    WithdrawFeesParams,
)
from .program.utils import get_associated_token_address, load_keypair
from .scenario import PoolScenario
from .workflow import WorkflowRecord, WorkflowStore

__all__ = [
    # Version
    "__version__",
    # Modules
    "program",
    # Client
    "GorbAmmClient",
    "ClientConfig",
    # Constants
    "PROGRAM_ID",
    "TOKEN_PROGRAM_ID",
    "ASSOCIATED_TOKEN_PROGRAM_ID",
    "NATIVE_SOL_MINT",
    # Types - Instructions
    "InstructionKind",
    "InitPoolData",
    "AddLiquidityData",
    "RemoveLiquidityData",
    "SwapData",
    "MultihopSwapData",
    "CollectFeesData",
    "WithdrawFeesData",
    "SetFeeTreasuryData",
    "FindPoolsByTokenData",
    "InitNativeSolPoolData",
    "SwapNativeSolToTokenData",
    "SwapTokenToNativeSolData",
    "AddLiquidityNativeSolData",
    "RemoveLiquidityNativeSolData",
    # Types - Pools
    "PoolKeys",
    "NativePoolKeys",
    "SwapHop",
    "PoolState",
    "NativePoolState",
    # Types - Params
    "InitPoolParams",
    "AddLiquidityParams",
    "RemoveLiquidityParams",
    "SwapParams",
    "WithdrawFeesParams",
    # Codec
    "DiscriminatorTable",
    "FEE_PROGRAM_DISCRIMINATORS",
    "QUERY_PROGRAM_DISCRIMINATORS",
    "DEFAULT_DISCRIMINATORS",
    "encode",
    "decode",
    "payload_size",
    # Addresses and requests
    "derive_pool_keys",
    "derive_native_pool_keys",
    "build_accounts",
    "Request",
    "assemble",
    "sign_request",
    # Balances
    "BalanceReconciler",
    "BalanceSnapshot",
    "BalanceDelta",
    "delta",
    # Workflow
    "WorkflowRecord",
    "WorkflowStore",
    "PoolScenario",
    # Errors
    "GorbAmmError",
    "DerivationFailure",
    "MalformedPayload",
    "UnsupportedInstructionError",
    "DiscriminatorCollisionError",
    "MissingKeyError",
    "SubmissionFailure",
    "AccountNotFoundError",
    "InvalidAccountDataError",
    "MissingSignerError",
    # Utils
    "get_associated_token_address",
    "load_keypair",
]
