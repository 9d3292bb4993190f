"""Program ids, PDA seeds, and layout constants for the GorbChain AMM."""

from solders.pubkey import Pubkey

# =============================================================================
# Program IDs
# =============================================================================

PROGRAM_ID = Pubkey.from_string("aBfrRgukSYDMgdyQ8y1XNEk4w5u7Ugtz5fPHFnkStJX")

# GorbChain ships its own SPL Token and Associated Token Account deployments
TOKEN_PROGRAM_ID = Pubkey.from_string("G22oYgZ6LnVcy7v8eSNi2xpNk1NcZiPD8CVKSTut7oZ6")
ASSOCIATED_TOKEN_PROGRAM_ID = Pubkey.from_string(
    "GoATGVNeSXerFerPqTJ8hcED1msPWHHLxao2vwBYqowm"
)

SYSTEM_PROGRAM_ID = Pubkey.from_string("11111111111111111111111111111111")
RENT_SYSVAR_ID = Pubkey.from_string("SysvarRent111111111111111111111111111111111")

NATIVE_SOL_MINT = Pubkey.from_string("So11111111111111111111111111111111111111112")

# =============================================================================
# Network
# =============================================================================

DEFAULT_RPC_URL = "https://rpc.gorbchain.xyz"
DEFAULT_WS_URL = "wss://rpc.gorbchain.xyz/ws/"

# =============================================================================
# PDA Seeds
# =============================================================================

SEED_POOL = b"pool"
SEED_VAULT = b"vault"
SEED_LP_MINT = b"lp_mint"
SEED_NATIVE_POOL = b"native_sol_pool"
SEED_NATIVE_VAULT = b"native_sol_vault"
SEED_NATIVE_LP_MINT = b"native_sol_lp_mint"

# =============================================================================
# Sizes
# =============================================================================

PUBKEY_SIZE = 32
U64_SIZE = 8
DISCRIMINATOR_SIZE = 1
MAX_U64 = 2**64 - 1

# Pool: token_a(32) + token_b(32) + bump(1) + reserve_a(8) + reserve_b(8) +
# total_lp_supply(8) + fee_collected_a(8) + fee_collected_b(8) + fee_treasury(32)
POOL_SIZE = 137
# NativeSolPool: Pool layout followed by token_mint(32)
NATIVE_POOL_SIZE = 169

# SPL token account: mint(32) + owner(32) + amount(8) + ...
TOKEN_ACCOUNT_SIZE = 165
TOKEN_ACCOUNT_AMOUNT_OFFSET = 64
MINT_SIZE = 82

# The dispatcher reads exactly two hops for MultihopSwap
MULTIHOP_HOP_COUNT = 2
