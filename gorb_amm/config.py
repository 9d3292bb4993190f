"""Client configuration."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed
from solders.pubkey import Pubkey

from .program.codec import DEFAULT_DISCRIMINATORS, PROGRAM_BUILDS, DiscriminatorTable
from .program.constants import (
    ASSOCIATED_TOKEN_PROGRAM_ID,
    DEFAULT_RPC_URL,
    DEFAULT_WS_URL,
    PROGRAM_ID,
    TOKEN_PROGRAM_ID,
)

ENV_PREFIX = "GORB_AMM_"


@dataclass
class ClientConfig:
    """Where and how the client talks to the AMM program."""

    rpc_url: str = DEFAULT_RPC_URL
    ws_url: str = DEFAULT_WS_URL
    commitment: Commitment = Confirmed
    program_id: Pubkey = PROGRAM_ID
    token_program_id: Pubkey = TOKEN_PROGRAM_ID
    associated_token_program_id: Pubkey = ASSOCIATED_TOKEN_PROGRAM_ID
    discriminators: DiscriminatorTable = DEFAULT_DISCRIMINATORS
    confirm_timeout_secs: float = 30.0
    confirm_poll_interval_secs: float = 1.0
    keypair_path: Optional[str] = None

    @classmethod
    def gorbchain(cls) -> "ClientConfig":
        """GorbChain mainnet defaults targeting the fee-enabled program build."""
        return cls()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Build a config from ``GORB_AMM_*`` variables over the GorbChain defaults.

        Recognised variables: RPC_URL, WS_URL, COMMITMENT, PROGRAM_ID,
        TOKEN_PROGRAM_ID, ASSOCIATED_TOKEN_PROGRAM_ID, PROGRAM_BUILD
        ("fee" or "query"), CONFIRM_TIMEOUT_SECS, CONFIRM_POLL_INTERVAL_SECS
        and KEYPAIR_PATH.

        Raises:
            ValueError: If PROGRAM_BUILD names an unknown build or a value
                cannot be parsed
        """
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            return env.get(ENV_PREFIX + name) or None

        config = cls.gorbchain()

        if get("RPC_URL"):
            config.rpc_url = get("RPC_URL")
        if get("WS_URL"):
            config.ws_url = get("WS_URL")
        if get("COMMITMENT"):
            config.commitment = Commitment(get("COMMITMENT"))
        if get("PROGRAM_ID"):
            config.program_id = Pubkey.from_string(get("PROGRAM_ID"))
        if get("TOKEN_PROGRAM_ID"):
            config.token_program_id = Pubkey.from_string(get("TOKEN_PROGRAM_ID"))
        if get("ASSOCIATED_TOKEN_PROGRAM_ID"):
            config.associated_token_program_id = Pubkey.from_string(
                get("ASSOCIATED_TOKEN_PROGRAM_ID")
            )
        if get("PROGRAM_BUILD"):
            config.with_program_build(get("PROGRAM_BUILD"))
        if get("CONFIRM_TIMEOUT_SECS"):
            config.confirm_timeout_secs = float(get("CONFIRM_TIMEOUT_SECS"))
        if get("CONFIRM_POLL_INTERVAL_SECS"):
            config.confirm_poll_interval_secs = float(get("CONFIRM_POLL_INTERVAL_SECS"))
        if get("KEYPAIR_PATH"):
            config.keypair_path = get("KEYPAIR_PATH")

        return config

    def with_rpc_url(self, rpc_url: str) -> "ClientConfig":
        """Set the RPC endpoint."""
        self.rpc_url = rpc_url
        return self

    def with_program_id(self, program_id: Pubkey) -> "ClientConfig":
        """Target a different deployment of the program."""
        self.program_id = program_id
        return self

    def with_program_build(self, name: str) -> "ClientConfig":
        """Select the discriminator table of a named program build."""
        try:
            self.discriminators = PROGRAM_BUILDS[name]
        except KeyError:
            raise ValueError(
                f"Unknown program build '{name}' (expected one of {sorted(PROGRAM_BUILDS)})"
            ) from None
        return self

    def with_confirm_timeout(self, seconds: float) -> "ClientConfig":
        """Set how long submission waits for confirmation."""
        self.confirm_timeout_secs = seconds
        return self

    def connect(self) -> AsyncClient:
        """Open an RPC connection for this config."""
        return AsyncClient(self.rpc_url, commitment=self.commitment)
