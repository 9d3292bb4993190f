"""Custom exceptions for the GorbChain AMM program module."""


class GorbAmmError(Exception):
    """Base exception for all gorb-amm SDK errors."""

    pass


class DerivationFailure(GorbAmmError):
    """Raised when no bump seed yields an off-curve program address."""

    def __init__(self, seeds: list, program_id: str):
        self.seeds = seeds
        self.program_id = program_id
        super().__init__(
            f"Unable to derive program address for seeds {seeds!r} "
            f"under program {program_id}"
        )


class MalformedPayload(GorbAmmError):
    """Raised when instruction data does not match its discriminator's layout."""

    def __init__(self, message: str):
        super().__init__(f"Malformed instruction payload: {message}")


class UnsupportedInstructionError(GorbAmmError):
    """Raised when an instruction kind is not part of the targeted program build."""

    def __init__(self, kind: str, table: str):
        self.kind = kind
        self.table = table
        super().__init__(f"Instruction {kind} is not supported by program build '{table}'")


class DiscriminatorCollisionError(GorbAmmError):
    """Raised when two instruction kinds claim the same discriminator byte."""

    def __init__(self, discriminator: int, first: str, second: str):
        self.discriminator = discriminator
        self.first = first
        self.second = second
        super().__init__(
            f"Discriminator {discriminator} assigned to both {first} and {second}"
        )


class MissingKeyError(GorbAmmError):
    """Raised when a workflow step needs a key no earlier step produced."""

    def __init__(self, key: str, step: str = ""):
        self.key = key
        self.step = step
        where = f" (last step: {step})" if step else ""
        super().__init__(f"Workflow key not found: {key}{where}")


class SubmissionFailure(GorbAmmError):
    """Raised when the ledger transport rejects or fails to confirm a request.

    The transport's own error is kept verbatim in ``cause``.
    """

    def __init__(self, message: str, signature: str = "", cause: object = None):
        self.signature = signature
        self.cause = cause
        prefix = f"Transaction {signature} failed" if signature else "Submission failed"
        super().__init__(f"{prefix}: {message}")


class AccountNotFoundError(GorbAmmError):
    """Raised when an account is not found on-chain."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Account not found: {address}")


class InvalidAccountDataError(GorbAmmError):
    """Raised when account data cannot be deserialized."""

    def __init__(self, message: str):
        super().__init__(f"Invalid account data: {message}")


class MissingSignerError(GorbAmmError):
    """Raised when a required signer has no keypair supplied."""

    def __init__(self, signer: str):
        self.signer = signer
        super().__init__(f"No keypair supplied for required signer: {signer}")
