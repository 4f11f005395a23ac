import json
import logging
from typing import Iterable
from ..config import DEFAULT_PER_TX, MINT_BUDGET
from ..contract import CallResult, ContractClient
from ..errors import ConfigurationError
from .datatypes import (
    AccountId,
    DistributionRun,
    MintOutcome,
    MintStatus,
    TokenClass,
)
from .ownership import checkOwnership, shouldSkip
from .validator import filterAccounts

logger = logging.getLogger(__name__)

MINT_ONE = "nft_mint_one"
MINT_TWO = "nft_mint_two"


def mintMethodFor(tokenNum: TokenClass) -> str:
    return MINT_ONE if tokenNum == "1" else MINT_TWO


def mintToken(
    contract: ContractClient,
    accountId: AccountId,
    tokenNum: TokenClass,
    budget: int = MINT_BUDGET,
) -> CallResult:
    """
    Mints one token of the given class to an account. Never attaches a deposit.
    """
    return contract.call(mintMethodFor(tokenNum), {"token_owner_id": accountId}, budget, 0)


def processAccount(
    contract: ContractClient,
    accountId: AccountId,
    tokenNum: TokenClass,
    budget: int,
    skipOnQueryFailure: bool = True,
) -> MintOutcome:
    ownership = checkOwnership(contract, accountId, tokenNum)
    if shouldSkip(ownership, skipOnQueryFailure):
        return MintOutcome(accountId, MintStatus.SKIPPED, ownership.value)

    try:
        result = mintToken(contract, accountId, tokenNum, budget)
    except Exception as e:
        logger.debug("Mint for %s failed: %s", accountId, e)
        logger.info("Failed %s", accountId)
        return MintOutcome(accountId, MintStatus.FAILED, str(e))

    logger.info("Added %s", accountId)
    return MintOutcome(accountId, MintStatus.MINTED, result.txId)


def runDistribution(
    contract: ContractClient,
    contractId: int,
    accounts: Iterable[AccountId],
    tokenNum: TokenClass,
    budget: int = MINT_BUDGET,
    amountPerTx: int = DEFAULT_PER_TX,
    skipOnQueryFailure: bool = True,
) -> DistributionRun:
    """
    Mints a token of the given class to every account, strictly one account at a time and in order.
    A failed mint is recorded and the run moves on; re-running the same list retries failures
    and skips accounts that already hold the token.

    @param contract - contract client to mint through
    @param contractId - application id of the contract
    @param accounts - validated account ids
    @param tokenNum - token class, "1" mints with nft_mint_one and anything else with nft_mint_two
    @param budget - opcode budget attached to each mint call
    @param amountPerTx - accepted for pacing, every mint is still its own transaction
    @param skipOnQueryFailure - treat accounts whose tokens could not be read as already owning the token
    @returns DistributionRun one outcome per account in input order
    """
    run = DistributionRun(contractId, tokenNum, amountPerTx)
    logger.debug("Minting %s with %s (amount per tx %d)", tokenNum, mintMethodFor(tokenNum), amountPerTx)
    for accountId in accounts:
        run.record(processAccount(contract, accountId, tokenNum, budget, skipOnQueryFailure))
    return run


def loadAccountIds(path: str) -> list[str]:
    """
    Reads the JSON array of raw account ids from the input file.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            rawAccountIds = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Could not read account ids from {path}: {e}") from e
    if not isinstance(rawAccountIds, list) or not all(isinstance(s, str) for s in rawAccountIds):
        raise ConfigurationError(f"{path} must contain a JSON array of strings")
    return rawAccountIds


def distributeFromFile(
    contract: ContractClient,
    contractId: int,
    path: str,
    tokenNum: TokenClass,
    budget: int = MINT_BUDGET,
    amountPerTx: int = DEFAULT_PER_TX,
) -> DistributionRun:
    accounts = filterAccounts(loadAccountIds(path))
    return runDistribution(contract, contractId, accounts.valid, tokenNum, budget, amountPerTx)
