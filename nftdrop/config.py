import os
from dataclasses import dataclass
from typing import Optional
from algosdk import account, mnemonic
from dotenv import find_dotenv, load_dotenv
from .errors import ConfigurationError

# CONSTANTS

DEFAULT_PER_TX = 200

# opcode budget attached to every mint call
MINT_BUDGET = 2_800

# opcode budget attached to the one-time initialize call
INIT_BUDGET = 7_000

# opcode budget available to a single application call
APP_CALL_BUDGET = 700

# opcode budget added by each inner opup transaction
INNER_TXN_BUDGET = 689

MIN_TXN_FEE = 1000

CONFIRMATION_ROUNDS = 4

TOKENS_PAGE_SIZE = 50

# upper bound on view calls made to list the tokens of one account
MAX_TOKEN_PAGES = 200

DEFAULT_APPROVAL_PATH = os.path.join("build", "non_fungible_token_approval.teal")
DEFAULT_CLEAR_PATH = os.path.join("build", "non_fungible_token_clear.teal")

# ENUMS


class Network:
    """Enum specifying the network"""
    MAINNET = 0
    TESTNET = 1


NETWORK_NAMES = {Network.MAINNET: "mainnet", Network.TESTNET: "testnet"}

ALGOD_ADDRESSES = {
    Network.MAINNET: "https://mainnet-api.algonode.cloud",
    Network.TESTNET: "https://testnet-api.algonode.cloud",
}

EXPLORER_URL = "https://lora.algokit.io"


@dataclass(frozen=True)
class Account:
    addr: str
    sk: str


@dataclass(frozen=True)
class OpUp:
    callerAppId: int
    baseAppId: int


@dataclass(frozen=True)
class Settings:
    network: int
    algodAddress: str
    algodToken: str
    mnemonic: Optional[str]
    opup: Optional[OpUp]
    logLevel: str


def parseNetwork(name: str) -> int:
    for network, networkName in NETWORK_NAMES.items():
        if networkName == name.strip().lower():
            return network
    raise ConfigurationError(f"Unknown network {name!r}, expected testnet or mainnet")


def parseAppId(value: str) -> int:
    """
    Parses an application id given on the command line or in the environment.
    """
    try:
        appId = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid application id {value!r}") from None
    if appId < 0:
        raise ConfigurationError(f"Invalid application id {value!r}")
    return appId


def loadSettings(environ=None, dotenv: bool = True) -> Settings:
    """
    Resolves settings from the environment, optionally loading a .env file first.

    @param environ - mapping to read from (defaults to os.environ)
    @param dotenv - whether to load a .env file into os.environ beforehand
    @returns Settings resolved settings
    """
    if environ is None:
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    network = parseNetwork(environ.get("NFTDROP_NETWORK", "testnet"))

    opup = None
    callerAppId = environ.get("NFTDROP_OPUP_CALLER_APP_ID")
    baseAppId = environ.get("NFTDROP_OPUP_BASE_APP_ID")
    if callerAppId and baseAppId:
        opup = OpUp(parseAppId(callerAppId), parseAppId(baseAppId))
    elif callerAppId or baseAppId:
        raise ConfigurationError(
            "NFTDROP_OPUP_CALLER_APP_ID and NFTDROP_OPUP_BASE_APP_ID must be set together"
        )

    return Settings(
        network=network,
        algodAddress=environ.get("NFTDROP_ALGOD_ADDRESS") or ALGOD_ADDRESSES[network],
        algodToken=environ.get("NFTDROP_ALGOD_TOKEN", ""),
        mnemonic=environ.get("NFTDROP_MNEMONIC") or None,
        opup=opup,
        logLevel=environ.get("NFTDROP_LOG_LEVEL", "INFO").upper(),
    )


def loadAccount(settings: Settings) -> Account:
    """
    Derives the signing account from the configured mnemonic.
    """
    if not settings.mnemonic:
        raise ConfigurationError("Must provide an account: set NFTDROP_MNEMONIC")
    # strip quotes left over from .env files
    phrase = settings.mnemonic.strip().strip('"').strip("'")
    try:
        sk = mnemonic.to_private_key(phrase)
    except Exception as e:
        raise ConfigurationError(f"Invalid NFTDROP_MNEMONIC: {e}") from e
    return Account(account.address_from_private_key(sk), sk)
