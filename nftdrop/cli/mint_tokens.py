import logging
import sys
from ..client import clientFromSettings
from ..config import DEFAULT_PER_TX, MINT_BUDGET, loadAccount, loadSettings, parseAppId
from ..distribution.datatypes import MintStatus
from ..distribution.driver import distributeFromFile
from ..errors import ConfigurationError
from .common import UsageParser, configureLogging, fail

logger = logging.getLogger(__name__)


def buildParser() -> UsageParser:
    parser = UsageParser(
        prog="nftdrop-mint",
        description="Mint a token of one class to every account listed in a JSON file.",
    )
    parser.add_argument("input_file", help="JSON array of account ids")
    parser.add_argument("contract_id", help="application id of the NFT contract")
    parser.add_argument("token_num", help='token class, "1" mints nft_mint_one, anything else nft_mint_two')
    parser.add_argument(
        "amount_per_tx",
        nargs="?",
        type=int,
        default=DEFAULT_PER_TX,
        help=f"amount per tx (default {DEFAULT_PER_TX})",
    )
    return parser


def main(argv=None) -> int:
    args = buildParser().parse_args(argv)
    try:
        settings = loadSettings()
        configureLogging(settings.logLevel)
        appId = parseAppId(args.contract_id)
        account = loadAccount(settings)
    except ConfigurationError as e:
        return fail(str(e))

    contract = clientFromSettings(settings, account).contract(appId)
    try:
        run = distributeFromFile(
            contract,
            appId,
            args.input_file,
            args.token_num,
            budget=MINT_BUDGET,
            amountPerTx=args.amount_per_tx,
        )
    except ConfigurationError as e:
        return fail(str(e))

    counts = run.summary()
    logger.info(
        "minted=%d skipped=%d failed=%d",
        counts[MintStatus.MINTED],
        counts[MintStatus.SKIPPED],
        counts[MintStatus.FAILED],
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
