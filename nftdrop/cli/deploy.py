import json
import sys
from ..client import clientFromSettings
from ..config import (
    DEFAULT_APPROVAL_PATH,
    DEFAULT_CLEAR_PATH,
    loadAccount,
    loadSettings,
    parseAppId,
)
from ..deployment.metadata import initialArgs
from ..deployment.sequencer import loadContractCode, planDeployment, submitDeploymentPlan
from ..errors import ConfigurationError
from .common import UsageParser, configureLogging, fail


def buildParser() -> UsageParser:
    parser = UsageParser(
        prog="nftdrop-deploy",
        description="Deploy the NFT contract, initializing it when nothing is deployed yet.",
    )
    parser.add_argument(
        "contract_id",
        nargs="?",
        help="application id to deploy to (default: newest application created by the account)",
    )
    parser.add_argument("--approval", default=DEFAULT_APPROVAL_PATH, help="approval program TEAL source")
    parser.add_argument("--clear", default=DEFAULT_CLEAR_PATH, help="clear program TEAL source")
    parser.add_argument("--owner", help="owner id passed to the initialize call (default: account address)")
    return parser


def main(argv=None) -> int:
    args = buildParser().parse_args(argv)
    try:
        settings = loadSettings()
        configureLogging(settings.logLevel)
        account = loadAccount(settings)
        appId = parseAppId(args.contract_id) if args.contract_id is not None else None
    except ConfigurationError as e:
        return fail(str(e))

    client = clientFromSettings(settings, account)
    try:
        code = loadContractCode(client.algod, args.approval, args.clear)
    except OSError as e:
        return fail(f"Could not read contract programs: {e}")

    plan = planDeployment(
        client.algod,
        account.addr,
        code,
        initialArgs(args.owner or account.addr),
        appId,
    )
    if plan.initAction is not None:
        print(f"initializing with: \n{json.dumps(plan.initAction.args, indent=2)}")

    res = submitDeploymentPlan(client.algod, plan, account, client.network, client.opup)
    print(res.explorerUrl)
    print(f"Txid {res.txId}")
    if res.succeeded:
        print(f"deployed {res.appId}")
        return 0
    print(res.detail)
    return 1


if __name__ == "__main__":
    sys.exit(main())
