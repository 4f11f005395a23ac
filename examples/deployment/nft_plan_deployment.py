import json
from nftdrop.client import NFTDropTestnetClient
from nftdrop.config import Account
from nftdrop.deployment.metadata import initialArgs
from nftdrop.deployment.sequencer import (
    loadContractCode,
    planDeployment,
    submitDeploymentPlan,
)

USER_ACCOUNT = Account(addr="", sk="")

client = NFTDropTestnetClient(account=USER_ACCOUNT)

code = loadContractCode(
    client.algod,
    "build/non_fungible_token_approval.teal",
    "build/non_fungible_token_clear.teal",
)
plan = planDeployment(client.algod, USER_ACCOUNT.addr, code, initialArgs(USER_ACCOUNT.addr))
print(f"target: {plan.target}")
if plan.initAction is not None:
    print(f"initializing with: \n{json.dumps(plan.initAction.args, indent=2)}")

proceed_ask = input('Proceed (y/N)?: ').lower()
if proceed_ask in ['y', 'yes']:
    res = submitDeploymentPlan(client.algod, plan, USER_ACCOUNT, client.network)
    print(res.explorerUrl)
    print(res.detail if not res.succeeded else f"deployed {res.appId}")
