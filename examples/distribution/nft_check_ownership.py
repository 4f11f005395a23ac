from nftdrop.client import NFTDropTestnetClient
from nftdrop.distribution.driver import loadAccountIds
from nftdrop.distribution.ownership import checkOwnership
from nftdrop.distribution.validator import filterAccounts

APP_ID = 0
TOKEN_NUM = "1"

# init nftdrop client, views need no account
client = NFTDropTestnetClient()
contract = client.contract(APP_ID)

accounts = filterAccounts(loadAccountIds("accounts.json"))
print(f"invalid: {accounts.invalid}")

for account_id in accounts.valid:
    ownership = checkOwnership(contract, account_id, TOKEN_NUM)
    print(f"{account_id:30} {ownership.value}")
