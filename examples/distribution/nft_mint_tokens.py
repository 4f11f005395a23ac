from nftdrop.client import NFTDropTestnetClient
from nftdrop.config import Account, MINT_BUDGET
from nftdrop.distribution.driver import distributeFromFile

USER_ACCOUNT = Account(addr="", sk="")

APP_ID = 0
TOKEN_NUM = "1"

# init nftdrop client with the signing account
client = NFTDropTestnetClient(account=USER_ACCOUNT)
contract = client.contract(APP_ID)

run = distributeFromFile(contract, APP_ID, "accounts.json", TOKEN_NUM, budget=MINT_BUDGET)
print(f"minted:  {run.minted}")
print(f"skipped: {run.skipped}")
print(f"failed:  {run.failed}")
