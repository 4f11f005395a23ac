from typing import Optional
from algosdk.v2client.algod import AlgodClient
from .config import ALGOD_ADDRESSES, Account, Network, OpUp, Settings
from .contract import AlgodContractClient


class NFTDropClient:
    def __init__(self,
                 algod_client: AlgodClient,
                 network: int,
                 account: Optional[Account] = None,
                 opup: Optional[OpUp] = None):
        self.algod = algod_client
        self.network = network
        self.account = account
        self.opup = opup

    def contract(self, appId: int) -> AlgodContractClient:
        """Contract client for the NFT application with the given id"""
        return AlgodContractClient(self.algod, appId, self.account, self.opup)


class NFTDropTestnetClient(NFTDropClient):
    def __init__(self, algod_client=None, account=None, opup=None):
        if algod_client is None:
            algod_client = AlgodClient("", ALGOD_ADDRESSES[Network.TESTNET])
        super().__init__(
                algod_client,
                network=Network.TESTNET,
                account=account,
                opup=opup,
        )


class NFTDropMainnetClient(NFTDropClient):
    def __init__(self, algod_client=None, account=None, opup=None):
        if algod_client is None:
            algod_client = AlgodClient("", ALGOD_ADDRESSES[Network.MAINNET])
        super().__init__(
                algod_client,
                network=Network.MAINNET,
                account=account,
                opup=opup,
        )


def clientFromSettings(settings: Settings, account: Optional[Account] = None) -> NFTDropClient:
    algod = AlgodClient(settings.algodToken, settings.algodAddress)
    if settings.network == Network.MAINNET:
        return NFTDropMainnetClient(algod, account, settings.opup)
    return NFTDropTestnetClient(algod, account, settings.opup)
