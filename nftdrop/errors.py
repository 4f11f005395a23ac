class NFTDropError(Exception):
    """Base class for nftdrop errors"""


class ConfigurationError(NFTDropError):
    """Missing or invalid configuration, raised before any remote call"""


class ContractError(NFTDropError):
    """A view or call against the contract failed"""

    def __init__(self, method: str, message: str):
        super().__init__(f"{method}: {message}")
        self.method = method
