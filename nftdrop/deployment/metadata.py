from .datatypes import InitialMetadata

DEFAULT_METADATA = InitialMetadata(
    uri="https://bafybeidf5lepzvbtgoo2qrpzkqj5deukuaqxua4u5m5nfy2cryomlrqrwu.ipfs.dweb.link/",
    name="MR. BROWN SPECIAL",
    symbol="MRBRNSPL",
)


def initialArgs(ownerId: str, metadata: InitialMetadata = DEFAULT_METADATA) -> dict:
    return {"owner_id": ownerId, "metadata": metadata.toJson()}
