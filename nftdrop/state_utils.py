from typing import Optional
from algosdk.error import AlgodHTTPError

HTTP_NOT_FOUND = 404


def get_created_apps(algod, address):
    """Get ids of the applications created by a given account.

    :param algod: algod client
    :type algod: :class:`AlgodClient`
    :param address: creator address
    :type address: str
    :return: created application ids, oldest first
    :rtype: list[int]
    """

    account_info = algod.account_info(address, exclude="assets,apps-local-state")
    return sorted(app["id"] for app in account_info.get("created-apps", []))


def get_newest_created_app(algod, address) -> Optional[int]:
    """Get the most recently created application of a given account, if any.

    :param algod: algod client
    :type algod: :class:`AlgodClient`
    :param address: creator address
    :type address: str
    :return: application id or None
    :rtype: int, optional
    """

    app_ids = get_created_apps(algod, address)
    return app_ids[-1] if app_ids else None


def has_deployed_code(algod, app_id):
    """Whether an application exists and carries an approval program.

    :param algod: algod client
    :type algod: :class:`AlgodClient`
    :param app_id: app id
    :type app_id: int
    :return: True if the application has code deployed
    :rtype: bool
    """

    try:
        application_info = algod.application_info(app_id)
    except AlgodHTTPError as e:
        if e.code == HTTP_NOT_FOUND:
            return False
        raise
    return bool(application_info.get("params", {}).get("approval-program"))
