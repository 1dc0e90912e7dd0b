class BalanceLedgerError(Exception):
    pass


class LedgerUserNotFoundError(BalanceLedgerError):
    pass
