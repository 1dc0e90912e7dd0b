class PrizeTableError(Exception):
    pass


class InvalidPrizeTableError(PrizeTableError):
    pass


class UnknownPayoutOutcomeError(PrizeTableError):
    pass
