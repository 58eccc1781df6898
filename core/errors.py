class GameError(Exception):
    def __init__(self, code: str, msg: str) -> None:
        super().__init__(msg)
        self.code = code
        self.msg = msg


class InsufficientBalanceError(GameError):
    def __init__(self, balance: int, bet: int) -> None:
        super().__init__("INSUFFICIENT_BALANCE", "Insufficient balance!")
        self.balance = balance
        self.bet = bet
