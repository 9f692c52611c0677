"""
Deposit slot of the ATM.
"""


class DepositSlot:
    """
    Reports whether a deposit envelope was received.

    There is no physical sensor in the simulation, so every deposit is
    accepted. Substitute a subclass to simulate a missing envelope.
    """

    def accept(self) -> bool:
        return True
