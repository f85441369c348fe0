"""Text menu driving the ledger service."""

from __future__ import annotations

import sys
from decimal import Decimal, InvalidOperation
from typing import Callable, TextIO

from pix_bank.cpf import normalize_cpf
from pix_bank.logging import get_logger
from pix_bank.models import AccountKind, SpecialAccount
from pix_bank.store.ledger import LedgerService, OperationResult

logger = get_logger(__name__)

MENU = """
- BANK OPERATIONS MENU -
[1] - Open Checking Account
[2] - Open Savings Account
[3] - Open Special Account
[4] - Deposit
[5] - Withdraw
[6] - Apply Savings Correction
[7] - Register Pix Key
[8] - Send Pix
[9] - Account Statement
[10] - List Accounts
[0] - Exit"""


class InputError(ValueError):
    """Raised when typed input cannot be parsed."""


class _EndOfInput(Exception):
    pass


class ConsoleApp:
    """Numbered-menu loop over a ``LedgerService``.

    Parameters
    ----------
    service : LedgerService
        Ledger the menu operates on.
    input_stream, output_stream : TextIO
        Where prompts are read from and written to.
    on_exit : Callable[[LedgerService], None] | None
        Called once when the loop ends, e.g. to save a snapshot.
    """

    def __init__(
        self,
        service: LedgerService,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
        on_exit: Callable[[LedgerService], None] | None = None,
    ) -> None:
        self.service = service
        self.input = input_stream or sys.stdin
        self.output = output_stream or sys.stdout
        self.on_exit = on_exit
        self._actions: dict[int, Callable[[], None]] = {
            1: lambda: self._open_account(AccountKind.CHECKING),
            2: lambda: self._open_account(AccountKind.SAVINGS),
            3: lambda: self._open_account(AccountKind.SPECIAL),
            4: self._deposit,
            5: self._withdraw,
            6: self._apply_correction,
            7: self._register_pix_key,
            8: self._send_pix,
            9: self._statement,
            10: self._list_accounts,
        }

    def run(self) -> None:
        """Serve menu choices until the user exits or input ends."""
        try:
            while True:
                self._print(MENU)
                try:
                    choice = self._read_int("\nEnter option: ")
                    if choice == 0:
                        break
                    action = self._actions.get(choice)
                    if action is None:
                        self._print("Invalid option. Try again.")
                        continue
                    action()
                except InputError as exc:
                    self._print(f"\nError: {exc}")
        except _EndOfInput:
            logger.debug("Input closed, leaving menu")
        finally:
            if self.on_exit is not None:
                self.on_exit(self.service)
        self._print("\n- Thank you for banking with us.")

    # Menu actions

    def _open_account(self, kind: AccountKind) -> None:
        name = self._read_text("\n- Owner name: ")
        cpf = normalize_cpf(self._read_text("- Owner CPF: "))
        result = self.service.create_account(kind, name, cpf)
        if self._report_error(result):
            return
        account = result.value
        line = f"\n- {kind.label} account opened: #{account.account_number}"
        if isinstance(account, SpecialAccount):
            line += f" | Overdraft limit: {account.overdraft_limit:.2f}"
        self._print(line)

    def _deposit(self) -> None:
        number = self._read_int("\n- Account number: ")
        amount = self._read_decimal("- Deposit amount: ")
        result = self.service.deposit(number, amount)
        if not self._report_error(result):
            self._print(f"- Deposit of R${amount:.2f} completed.")

    def _withdraw(self) -> None:
        number = self._read_int("\n- Account number: ")
        amount = self._read_decimal("- Withdrawal amount: ")
        result = self.service.withdraw(number, amount)
        if not self._report_error(result):
            self._print(f"- Withdrawal of R${amount:.2f} completed.")

    def _apply_correction(self) -> None:
        rate = self._read_decimal("\n- Correction rate (%): ")
        result = self.service.apply_correction_to_all_savings(rate)
        if not self._report_error(result):
            self._print(f"- Correction of {rate}% applied to {len(result.value)} savings account(s).")

    def _register_pix_key(self) -> None:
        cpf = normalize_cpf(self._read_text("\n- CPF to register: "))
        result = self.service.register_pix_key(cpf)
        if not self._report_error(result):
            self._print("- Pix key registered.")

    def _send_pix(self) -> None:
        sender = normalize_cpf(self._read_text("\n- Sender CPF: "))
        recipient = normalize_cpf(self._read_text("- Recipient CPF: "))
        amount = self._read_decimal("- Amount in R$: ")
        result = self.service.transfer_pix(sender, recipient, amount)
        if not self._report_error(result):
            self._print(f"- Pix of R${amount:.2f} sent from {sender} to {recipient}.")

    def _statement(self) -> None:
        number = self._read_int("\n- Account number: ")
        result = self.service.statement(number)
        if self._report_error(result):
            return
        if not result.value:
            self._print("\n- No transactions in this account's history.")
            return
        self._print("\n---- Transaction History ----")
        self._print("\n\n".join(str(t) for t in result.value))

    def _list_accounts(self) -> None:
        accounts = self.service.list_accounts()
        if not accounts:
            self._print("\n- No accounts registered.")
            return
        self._print("")
        for account in accounts:
            self._print(str(account))

    # Input/output helpers

    def _report_error(self, result: OperationResult) -> bool:
        if result.ok:
            return False
        self._print(f"\nError: {result.message}")
        return True

    def _print(self, text: str) -> None:
        print(text, file=self.output)

    def _read_line(self, prompt: str) -> str:
        self.output.write(prompt)
        self.output.flush()
        line = self.input.readline()
        if not line:
            raise _EndOfInput
        return line.strip()

    def _read_text(self, prompt: str) -> str:
        text = self._read_line(prompt)
        if not text:
            raise InputError("a value is required.")
        return text

    def _read_int(self, prompt: str) -> int:
        raw = self._read_line(prompt)
        try:
            return int(raw)
        except ValueError:
            raise InputError("invalid input, please enter a whole number.") from None

    def _read_decimal(self, prompt: str) -> Decimal:
        raw = self._read_line(prompt).replace(",", ".")
        try:
            value = Decimal(raw)
        except InvalidOperation:
            raise InputError("invalid input, please enter a number.") from None
        if not value.is_finite():
            raise InputError("invalid input, please enter a number.")
        return value
